from __future__ import annotations

from typing import Iterable, Sequence

from .model import Tag

OPENERS = ("[", "<")
CLOSERS = ("]", ">")
DELIMITERS = OPENERS + CLOSERS
PAIRS = {"[": "]", "<": ">"}


class Token(str):
    """
    A slice of a lyric line.

    `glued` records that no whitespace separated this token from the previous
    one in the source line, so "[00:40.10]She" serializes back without a gap.
    """

    glued: bool

    def __new__(cls, text: str, glued: bool = False) -> "Token":
        token = super().__new__(cls, text)
        token.glued = glued
        return token

    def replaced(self, text: str) -> "Token":
        return Token(text, self.glued)


def is_glued(token: str) -> bool:
    return bool(getattr(token, "glued", False))


def tokenize(line: str, treat_as_tagged_line: bool = False) -> list[Token]:
    """
    Split a line by spaces. In tagged mode every bracket/angle delimiter
    becomes its own single-character token.

    "[00:10.05] This is a lyric line" -> ["[", "00:10.05", "]", "This", "is", "a", "lyric", "line"]
    """
    tokens: list[Token] = []
    start: int | None = None
    spaced = True

    for i, c in enumerate(line):
        if c == " ":
            if start is not None:
                tokens.append(Token(line[start:i], glued=not spaced))
                start = None
            spaced = True
            continue

        if treat_as_tagged_line and c in DELIMITERS:
            if start is not None:
                tokens.append(Token(line[start:i], glued=not spaced))
                start = None
                spaced = False
            tokens.append(Token(c, glued=not spaced))
            spaced = False
            continue

        if start is None:
            start = i

    if start is not None:
        tokens.append(Token(line[start:], glued=not spaced))
    return tokens


def _tight(prev: str, token: str) -> bool:
    return prev in OPENERS or token in CLOSERS or token == ":" or is_glued(token)


def serialize(tokens: Sequence[str], joiner: str = " ", treat_as_tagged_line: bool = False) -> str:
    """
    Join tokens back into a line. Tagged lines keep delimiters tight against
    their contents: ["[", "00:10.00", "]"] -> "[00:10.00]".
    """
    out: list[str] = []
    for i, token in enumerate(tokens):
        if i and not (treat_as_tagged_line and _tight(tokens[i - 1], token)):
            out.append(joiner)
        out.append(token)
    return "".join(out)


def join_lines(lines: Iterable[str]) -> str:
    return serialize(list(lines), "\n")


def trim(text: str) -> str:
    return text.strip()


def slice_at_character(text: str, joint: str = " ") -> Tag:
    """
    "offset: 750" -> Tag("offset", " 750"), "correctoffset" -> Tag("correctoffset", "")
    """
    name, sep, value = text.partition(joint)
    if not sep:
        return Tag(name=text, value="")
    return Tag(name=name, value=value)
