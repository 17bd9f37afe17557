from __future__ import annotations

import logging
from typing import Sequence

from .model import Tag
from .timestamp import is_timestamp
from .tokens import CLOSERS, OPENERS, PAIRS, Token, serialize, slice_at_character, tokenize, trim

logger = logging.getLogger(__name__)


def extract_tags(line: str) -> list[Tag]:
    """
    Collect [name:value] and <name:value> pairs from a line.

    "[ar: Artist][offset: 750]" -> [Tag("ar", "Artist"), Tag("offset", "750")]
    "[01:53.00] Si de mí"       -> [Tag("time", "01:53.00")]

    Text outside brackets and unterminated brackets are not reported.
    """
    candidates: list[str] = []
    building: list[str] = []
    in_tag = False

    for c in line:
        if c in OPENERS:
            in_tag = True
        elif c in CLOSERS:
            if building:
                candidates.append("".join(building))
            building = []
            in_tag = False
        elif in_tag:
            building.append(c)

    tags: list[Tag] = []
    for content in candidates:
        # timestamps are left intact for the offset corrector
        if is_timestamp(content):
            tags.append(Tag(name="time", value=content))
            continue
        sliced = slice_at_character(content, ":")
        tags.append(Tag(name=trim(sliced.name), value=trim(sliced.value)))
    return tags


def _enclosing_span(tokens: Sequence[str], index: int) -> tuple[int, int] | None:
    opening: int | None = None
    for i in range(index, -1, -1):
        if tokens[i] in OPENERS:
            opening = i
            break
        if tokens[i] in CLOSERS:
            return None
    if opening is None:
        return None

    closer = PAIRS[tokens[opening]]
    for j in range(index + 1, len(tokens)):
        if tokens[j] == closer:
            return opening, j
        if tokens[j] in OPENERS or tokens[j] in CLOSERS:
            return None
    return None


def _key_in_name(tokens: Sequence[str], opening: int, closing: int, key: str) -> bool:
    # "[ti: A title]" must not match key "title": only the part before ":" counts
    content = serialize(tokens[opening + 1 : closing], " ", True)
    name = content.split(":", 1)[0]
    return key in name


def _pop_once(tokens: list[Token], key: str) -> list[Token] | None:
    for index, token in enumerate(tokens):
        if key not in token:
            continue
        span = _enclosing_span(tokens, index)
        if span is None:
            continue
        opening, closing = span
        if not _key_in_name(tokens, opening, closing, key):
            logger.debug("'%s' only found in a tag value, skipping", key)
            continue

        rest = tokens[closing + 1 :]
        if rest:
            # spaced if either side of the removed tag was
            rest[0] = Token(rest[0], rest[0].glued and tokens[opening].glued)
        return tokens[:opening] + rest
    return None


def pop_tag(line: str, key: str) -> str:
    """
    Remove every bracketed tag whose name contains `key`, oldest first.

    "[ti: Ella][ar:Junior H] [00:00.00] Y una bolsita", "ti"
        -> "[ar:Junior H] [00:00.00] Y una bolsita"

    Tags without a matching closing bracket, and keys that only show up in a
    tag's value, are left alone. An absent key returns the line unchanged.
    """
    tokens = tokenize(line, True)
    popped = False
    while True:
        remaining = _pop_once(tokens, key)
        if remaining is None:
            break
        tokens = remaining
        popped = True

    if not popped:
        return line
    return serialize(tokens, " ", True)
