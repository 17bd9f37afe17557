from __future__ import annotations

from .timestamp import Timestamp, is_timestamp
from .tokens import serialize, tokenize


def apply_offset_to_timestamp(text: str, offset_ms: int = 0, invert: bool = False) -> str:
    """
    "00:12.33" with offset -670 -> "00:13.00". Non-timestamps are returned as-is.
    """
    if not is_timestamp(text):
        return text
    return Timestamp.parse(text).apply_offset(offset_ms, invert).to_string()


def correct_line_offset(line: str, offset_ms: int = 0, invert: bool = False) -> str:
    """
    Apply an offset to every timestamp in the line.

    By default a positive offset moves timestamps earlier and a negative one
    delays them, matching how most players read the [offset] tag:

        correct_line_offset("[00:13.75] A lyric", -1250) -> "[00:15.00] A lyric"

    `invert` flips the sign so a positive offset means "show it later".
    The line comes back in canonical form.
    """
    tokens = tokenize(line, True)
    for i, token in enumerate(tokens):
        if is_timestamp(token):
            tokens[i] = token.replaced(apply_offset_to_timestamp(token, offset_ms, invert))
    return serialize(tokens, " ", True)
