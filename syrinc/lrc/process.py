from __future__ import annotations

from dataclasses import replace
import logging
from typing import Iterable

from .line import correct_line_offset
from .model import PipelineState
from .tags import extract_tags, pop_tag
from .timestamp import is_numeric_only, leading_int
from .tokens import slice_at_character, tokenize, trim

logger = logging.getLogger(__name__)

OFFSET_TAGS = ("offset", "of")
# shortest canonical names, popped in this order
METADATA_TAGS = ("ti", "ar", "al", "au", "le", "by", "re", "ve")


def _parse_offset(value: str) -> int | None:
    if not value or not is_numeric_only(value):
        return None
    return leading_int(value)


def parse_options(options: str) -> PipelineState:
    """
    Read a space separated option string into the initial pipeline state.

    - correctoffset[:ms]  apply [offset] tags to the timestamps that follow them;
                          a numeric value pins the offset and ignores the tags
    - invertoffset        flip the offset sign convention
    - dropmetadata        remove ti/ar/al/au/le/by/re/ve tags
    """
    state = PipelineState()
    for option in tokenize(options):
        pair = slice_at_character(option, ":")
        name, value = trim(pair.name), trim(pair.value)

        if name == "correctoffset":
            state = replace(state, correct_offset=True)
            fixed = _parse_offset(value)
            if fixed is not None:
                state = replace(state, override_offset=True, running_offset=fixed)
        elif name == "invertoffset":
            state = replace(state, invert_offset=True)
        elif name == "dropmetadata":
            state = replace(state, drop_metadata=True)
        else:
            logger.debug("Unknown option '%s', ignoring", option)
    return state


def build_options(offset: int = 0, invert: bool = False, drop_metadata: bool = False) -> str:
    # offset 0 means "use whatever the file declares"
    parts = ["correctoffset" + (f":{offset}" if offset != 0 else "")]
    if invert:
        parts.append("invertoffset")
    if drop_metadata:
        parts.append("dropmetadata")
    return " ".join(parts)


def process_line(line: str, state: PipelineState) -> tuple[str | None, PipelineState]:
    """
    Run every pass over one line. Returns the processed line (None when it ends
    up empty) and the state to carry into the next line.
    """
    declares_offset = False
    for tag in extract_tags(line):
        if tag.name in OFFSET_TAGS:
            declared = _parse_offset(tag.value)
            if declared is not None and not state.override_offset:
                state = replace(state, running_offset=declared)
            declares_offset = True
            break  # first offset wins

    processed = line
    if state.drop_metadata:
        for key in METADATA_TAGS:
            processed = pop_tag(processed, key)

    # the declaration itself never reaches the output
    if declares_offset:
        processed = pop_tag(processed, "of")

    if not trim(processed):
        return None, state

    if state.correct_offset:
        processed = correct_line_offset(processed, state.running_offset, state.invert_offset)
    return processed, state


def process_lyrics(lines: Iterable[str], options: str | PipelineState = "") -> list[str]:
    """
    Process lyric lines in order. An [offset]/[of] tag changes the offset used
    for every line after it until the next declaration.

    >>> process_lyrics(["[offset: 750]", "[00:40.10]She was cryin'"], "correctoffset")
    ["[00:39.35]She was cryin'"]
    """
    state = parse_options(options) if isinstance(options, str) else options
    out: list[str] = []
    for line in lines:
        processed, state = process_line(line, state)
        if processed is not None:
            out.append(processed)
    logger.debug("Processed lyrics: %d lines kept, final offset %d ms", len(out), state.running_offset)
    return out
