from __future__ import annotations

import logging
import os
from pathlib import Path
import shutil
from typing import Iterable

from syrinc.config import AppConfig

from .process import process_lyrics
from .tokens import join_lines

logger = logging.getLogger(__name__)

_UTF8_BOM = "\ufeff"
_WIDE_BOMS = (
    b"\x00\x00\xfe\xff",  # UTF-32 BE
    b"\xff\xfe\x00\x00",  # UTF-32 LE
    b"\xfe\xff",  # UTF-16 BE
    b"\xff\xfe",  # UTF-16 LE
)


class UnsupportedEncoding(ValueError):
    pass


def looks_like_utf16_or_utf32(data: bytes) -> bool:
    return data.startswith(_WIDE_BOMS)


def split_lines(text: str) -> list[str]:
    """
    Normalize a block of lyrics: drop a UTF-8 BOM and carriage returns, split on \\n.
    """
    if text.startswith(_UTF8_BOM):
        text = text[len(_UTF8_BOM) :]
    text = text.replace("\r", "")
    if not text:
        return []
    lines = text.split("\n")
    # a trailing newline does not start another line
    if lines[-1] == "":
        lines.pop()
    return lines


def read_lrc_lines(path: Path) -> list[str]:
    # bytes that are not UTF-8 survive as surrogates and are written back as-is
    data = path.read_bytes()
    if looks_like_utf16_or_utf32(data):
        raise UnsupportedEncoding(f"{path} appears to be UTF-16/32, LRC must be UTF-8")
    return split_lines(data.decode("utf-8", errors="surrogateescape"))


def process_lyrics_file(path: Path, options: str = "") -> list[str]:
    return process_lyrics(read_lrc_lines(path), options)


def build_temp_name(target: Path, cfg: AppConfig) -> Path:
    # lyrics.lrc -> <tmp>/lyrics-temp.lrc
    return cfg.temp_dir / f"{target.stem}{cfg.temp_suffix}{target.suffix}"


def atomic_write_lines(target: Path, lines: Iterable[str], cfg: AppConfig) -> None:
    """
    Write lines to a temp file first, then swap it in place of the target.
    """
    target.parent.mkdir(parents=True, exist_ok=True)

    tmp = build_temp_name(target, cfg)
    tmp.parent.mkdir(parents=True, exist_ok=True)
    tmp.write_text(join_lines(lines), encoding="utf-8", errors="surrogateescape")
    try:
        move_into_place(tmp, target)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise
    logger.debug("Wrote %s", target)


def move_into_place(tmp: Path, target: Path) -> None:
    try:
        os.replace(tmp, target)
    except OSError:
        # temp dir on another filesystem
        shutil.copyfile(tmp, target)
        tmp.unlink()
