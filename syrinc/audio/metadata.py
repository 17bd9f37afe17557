from __future__ import annotations

import json
import logging
from pathlib import Path
import shutil
import subprocess
from typing import Any, Sequence

from syrinc.config import AppConfig
from syrinc.lrc.files import build_temp_name, move_into_place, split_lines
from syrinc.lrc.tokens import join_lines

from .errors import FfmpegNotFound, MetadataReadFailed, MetadataWriteFailed

logger = logging.getLogger(__name__)


def _tail(text: str, lines: int = 5) -> str:
    return "\n".join(text.strip().splitlines()[-lines:])


def _find_tag(tags: dict[str, Any], field: str) -> str | None:
    # containers disagree on case; ID3 lyrics may carry a language suffix ("lyrics-eng")
    wanted = field.lower()
    for key, value in tags.items():
        k = key.lower()
        if k == wanted or k.startswith(wanted + "-"):
            return str(value)
    return None


class AudioMetadata:
    """
    Reads and replaces the lyrics field of an audio container through the
    ffprobe/ffmpeg executables. Streams are copied, never re-encoded.
    """

    def __init__(self, cfg: AppConfig):
        self.cfg = cfg

    def available(self) -> bool:
        return shutil.which(self.cfg.ffmpeg_bin) is not None

    def _run(self, cmd: Sequence[str]) -> subprocess.CompletedProcess[str]:
        logger.debug("Running %s", " ".join(cmd))
        try:
            return subprocess.run(
                list(cmd),
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.cfg.ffmpeg_timeout_s,
                check=False,
            )
        except FileNotFoundError as e:
            raise FfmpegNotFound(
                f"{cmd[0]} needs to be installed and present in $PATH to work with audio files"
            ) from e

    def read_field(self, path: Path, field: str | None = None) -> list[str]:
        field = field or self.cfg.lyrics_field
        cmd = [self.cfg.ffprobe_bin, "-v", "quiet", "-print_format", "json", "-show_format", str(path)]
        try:
            res = self._run(cmd)
        except subprocess.TimeoutExpired as e:
            raise MetadataReadFailed(f"ffprobe timed out reading {path}") from e
        if res.returncode != 0:
            raise MetadataReadFailed(f"ffprobe failed with code {res.returncode}: {_tail(res.stderr)}")

        try:
            data = json.loads(res.stdout or "{}")
        except ValueError as e:
            raise MetadataReadFailed(f"Unreadable ffprobe output for {path}") from e

        tags = data.get("format", {}).get("tags", {}) or {}
        value = _find_tag(tags, field)
        if value is None:
            logger.info("No %s field in %s", field, path)
            return []
        return split_lines(value)

    def write_field(
        self,
        source: Path,
        output: Path,
        lines: Sequence[str],
        field: str | None = None,
    ) -> None:
        field = field or self.cfg.lyrics_field
        cmd = [
            self.cfg.ffmpeg_bin,
            "-y",
            "-i",
            str(source),
            "-map",
            "0",
            "-c",
            "copy",
            "-metadata",
            f"{field}={join_lines(lines)}",
            str(output),
        ]
        try:
            res = self._run(cmd)
        except subprocess.TimeoutExpired as e:
            raise MetadataWriteFailed(f"ffmpeg timed out writing {output}") from e
        if res.returncode != 0:
            raise MetadataWriteFailed(f"ffmpeg failed with code {res.returncode}: {_tail(res.stderr)}")

    def replace_lyrics(self, source: Path, target: Path, lines: Sequence[str]) -> None:
        """
        Copy `source` to `target` with the lyrics field replaced. ffmpeg writes
        to a temp file which is then moved over the target.
        """
        if not self.available():
            raise FfmpegNotFound(
                "FFmpeg needs to be installed and present in $PATH to save directly as audio. "
                "Either install FFmpeg or save to an external .lrc file."
            )
        target.parent.mkdir(parents=True, exist_ok=True)
        tmp = build_temp_name(target, self.cfg)
        tmp.parent.mkdir(parents=True, exist_ok=True)
        try:
            self.write_field(source, tmp, lines)
            move_into_place(tmp, target)
        finally:
            tmp.unlink(missing_ok=True)
        logger.debug("Replaced %s in %s", self.cfg.lyrics_field, target)
