from __future__ import annotations

import pytest

from syrinc.config import AppConfig


@pytest.fixture
def cfg(tmp_path) -> AppConfig:
    return AppConfig(
        config_dir=tmp_path / "config",
        ffmpeg_bin="ffmpeg",
        ffprobe_bin="ffprobe",
        ffmpeg_timeout_s=5.0,
        lyrics_field="LYRICS",
        temp_dir=tmp_path / "tmp",
        temp_suffix="-temp",
        invert_offset=False,
    )
