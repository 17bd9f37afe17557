from __future__ import annotations

import json
from dataclasses import dataclass
import os
from pathlib import Path
import tempfile


def _config_dir() -> Path:
    xdg = os.getenv("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "syrinc"
    return Path.home() / ".config" / "syrinc"


def _config_file() -> Path:
    return _config_dir() / "config.json"


@dataclass(frozen=True)
class AppConfig:
    config_dir: Path

    # External tools
    ffmpeg_bin: str
    ffprobe_bin: str
    ffmpeg_timeout_s: float

    # Audio metadata field holding the .lrc block
    lyrics_field: str

    # Atomic writes
    temp_dir: Path
    temp_suffix: str

    # Processing defaults
    invert_offset: bool


def load_config() -> AppConfig:
    temp_env = os.getenv("SYRINC_TEMP_DIR")
    temp_dir = Path(temp_env) if temp_env else Path(tempfile.gettempdir())

    config_dir = _config_dir()

    return AppConfig(
        config_dir=config_dir,
        ffmpeg_bin=os.getenv("SYRINC_FFMPEG", "ffmpeg"),
        ffprobe_bin=os.getenv("SYRINC_FFPROBE", "ffprobe"),
        ffmpeg_timeout_s=float(os.getenv("SYRINC_FFMPEG_TIMEOUT", "60")),
        lyrics_field=os.getenv("SYRINC_LYRICS_FIELD", "LYRICS"),
        temp_dir=temp_dir,
        temp_suffix=os.getenv("SYRINC_TEMP_SUFFIX", "-temp"),
        invert_offset=_load_invert(config_dir),
    )


def _load_invert(config_dir: Path) -> bool:
    # Priority: config.json → SYRINC_INVERT_OFFSET → False
    cfg_path = config_dir / "config.json"
    if cfg_path.exists():
        try:
            data = json.loads(cfg_path.read_text(encoding="utf-8"))
            if isinstance(data, dict) and isinstance(data.get("invert_offset"), bool):
                return data["invert_offset"]
        except (OSError, ValueError):
            pass
    env_invert = os.getenv("SYRINC_INVERT_OFFSET")
    if env_invert:
        return env_invert not in ("0", "false", "False")
    return False


def save_config_invert(invert: bool) -> Path:
    cfg_path = _config_file()
    cfg_path.parent.mkdir(parents=True, exist_ok=True)
    data: dict[str, object] = {}
    if cfg_path.exists():
        try:
            loaded = json.loads(cfg_path.read_text(encoding="utf-8"))
            if isinstance(loaded, dict):
                data = loaded
        except (OSError, ValueError):
            pass
    data["invert_offset"] = invert
    cfg_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    return cfg_path
