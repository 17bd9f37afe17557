from __future__ import annotations

from pathlib import Path

import pytest

from syrinc.config import load_config, save_config_invert

_ENV = (
    "SYRINC_FFMPEG",
    "SYRINC_FFPROBE",
    "SYRINC_FFMPEG_TIMEOUT",
    "SYRINC_LYRICS_FIELD",
    "SYRINC_TEMP_DIR",
    "SYRINC_TEMP_SUFFIX",
    "SYRINC_INVERT_OFFSET",
)


@pytest.fixture(autouse=True)
def _clean_env(tmp_path, monkeypatch):
    for name in _ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))


class TestLoadConfig:
    def test_defaults(self, tmp_path):
        cfg = load_config()
        assert cfg.ffmpeg_bin == "ffmpeg"
        assert cfg.ffprobe_bin == "ffprobe"
        assert cfg.lyrics_field == "LYRICS"
        assert cfg.temp_suffix == "-temp"
        assert cfg.invert_offset is False
        assert cfg.config_dir == tmp_path / "syrinc"

    def test_env_overrides(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SYRINC_FFMPEG", "/opt/ffmpeg/bin/ffmpeg")
        monkeypatch.setenv("SYRINC_LYRICS_FIELD", "UNSYNCEDLYRICS")
        monkeypatch.setenv("SYRINC_TEMP_DIR", str(tmp_path / "scratch"))
        monkeypatch.setenv("SYRINC_FFMPEG_TIMEOUT", "2.5")
        cfg = load_config()
        assert cfg.ffmpeg_bin == "/opt/ffmpeg/bin/ffmpeg"
        assert cfg.lyrics_field == "UNSYNCEDLYRICS"
        assert cfg.temp_dir == Path(tmp_path / "scratch")
        assert cfg.ffmpeg_timeout_s == 2.5


class TestConfigInvert:
    def test_save_and_load(self):
        save_config_invert(True)
        assert load_config().invert_offset is True

        save_config_invert(False)
        assert load_config().invert_offset is False

    def test_config_file_over_env(self, tmp_path, monkeypatch):
        (tmp_path / "syrinc").mkdir(parents=True, exist_ok=True)
        (tmp_path / "syrinc" / "config.json").write_text('{"invert_offset": false}', encoding="utf-8")
        monkeypatch.setenv("SYRINC_INVERT_OFFSET", "1")
        assert load_config().invert_offset is False

    def test_env_when_no_config(self, monkeypatch):
        monkeypatch.setenv("SYRINC_INVERT_OFFSET", "1")
        assert load_config().invert_offset is True

    def test_broken_config_file_is_ignored(self, tmp_path):
        (tmp_path / "syrinc").mkdir(parents=True, exist_ok=True)
        (tmp_path / "syrinc" / "config.json").write_text("{not json", encoding="utf-8")
        assert load_config().invert_offset is False

    @pytest.mark.parametrize("content", ["[]", "null", '"yes"', "3"])
    def test_non_object_config_file_is_ignored(self, tmp_path, content):
        (tmp_path / "syrinc").mkdir(parents=True, exist_ok=True)
        (tmp_path / "syrinc" / "config.json").write_text(content, encoding="utf-8")
        assert load_config().invert_offset is False

    def test_save_over_non_object_config_file(self, tmp_path):
        (tmp_path / "syrinc").mkdir(parents=True, exist_ok=True)
        (tmp_path / "syrinc" / "config.json").write_text("[1, 2]", encoding="utf-8")
        save_config_invert(True)
        assert load_config().invert_offset is True
