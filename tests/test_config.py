import json

import pytest
from pydantic import ValidationError

from app.config.settings import Config


def test_defaults():
    cfg = Config()
    assert cfg.download.timeout_seconds == 300
    assert cfg.ytdlp.binary == "yt-dlp"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("ENGINE", "subprocess")
    monkeypatch.setenv("DOWNLOAD__TIMEOUT_SECONDS", "60")
    monkeypatch.setenv("LOGGING__LEVEL", "debug")

    cfg = Config()
    assert cfg.port == 8080
    assert cfg.engine == "subprocess"
    assert cfg.download.timeout_seconds == 60
    assert cfg.logging.level == "DEBUG"


def test_port_defaults_to_3000(monkeypatch):
    monkeypatch.delenv("PORT", raising=False)
    assert Config().port == 3000


def test_unknown_engine_rejected(monkeypatch):
    monkeypatch.setenv("ENGINE", "ffmpeg")
    with pytest.raises(ValidationError):
        Config()


def test_invalid_log_level_rejected():
    with pytest.raises(ValidationError):
        Config(logging={"level": "LOUD"})


def test_load_from_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"engine": "subprocess", "download": {"temp_dir": "/srv/tmp"}}))

    cfg = Config.load_from_file(str(path))
    assert cfg.engine == "subprocess"
    assert cfg.download.temp_dir == "/srv/tmp"


def test_broken_file_falls_back(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")
    assert Config.load_from_file(str(path)).download.timeout_seconds == 300
