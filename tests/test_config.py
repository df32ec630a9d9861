from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from config import load_settings


def test_missing_token_fails_fast(monkeypatch):
    monkeypatch.delenv("LINE_CHANNEL_ACCESS_TOKEN", raising=False)

    with pytest.raises(RuntimeError, match="LINE_CHANNEL_ACCESS_TOKEN"):
        load_settings()


def test_blank_token_fails_fast(monkeypatch):
    monkeypatch.setenv("LINE_CHANNEL_ACCESS_TOKEN", "   ")

    with pytest.raises(RuntimeError):
        load_settings()


def test_defaults(monkeypatch):
    monkeypatch.setenv("LINE_CHANNEL_ACCESS_TOKEN", "abc")
    for name in ("GITHUB_URL", "TAROT_DATA_DIR", "LINE_API_BASE", "LINE_REPLY_TIMEOUT", "HOST", "PORT"):
        monkeypatch.delenv(name, raising=False)

    settings = load_settings()

    assert settings.line_token == "abc"
    assert settings.image_base_url == ""
    assert settings.data_dir == Path(__file__).resolve().parents[1] / "data" / "cards"
    assert settings.line_api_base == "https://api.line.me"
    assert settings.reply_timeout == 10.0
    assert (settings.host, settings.port) == ("127.0.0.1", 3000)


def test_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("LINE_CHANNEL_ACCESS_TOKEN", "abc")
    monkeypatch.setenv("GITHUB_URL", "https://raw.example.com/cards")
    monkeypatch.setenv("TAROT_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("LINE_API_BASE", "http://localhost:9000/")
    monkeypatch.setenv("PORT", "8080")

    settings = load_settings()

    assert settings.image_base_url == "https://raw.example.com/cards"
    assert settings.data_dir == tmp_path
    assert settings.line_api_base == "http://localhost:9000"
    assert settings.port == 8080


def test_app_does_not_start_without_token(monkeypatch):
    from app import app

    monkeypatch.delenv("LINE_CHANNEL_ACCESS_TOKEN", raising=False)

    with pytest.raises(RuntimeError):
        with TestClient(app):
            pass
