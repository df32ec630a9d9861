import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from adapters import line_sender


def write_card(directory: Path, filename: str, **fields) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / filename
    path.write_text(json.dumps(fields, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def make_card():
    return write_card


@pytest.fixture
def card_dir(tmp_path):
    root = tmp_path / "cards"
    write_card(
        root / "major",
        "00_the_fool.json",
        title="愚者",
        short_description="新的開始",
        source_url="https://example.com/fool",
        upright_path="images/00.jpg",
        reversed_path="images/00_r.jpg",
    )
    write_card(
        root / "major",
        "01_the_magician.json",
        title="魔術師",
        short_description="創造力",
        source_url="https://example.com/magician",
        upright_path="images/01.jpg",
        reversed_path="images/01_r.jpg",
    )
    write_card(
        root / "wands",
        "22_ace_of_wands.json",
        title="權杖一",
        short_description="熱情的開端",
        source_url="https://example.com/ace-of-wands",
        upright_path="images/22.jpg",
    )
    return root


@pytest.fixture
def line_env(monkeypatch, card_dir):
    monkeypatch.setenv("LINE_CHANNEL_ACCESS_TOKEN", "test-token")
    monkeypatch.setenv("GITHUB_URL", "https://cdn.example.com/tarot")
    monkeypatch.setenv("TAROT_DATA_DIR", str(card_dir))
    monkeypatch.delenv("LINE_API_BASE", raising=False)


class FakeResponse:
    def __init__(self, status_code=200, text="{}"):
        self.status_code = status_code
        self.text = text

    @property
    def ok(self):
        return 200 <= self.status_code < 400


@pytest.fixture
def sent(monkeypatch):
    """Records outbound LINE calls instead of hitting the network."""
    calls = []

    def fake_post(url, json=None, headers=None, timeout=None, **kwargs):
        calls.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        return FakeResponse()

    monkeypatch.setattr(line_sender.requests, "post", fake_post)
    return calls


@pytest.fixture
def client(line_env, sent):
    from app import app

    with TestClient(app) as c:
        yield c
