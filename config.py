import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def env(name: str, default: str = "") -> str:
    value = os.getenv(name, default)
    return value if value is not None else default


def _default_data_dir() -> Path:
    # project_root/data/cards
    return Path(__file__).resolve().parent / "data" / "cards"


@dataclass(frozen=True)
class Settings:
    line_token: str
    image_base_url: str = ""
    data_dir: Path = _default_data_dir()
    line_api_base: str = "https://api.line.me"
    reply_timeout: float = 10.0
    host: str = "127.0.0.1"
    port: int = 3000


def load_settings() -> Settings:
    """Read settings from the environment (and .env). Token is required."""
    token = env("LINE_CHANNEL_ACCESS_TOKEN").strip()
    if not token:
        raise RuntimeError("LINE_CHANNEL_ACCESS_TOKEN is not set")

    data_dir = env("TAROT_DATA_DIR").strip()

    return Settings(
        line_token=token,
        image_base_url=env("GITHUB_URL"),  # where card images are hosted
        data_dir=Path(data_dir) if data_dir else _default_data_dir(),
        line_api_base=env("LINE_API_BASE", "https://api.line.me").rstrip("/"),
        reply_timeout=float(env("LINE_REPLY_TIMEOUT", "10")),
        host=env("HOST", "127.0.0.1"),
        port=int(env("PORT", "3000")),
    )
