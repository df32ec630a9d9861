from __future__ import annotations

import json
import logging
import os
import random
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

logger = logging.getLogger(__name__)

MIN_CARD_ID = 0
MAX_CARD_ID = 77

UNKNOWN_TITLE = "未知卡片"
MISSING_TITLE = "無法獲得卡片"


class CardNotFoundError(LookupError):
    def __init__(self, card_id: int | None = None):
        self.card_id = card_id
        if card_id is None:
            super().__init__("card catalog is empty")
        else:
            super().__init__(f"card {card_id} is not loaded")


@dataclass(frozen=True)
class TarotCard:
    id: int
    title: str | None = None
    short_description: str | None = None
    source_url: str | None = None
    upright_path: str | None = None
    reversed_path: str | None = None

    @classmethod
    def from_json(cls, card_id: int, data: dict[str, Any]) -> "TarotCard":
        def _str(key: str) -> str | None:
            value = data.get(key)
            return value if isinstance(value, str) else None

        return cls(
            id=card_id,
            title=_str("title"),
            short_description=_str("short_description"),
            source_url=_str("source_url"),
            upright_path=_str("upright_path"),
            reversed_path=_str("reversed_path"),
        )


def parse_card_id(token: str) -> int | None:
    """'17' or '+17' -> 17. ASCII digits only, inside 0..77."""
    digits = token[1:] if token.startswith("+") else token
    if not (digits.isascii() and digits.isdigit()):
        return None
    card_id = int(digits)
    if not MIN_CARD_ID <= card_id <= MAX_CARD_ID:
        return None
    return card_id


def _card_id_from_filename(filename: str) -> int | None:
    """`12_the_hanged_man.json` -> 12. Anything else -> None."""
    token = filename.split("_", 1)[0]
    if token == filename:
        # no underscore at all
        return None
    return parse_card_id(token)


def _read_card(path: Path, card_id: int) -> TarotCard | None:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, ValueError) as e:
        logger.warning("Skipping card file %s: %s", path, e)
        return None
    if not isinstance(data, dict):
        logger.warning("Skipping card file %s: not a JSON object", path)
        return None
    return TarotCard.from_json(card_id, data)


def load_cards(data_dir: str | os.PathLike) -> dict[int, TarotCard]:
    """Reads every `<id>_<name>.json` under data_dir (recursively).

    Broken files are skipped, the scan never aborts. Directories and files
    are walked in sorted order, so for a duplicate id the file that sorts
    last wins.
    """
    root = Path(data_dir)
    if not root.is_dir():
        logger.warning("Card directory %s not found, catalog is empty", root)
        return {}

    cards: dict[int, TarotCard] = {}
    sources: dict[int, Path] = {}

    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for filename in sorted(filenames):
            path = Path(dirpath) / filename
            if path.suffix.lower() != ".json":
                continue

            card_id = _card_id_from_filename(filename)
            if card_id is None:
                logger.debug("Skipping %s: no card id in file name", path)
                continue

            card = _read_card(path, card_id)
            if card is None:
                continue

            if card_id in sources:
                logger.warning("Card %s in %s overrides %s", card_id, path, sources[card_id])
            cards[card_id] = card
            sources[card_id] = path

    return dict(sorted(cards.items()))


class CardStore:
    """Read-only tarot catalog, built once at startup.

    Nothing mutates the store after construction, so request handlers share
    one instance without locking.
    """

    def __init__(
        self,
        cards: Mapping[int, TarotCard],
        base_url: str = "",
        rng: random.Random | None = None,
    ):
        self._cards = MappingProxyType(dict(sorted(cards.items())))
        self._ids = tuple(self._cards)
        self.base_url = base_url or ""
        self._rng = rng or random.Random()

    @classmethod
    def from_directory(
        cls,
        data_dir: str | os.PathLike,
        base_url: str = "",
        rng: random.Random | None = None,
    ) -> "CardStore":
        store = cls(load_cards(data_dir), base_url=base_url, rng=rng)
        logger.info("Loaded %d tarot cards from %s", len(store), data_dir)
        return store

    @property
    def cards(self) -> Mapping[int, TarotCard]:
        return self._cards

    def ids(self) -> tuple[int, ...]:
        return self._ids

    def __len__(self) -> int:
        return len(self._cards)

    def __contains__(self, card_id: object) -> bool:
        return card_id in self._cards

    # ---- queries ----

    def get(self, card_id: int) -> TarotCard:
        card = self._cards.get(card_id)
        if card is None:
            raise CardNotFoundError(card_id)
        return card

    def draw(self) -> tuple[TarotCard, bool]:
        """Random card out of the loaded ones + coin flip for reversed."""
        if not self._ids:
            raise CardNotFoundError()
        card_id = self._rng.choice(self._ids)
        is_reversed = self._rng.random() < 0.5
        return self._cards[card_id], is_reversed

    def all_titles(self) -> str:
        return "\n".join(
            f"{card_id}: {card.title if card.title is not None else MISSING_TITLE}"
            for card_id, card in self._cards.items()
        )

    # ---- formatting ----

    @staticmethod
    def card_text(card: TarotCard) -> str:
        title = card.title if card.title is not None else UNKNOWN_TITLE
        desc = card.short_description or ""
        source_url = card.source_url or ""
        return f"{title}\n\n{desc}\n\n{source_url}"

    def image_url(self, card: TarotCard, is_reversed: bool = False) -> str:
        path = card.upright_path
        if is_reversed and card.reversed_path:
            path = card.reversed_path
        return f"{self.base_url.rstrip('/')}/{(path or '').lstrip('/')}"
