from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from core.actions import Action
from modules.help.handler import HELP_TRIGGERS, get_help_reply, get_text_only_reply
from modules.tarot_cards.handler import (
    ALL_CARDS_TRIGGERS,
    DRAW_TRIGGERS,
    get_all_titles_reply,
    get_draw_reply,
    get_single_reply,
)
from modules.tarot_cards.store import CardStore, parse_card_id


DRAW = "draw"
ALL_CARDS = "all_cards"
HELP = "help"
CARD = "card"
TEXT_ONLY = "text_only"


@dataclass(frozen=True)
class Command:
    kind: str
    card_id: Optional[int] = None


def classify(text: Optional[str]) -> Command:
    """
    Maps the user's text to a command. Order matters, first match wins:
    draw phrase, "all cards", help phrase, card number 0..77, anything else
    is help. No text at all (sticker, image...) gets the text-only notice.
    """
    if text is None:
        return Command(TEXT_ONLY)

    t = text.strip()

    if t in DRAW_TRIGGERS:
        return Command(DRAW)

    if t in ALL_CARDS_TRIGGERS:
        return Command(ALL_CARDS)

    if t in HELP_TRIGGERS:
        return Command(HELP)

    card_id = parse_card_id(t)
    if card_id is not None:
        return Command(CARD, card_id=card_id)

    return Command(HELP)


def build_reply_actions(text: Optional[str], store: CardStore) -> List[Action]:
    """
    Platform-neutral entrypoint.
    Returns the reply as a list of actions: text / image.
    """
    command = classify(text)

    if command.kind == DRAW:
        return get_draw_reply(store)

    if command.kind == ALL_CARDS:
        return get_all_titles_reply(store)

    if command.kind == CARD:
        return get_single_reply(store, command.card_id)

    if command.kind == TEXT_ONLY:
        return get_text_only_reply()

    return get_help_reply()
