from __future__ import annotations

import logging

from core.actions import OutImage, OutText

from .store import MAX_CARD_ID, MIN_CARD_ID, CardNotFoundError, CardStore

logger = logging.getLogger(__name__)


DRAW_TRIGGERS = {
    "抽卡",
    "抽一張牌",
    "抽一張卡",
    "抽塔羅牌",
    "抽塔羅",
    "抽一張塔羅牌",
    "抽一張塔羅",
    "抽一張",
}

ALL_CARDS_TRIGGERS = {
    "所有卡片",
}

EMPTY_CATALOG_TEXT = "目前沒有可以抽的卡片。"


def _card_reply(store: CardStore, card, is_reversed: bool = False):
    return [
        OutText(store.card_text(card)),
        OutImage(store.image_url(card, is_reversed=is_reversed)),
    ]


def get_draw_reply(store: CardStore):
    try:
        card, is_reversed = store.draw()
    except CardNotFoundError:
        logger.warning("Draw requested but the card catalog is empty")
        return [OutText(EMPTY_CATALOG_TEXT)]
    logger.debug("Drew card %s (reversed=%s)", card.id, is_reversed)
    return _card_reply(store, card, is_reversed)


def get_single_reply(store: CardStore, card_id: int):
    try:
        card = store.get(card_id)
    except CardNotFoundError:
        logger.warning("Card %s requested but not loaded", card_id)
        return [OutText(f"找不到編號 {card_id} 的卡片，請輸入 {MIN_CARD_ID}-{MAX_CARD_ID} 之間的數字。")]
    return _card_reply(store, card)


def get_all_titles_reply(store: CardStore):
    return [OutText(store.all_titles())]
