from __future__ import annotations

import logging

import requests

from config import Settings
from core.actions import Action, OutImage, OutText

logger = logging.getLogger(__name__)

_REPLY_PATH = "/v2/bot/message/reply"


def build_messages(actions: list[Action]) -> list[dict]:
    messages: list[dict] = []
    for a in actions:
        if isinstance(a, OutText):
            messages.append({"type": "text", "text": a.text})
        elif isinstance(a, OutImage):
            messages.append(
                {
                    "type": "image",
                    "originalContentUrl": a.url,
                    "previewImageUrl": a.url,
                }
            )
    return messages


def build_reply_body(reply_token: str, actions: list[Action]) -> dict:
    return {"messages": build_messages(actions), "replyToken": reply_token}


def send_actions_line(reply_token: str, actions: list[Action], settings: Settings) -> bool:
    """
    Sends actions as one LINE reply.

    A reply token can be used only once, so there is no retry: failures are
    logged and swallowed, the webhook has already been acknowledged either way.
    Returns True if LINE accepted the reply.
    """
    if not actions:
        return False

    url = f"{settings.line_api_base}{_REPLY_PATH}"
    headers = {"Authorization": f"Bearer {settings.line_token}"}

    try:
        r = requests.post(
            url,
            json=build_reply_body(reply_token, actions),
            headers=headers,
            timeout=settings.reply_timeout,
        )
    except requests.RequestException as e:
        logger.error("Error sending reply: %s", e)
        return False

    if not r.ok:
        logger.error("LINE reply failed - status=%s body=%s", r.status_code, r.text)
        return False

    logger.debug("Reply sent successfully!")
    return True
