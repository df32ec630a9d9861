import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from adapters.line_sender import send_actions_line
from config import env, load_settings
from core.engine import build_reply_actions
from modules.tarot_cards.store import CardStore


logging.basicConfig(level=env("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # No token -> RuntimeError here, the server never starts accepting requests
    settings = load_settings()
    app.state.settings = settings
    app.state.store = CardStore.from_directory(settings.data_dir, base_url=settings.image_base_url)
    yield


app = FastAPI(lifespan=lifespan)


def _first_event(data) -> dict | None:
    # LINE may batch several events, only the first one is handled
    if not isinstance(data, dict):
        return None
    events = data.get("events")
    if not isinstance(events, list) or not events:
        return None
    event = events[0]
    return event if isinstance(event, dict) else None


async def handle_event(event: dict, request: Request) -> None:
    reply_token = event.get("replyToken")
    if not isinstance(reply_token, str) or not reply_token:
        reply_token = None

    message = event.get("message")
    text = message.get("text") if isinstance(message, dict) else None
    if not isinstance(text, str):
        text = None

    logger.debug("Get user msg: %r", text)

    actions = build_reply_actions(text, request.app.state.store)

    if reply_token and actions:
        await asyncio.to_thread(send_actions_line, reply_token, actions, request.app.state.settings)


@app.get("/")
def health():
    return {"ok": True}


@app.post("/webhook")
async def line_webhook(req: Request):
    # Always "OK": LINE only needs the acknowledgment, what happens next is our business
    try:
        data = await req.json()
    except ValueError:
        logger.warning("Webhook body is not valid JSON")
        return PlainTextResponse("OK")

    event = _first_event(data)
    if event is None:
        return PlainTextResponse("OK")

    try:
        await handle_event(event, req)
    except Exception:
        logger.exception("Webhook event handling failed")

    return PlainTextResponse("OK")


if __name__ == "__main__":
    import uvicorn

    settings = load_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)
