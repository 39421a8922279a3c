"""Manual send endpoints for operators and scripts (static admin token).

Check order on send routes: token (401), provider config (500), state
preconditions (400), body fields (400), then a single provider call.
The blocking provider call runs in the threadpool, off the event loop.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool

from chatrelay.api.auth import AdminTokenDep
from chatrelay.api.errors import ValidationError
from chatrelay.api.payloads import optional_text, read_body_object, required_text
from chatrelay.api.state import RelayState, get_state
from chatrelay.chatguru.models import SendRequest

router = APIRouter(tags=["messages"], dependencies=[AdminTokenDep])

NO_LAST_CHAT_MESSAGE = "No lastChat yet: the webhook has not received a message with a phone number"


@router.post("/send-test")
async def send_test(request: Request, state: RelayState = Depends(get_state)) -> dict:
    """Send {text} to {chat_number}, optionally scheduled via {send_date}."""
    gateway = state.gateway()
    gateway.ensure_configured()

    body = await read_body_object(request)
    message = SendRequest(
        chat_number=required_text(body, "chat_number"),
        text=required_text(body, "text"),
        send_date=optional_text(body, "send_date"),
    )

    result = await run_in_threadpool(gateway.send, message)
    return {"ok": True, "result": result}


@router.post("/reply-last")
async def reply_last(request: Request, state: RelayState = Depends(get_state)) -> dict:
    """Send {text} to the phone of the most recent identified webhook."""
    gateway = state.gateway()
    gateway.ensure_configured()

    last_chat = state.last_chat
    if last_chat is None or not last_chat.celular:
        raise ValidationError(NO_LAST_CHAT_MESSAGE)

    body = await read_body_object(request)
    message = SendRequest(
        chat_number=last_chat.celular,
        text=required_text(body, "text"),
        send_date=optional_text(body, "send_date"),
    )

    result = await run_in_threadpool(gateway.send, message)
    return {
        "ok": True,
        "target": last_chat.celular,
        "lastChat": last_chat.to_dict(),
        "result": result,
    }


@router.get("/last-chat")
def last_chat(state: RelayState = Depends(get_state)) -> dict:
    return {"ok": True, "lastChat": state.last_chat.to_dict() if state.last_chat else None}
