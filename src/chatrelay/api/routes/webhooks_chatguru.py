"""ChatGuru webhook receiver.

The provider must never see a failure: every request is counted,
audited and acknowledged with 200 {"ok": true}, whatever its shape.

Security:
- Raw headers and body go to the audit log only
- Logs carry structure (keys, flags), NEVER phone numbers, names or text
- Ingest never sends anything outbound
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from chatrelay.api.state import RelayState, get_state
from chatrelay.chatguru.inbound import decode_body, extract_last_chat
from chatrelay.infra.time import utc_iso
from chatrelay.observability.correlation import get_correlation_id
from chatrelay.observability.logging import get_logger
from chatrelay.observability.redaction import safe_log_context

router = APIRouter(prefix="/webhook", tags=["webhooks"])

logger = get_logger(__name__)


def _client_ip(request: Request) -> str | None:
    """First x-forwarded-for hop, else the peer address."""
    forwarded = request.headers.get("x-forwarded-for", "")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else None


@router.post("/chatguru")
async def chatguru_webhook(request: Request, state: RelayState = Depends(get_state)) -> dict:
    """Receive a ChatGuru callback and remember who wrote last.

    Identified (a phone field is present): LastChat is replaced wholesale.
    Unidentified: LastChat is left as it was.
    """
    correlation_id = get_correlation_id()
    received_at = utc_iso()

    try:
        raw = await request.body()
    except Exception:
        # Client dropped mid-body; still acknowledge
        logger.warning(
            "webhook body could not be read",
            extra={"extra_fields": safe_log_context(correlationId=correlation_id)},
        )
        raw = b""
    body = decode_body(raw, request.headers.get("content-type"))

    state.counters.webhook_received()
    state.audit_log.append(
        {
            "receivedAt": received_at,
            "ip": _client_ip(request),
            "headers": dict(request.headers),
            "body": body,
        }
    )

    last_chat = extract_last_chat(body, updated_at=received_at)
    if last_chat is not None:
        state.last_chat = last_chat

    logger.info(
        "chatguru webhook received",
        extra={
            "extra_fields": safe_log_context(
                correlationId=correlation_id,
                body_keys=body,
                identified=last_chat is not None,
                received_total=state.counters.received_webhooks,
            )
        },
    )
    return {"ok": True}
