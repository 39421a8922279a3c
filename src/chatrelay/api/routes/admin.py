"""Admin panel API (session cookie required).

GET /api/stats, GET|POST /api/config, GET|POST /api/knowledge.
Config and knowledge writes are best-effort: a failed file write is
logged and the request still succeeds with the in-memory value.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from chatrelay.api.auth import AdminSessionDep
from chatrelay.api.payloads import read_body_object
from chatrelay.api.state import RelayState, get_state
from chatrelay.domain.operating_config import within_operating_hours
from chatrelay.infra.files import WriteResult
from chatrelay.infra.time import local_hhmm
from chatrelay.observability.correlation import get_correlation_id
from chatrelay.observability.logging import get_logger
from chatrelay.observability.redaction import safe_log_context

router = APIRouter(prefix="/api", tags=["admin"], dependencies=[AdminSessionDep])

logger = get_logger(__name__)


def _log_write_failure(what: str, result: WriteResult) -> None:
    if result.ok:
        return
    logger.warning(
        f"{what} not persisted, keeping in-memory value",
        extra={
            "extra_fields": safe_log_context(
                correlationId=get_correlation_id(),
                path=result.path,
                error=result.error,
            )
        },
    )


@router.get("/stats")
def stats(state: RelayState = Depends(get_state)) -> dict:
    """Counters, last chat and config for the dashboard."""
    config = state.config.get()
    return {
        "counters": state.counters.to_dict(),
        "lastChat": state.last_chat.to_dict() if state.last_chat else None,
        "config": config.to_dict(),
        "operating_now": within_operating_hours(config, local_hhmm()),
    }


@router.get("/config")
def get_config(state: RelayState = Depends(get_state)) -> dict:
    return {"ok": True, "config": state.config.get().to_dict()}


@router.post("/config")
async def update_config(request: Request, state: RelayState = Depends(get_state)) -> dict:
    """Merge {enabled?, operating_hours?: {start?, end?}} into the config."""
    patch = await read_body_object(request)
    config, written = state.config.update(patch)
    _log_write_failure("config", written)
    return {"ok": True, "config": config.to_dict()}


@router.get("/knowledge")
def get_knowledge(state: RelayState = Depends(get_state)) -> dict:
    return {"ok": True, "text": state.knowledge.get()}


@router.post("/knowledge")
async def set_knowledge(request: Request, state: RelayState = Depends(get_state)) -> dict:
    """Replace the knowledge text wholesale."""
    body = await read_body_object(request)
    written = state.knowledge.set(body.get("text"))
    _log_write_failure("knowledge", written)
    return {"ok": True, "text": state.knowledge.get()}
