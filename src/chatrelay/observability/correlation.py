"""Correlation ID tracking so one request's log lines can be grouped."""

import uuid
from contextvars import ContextVar, Token

correlation_id_var: ContextVar[str] = ContextVar("relay_correlation_id", default="")

CORRELATION_ID_HEADER = "X-Correlation-ID"

# Inbound IDs longer than this are replaced rather than trusted
_MAX_INBOUND_LENGTH = 128


def generate_correlation_id() -> str:
    """Generate a fresh correlation ID."""
    return uuid.uuid4().hex


def resolve_correlation_id(inbound: str | None) -> str:
    """Reuse a caller-supplied correlation ID when it is sane, else mint one."""
    candidate = (inbound or "").strip()
    if not candidate or len(candidate) > _MAX_INBOUND_LENGTH:
        return generate_correlation_id()
    return candidate


def get_correlation_id() -> str:
    """Correlation ID bound to the current request ('' outside a request)."""
    return correlation_id_var.get()


def set_correlation_id(cid: str) -> Token[str]:
    return correlation_id_var.set(cid)


def reset_correlation_id(token: Token[str]) -> None:
    correlation_id_var.reset(token)
