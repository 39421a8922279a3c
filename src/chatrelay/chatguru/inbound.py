"""ChatGuru webhook adapter - decode bodies and extract the chat identity."""

from __future__ import annotations

import json
from typing import Any
from urllib.parse import parse_qsl

from chatrelay.infra.time import utc_iso

from .models import LastChat

# Phone fields in priority order; the first non-empty one wins
PHONE_FIELDS = ("celular", "chat_number", "telefone")

_OPTIONAL_FIELDS = ("chat_id", "nome", "phone_id", "origem", "texto_mensagem")


def decode_body(raw: bytes, content_type: str | None) -> dict[str, Any]:
    """Decode a webhook body into a dict. Never raises.

    JSON is tried for JSON content types and as a fallback for unlabelled
    bodies; urlencoded form bodies are parsed as flat key/value pairs.
    Anything else (or anything malformed) yields an empty dict.
    """
    if not raw:
        return {}

    media_type = (content_type or "").split(";")[0].strip().lower()

    if media_type == "application/x-www-form-urlencoded":
        try:
            return dict(parse_qsl(raw.decode("utf-8"), keep_blank_values=True))
        except UnicodeDecodeError:
            return {}

    try:
        decoded = json.loads(raw)
    except (ValueError, UnicodeDecodeError):
        return {}
    return decoded if isinstance(decoded, dict) else {}


def as_text(value: Any) -> str | None:
    """Stringify a scalar payload value.

    None, False, "" and numeric zero count as absent. Booleans render as
    JSON does ("true"); objects and arrays are not text and count as absent.
    """
    if isinstance(value, bool):
        return "true" if value else None
    if isinstance(value, str):
        return value or None
    if isinstance(value, (int, float)):
        return str(value) if value else None
    return None


def extract_phone(body: dict[str, Any]) -> str | None:
    """Return the identifying phone number of a webhook body, if any."""
    for field_name in PHONE_FIELDS:
        phone = as_text(body.get(field_name))
        if phone:
            return phone
    return None


def extract_last_chat(body: dict[str, Any], updated_at: str | None = None) -> LastChat | None:
    """Build a LastChat from a webhook body.

    Args:
        body: Decoded webhook payload.
        updated_at: Timestamp to stamp on the record (defaults to now).

    Returns:
        A fresh LastChat with every absent field set to None, or None when
        the body carries no identifying phone number.
    """
    celular = extract_phone(body)
    if celular is None:
        return None

    optional = {name: as_text(body.get(name)) for name in _OPTIONAL_FIELDS}
    return LastChat(updated_at=updated_at or utc_iso(), celular=celular, **optional)
