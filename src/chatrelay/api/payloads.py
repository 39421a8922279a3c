"""Request body helpers shared by route modules."""

from __future__ import annotations

from typing import Any

from fastapi import Request

from chatrelay.api.errors import ValidationError
from chatrelay.chatguru.inbound import as_text, decode_body


async def read_body_object(request: Request) -> dict[str, Any]:
    """Decode a JSON or urlencoded form body; anything else gives {}."""
    raw = await request.body()
    return decode_body(raw, request.headers.get("content-type"))


def optional_text(body: dict[str, Any], name: str) -> str | None:
    """Field as a string, or None when absent, null, empty or zero."""
    return as_text(body.get(name))


def required_text(body: dict[str, Any], name: str) -> str:
    """Field as a string.

    Raises:
        ValidationError: Naming the field when it is absent or empty.
    """
    value = optional_text(body, name)
    if value is None:
        raise ValidationError.missing_field(name)
    return value
