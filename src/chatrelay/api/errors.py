"""Relay error taxonomy and the JSON responses they map to.

Every error body has the shape {"ok": false, "error": ...}; some add
context fields (missing credentials, provider status).
"""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from chatrelay.observability.correlation import get_correlation_id
from chatrelay.observability.logging import get_logger
from chatrelay.observability.redaction import safe_log_context

logger = get_logger(__name__)

UNAUTHORIZED_MESSAGE = "Unauthorized"


class RelayError(Exception):
    """Base class for errors rendered as {"ok": false, ...} responses."""

    status_code = 500

    def __init__(self, error: Any):
        super().__init__(str(error))
        self.error = error

    def body(self) -> dict[str, Any]:
        return {"ok": False, "error": self.error}


class AuthorizationError(RelayError):
    """Bad or missing token/session. The cause is never disclosed."""

    status_code = 401

    def __init__(self, reason: str = "unauthorized"):
        super().__init__(UNAUTHORIZED_MESSAGE)
        # For logs only, never sent to the caller
        self.reason = reason


class ConfigurationError(RelayError):
    """Required server-side settings are absent."""

    status_code = 500

    def __init__(self, missing: list[str], error: str = "Configuration incomplete"):
        super().__init__(error)
        self.missing = list(missing)

    def body(self) -> dict[str, Any]:
        return {**super().body(), "missing": self.missing}


class ValidationError(RelayError):
    """Malformed request body."""

    status_code = 400

    @classmethod
    def missing_field(cls, name: str) -> ValidationError:
        return cls(f"Missing required field: {name}")


class UpstreamError(RelayError):
    """The provider call failed or answered with an error."""

    status_code = 500

    def __init__(self, error: Any, provider_status: int | None = None):
        super().__init__(error)
        self.provider_status = provider_status

    def body(self) -> dict[str, Any]:
        return {**super().body(), "status": self.provider_status}


async def _relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
    logger.warning(
        "request failed",
        extra={
            "extra_fields": safe_log_context(
                correlationId=get_correlation_id(),
                path=request.url.path,
                error_type=type(exc).__name__,
                status_code=exc.status_code,
                reason=getattr(exc, "reason", None),
            )
        },
    )
    return JSONResponse(status_code=exc.status_code, content=exc.body())


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RelayError, _relay_error_handler)
