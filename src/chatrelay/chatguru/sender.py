"""Outbound messages via the ChatGuru send-message API.

Security: NEVER log chat_number, text or the API key. Only hashes,
lengths and the masked key suffix.

One attempt per send, bounded by HTTP_TIMEOUT. Failures surface to the
caller immediately; there is no retry loop.
"""

from __future__ import annotations

import hashlib
from typing import Any

import requests

from chatrelay.api.errors import ConfigurationError, UpstreamError
from chatrelay.domain.counters import Counters
from chatrelay.infra.audit_log import AuditLog
from chatrelay.infra.settings import ProviderSettings
from chatrelay.observability.correlation import get_correlation_id
from chatrelay.observability.logging import get_logger
from chatrelay.observability.redaction import mask_secret, safe_log_context

from .models import SendRequest

logger = get_logger(__name__)

# Timeout for the provider call (seconds)
HTTP_TIMEOUT = 20

SEND_ACTION = "message_send"


def _hash_identifier(value: str) -> str:
    """Create non-reversible hash for logging. Returns first 12 chars of sha256."""
    return hashlib.sha256(value.encode()).hexdigest()[:12]


def build_params(provider: ProviderSettings, message: SendRequest) -> dict[str, str]:
    """Query parameters for a message_send call.

    send_date is passed through verbatim ('YYYY-MM-DD HH:MM'); the
    provider validates it.
    """
    params = {
        "key": provider.api_key,
        "account_id": provider.account_id,
        "phone_id": provider.phone_id,
        "action": SEND_ACTION,
        "text": message.text,
        "chat_number": message.chat_number,
    }
    if message.send_date:
        params["send_date"] = message.send_date
    return params


def _response_payload(resp: requests.Response) -> Any:
    """Provider body as JSON when parseable, else raw text (None if empty)."""
    if not resp.content:
        return None
    try:
        return resp.json()
    except ValueError:
        return resp.text


def _do_request(url: str, params: dict[str, str]) -> requests.Response:
    """POST with parameters in the query string and no body."""
    return requests.post(url, params=params, timeout=HTTP_TIMEOUT)


class ChatGuruGateway:
    """Sends messages and keeps the send counters and audit trail current."""

    def __init__(self, provider: ProviderSettings, counters: Counters, audit_log: AuditLog):
        self.provider = provider
        self.counters = counters
        self.audit_log = audit_log

    def ensure_configured(self) -> None:
        """Raise ConfigurationError naming every missing credential."""
        missing = self.provider.missing()
        if missing:
            raise ConfigurationError(missing, error="ChatGuru config incomplete")

    def send(self, message: SendRequest) -> Any:
        """Send one message.

        Args:
            message: Target chat number, text and optional schedule.

        Returns:
            The provider's response body, verbatim.

        Raises:
            ConfigurationError: If any provider credential is missing.
            UpstreamError: On transport failure or an HTTP error status.
        """
        self.ensure_configured()

        log_ctx = safe_log_context(
            correlationId=get_correlation_id(),
            to_hash=_hash_identifier(message.chat_number),
            text_len=len(message.text),
            scheduled=bool(message.send_date),
            api_key=mask_secret(self.provider.api_key),
            provider="chatguru",
        )
        logger.info("sending outbound message via chatguru", extra={"extra_fields": log_ctx})

        try:
            resp = _do_request(self.provider.endpoint, build_params(self.provider, message))
        except requests.RequestException as e:
            logger.error(
                "outbound send via chatguru failed",
                extra={"extra_fields": {**log_ctx, **safe_log_context(error_type=type(e).__name__)}},
            )
            # Exception text may embed the request URL (and so the key)
            self._record_failure(message, f"{type(e).__name__}: request to provider failed", None)
            raise UpstreamError(self.counters.last_error) from e

        payload = _response_payload(resp)
        if resp.status_code >= 400:
            logger.error(
                "outbound send via chatguru rejected",
                extra={"extra_fields": {**log_ctx, **safe_log_context(status_code=resp.status_code)}},
            )
            self._record_failure(message, payload, resp.status_code)
            raise UpstreamError(self.counters.last_error, provider_status=resp.status_code)

        self.counters.message_sent()
        self.audit_log.record(
            "message_sent",
            chat_number=message.chat_number,
            send_date=message.send_date,
            status=resp.status_code,
        )
        logger.info(
            "outbound message sent via chatguru",
            extra={"extra_fields": {**log_ctx, **safe_log_context(status_code=resp.status_code)}},
        )
        return payload

    def _record_failure(self, message: SendRequest, error: Any, status: int | None) -> None:
        self.counters.send_failed(error)
        self.audit_log.record(
            "send_error",
            chat_number=message.chat_number,
            status=status,
            error=self.counters.last_error,
        )
