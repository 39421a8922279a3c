"""Process-lifetime relay counters (in memory, reset on restart)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from chatrelay.infra.time import utc_iso

GENERIC_SEND_ERROR = "send failed without provider response"


@dataclass
class Counters:
    received_webhooks: int = 0
    sent_messages: int = 0
    send_errors: int = 0
    last_error: Any = None
    started_at: str = field(default_factory=utc_iso)

    def webhook_received(self) -> None:
        self.received_webhooks += 1

    def message_sent(self) -> None:
        self.sent_messages += 1

    def send_failed(self, error: Any) -> None:
        """Count a failed send and remember its error payload."""
        self.send_errors += 1
        self.last_error = error if error not in (None, "") else GENERIC_SEND_ERROR

    def to_dict(self) -> dict[str, Any]:
        return {
            "received_webhooks": self.received_webhooks,
            "sent_messages": self.sent_messages,
            "send_errors": self.send_errors,
            "last_error": self.last_error,
            "started_at": self.started_at,
        }
