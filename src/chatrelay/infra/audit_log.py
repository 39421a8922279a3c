"""Append-only JSON-lines audit log.

Events are written for external forensics and never read back by the
running process. Lines may contain PII (raw webhook bodies), so the file
is the only place such data is persisted.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from chatrelay.infra.time import utc_iso
from chatrelay.observability.logging import get_logger
from chatrelay.observability.redaction import safe_log_context

from .files import WriteResult, append_line

logger = get_logger(__name__)


class AuditLog:
    def __init__(self, path: Path):
        self.path = path

    def append(self, event: dict[str, Any]) -> WriteResult:
        """Append one event as a single JSON line.

        A failed write is logged and returned, never raised.
        """
        line = json.dumps(event, default=str, ensure_ascii=False, separators=(",", ":"))
        result = append_line(self.path, line)
        if not result.ok:
            logger.warning(
                "audit log append failed",
                extra={"extra_fields": safe_log_context(path=result.path, error=result.error)},
            )
        return result

    def record(self, event_type: str, **fields: Any) -> WriteResult:
        """Append a typed event: {"type": ..., "at": <now>, **fields}."""
        return self.append({"type": event_type, "at": utc_iso(), **fields})
