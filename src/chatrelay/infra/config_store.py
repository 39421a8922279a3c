"""JSON-file backed store for the operating configuration."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from chatrelay.domain.operating_config import OperatingConfig, apply_patch
from chatrelay.observability.logging import get_logger
from chatrelay.observability.redaction import safe_log_context

from .files import WriteResult, read_text, write_text

logger = get_logger(__name__)


class ConfigStore:
    """Holds the current OperatingConfig and mirrors it to a JSON file.

    The in-memory snapshot is authoritative. Writes are synchronous and
    best-effort: a failed write is reported back, never rolled back.
    """

    def __init__(self, path: Path):
        self.path = path
        self._config = self._load()

    def _load(self) -> OperatingConfig:
        raw = read_text(self.path)
        if raw is None:
            return OperatingConfig()
        try:
            stored: Any = json.loads(raw)
        except ValueError:
            logger.warning(
                "config file is not valid json, using defaults",
                extra={"extra_fields": safe_log_context(path=str(self.path))},
            )
            return OperatingConfig()
        # Same permissive merge as update(): partial files keep the defaults
        return apply_patch(OperatingConfig(), stored)

    def get(self) -> OperatingConfig:
        return self._config

    def update(self, patch: Any) -> tuple[OperatingConfig, WriteResult]:
        """Merge patch into the current config and persist the result.

        Args:
            patch: Decoded request body; unrecognized or mistyped fields
                are ignored.

        Returns:
            (new snapshot, outcome of the file write).
        """
        self._config = apply_patch(self._config, patch)
        payload = json.dumps(self._config.to_dict(), indent=2)
        return self._config, write_text(self.path, payload + "\n")
