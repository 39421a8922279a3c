"""Plain-text knowledge blob, replaced wholesale on every write."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from .files import WriteResult, read_text, write_text


def coerce_text(value: Any) -> str:
    """None becomes '', anything else its str()."""
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


class KnowledgeStore:
    def __init__(self, path: Path):
        self.path = path
        self._text = read_text(path) or ""

    def get(self) -> str:
        return self._text

    def set(self, value: Any) -> WriteResult:
        self._text = coerce_text(value)
        return write_text(self.path, self._text)
