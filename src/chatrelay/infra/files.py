"""Best-effort file writes that report failure instead of raising.

Config, knowledge and audit writes must never break a request because the
disk is read-only or full. Each helper returns a WriteResult and leaves
the policy (log and continue) to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class WriteResult:
    """Outcome of a persistence attempt."""

    ok: bool
    path: str
    error: str | None = None

    @classmethod
    def success(cls, path: Path) -> WriteResult:
        return cls(ok=True, path=str(path))

    @classmethod
    def failure(cls, path: Path, exc: OSError) -> WriteResult:
        return cls(ok=False, path=str(path), error=f"{type(exc).__name__}: {exc}")


def write_text(path: Path, text: str) -> WriteResult:
    """Overwrite path with text (UTF-8, no newline translation)."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8", newline="") as fh:
            fh.write(text)
    except OSError as exc:
        return WriteResult.failure(path, exc)
    return WriteResult.success(path)


def append_line(path: Path, line: str) -> WriteResult:
    """Append a single line (newline added) to path."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("a", encoding="utf-8", newline="") as fh:
            fh.write(line + "\n")
    except OSError as exc:
        return WriteResult.failure(path, exc)
    return WriteResult.success(path)


def read_text(path: Path) -> str | None:
    """Read path as UTF-8 text exactly as stored, or None if unreadable."""
    try:
        with path.open("r", encoding="utf-8", newline="") as fh:
            return fh.read()
    except (OSError, UnicodeDecodeError):
        return None
