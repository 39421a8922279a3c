"""Operating configuration: enabled flag plus an operating-hours window.

Pure logic only (no I/O). Patches are merged permissively: a field is
applied when present with the expected type and silently ignored
otherwise. Times are 'HH:MM' wall-clock strings compared as strings.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from typing import Any

DEFAULT_START = "08:30"
DEFAULT_END = "18:30"

_HHMM_PATTERN = re.compile(r"([01]\d|2[0-3]):[0-5]\d")


@dataclass(frozen=True)
class OperatingHours:
    start: str = DEFAULT_START
    end: str = DEFAULT_END


@dataclass(frozen=True)
class OperatingConfig:
    """Snapshot of the relay's operating configuration."""

    enabled: bool = False
    operating_hours: OperatingHours = field(default_factory=OperatingHours)

    def to_dict(self) -> dict[str, Any]:
        return {
            "enabled": self.enabled,
            "operating_hours": {
                "start": self.operating_hours.start,
                "end": self.operating_hours.end,
            },
        }


def is_time_of_day(value: Any) -> bool:
    """True for strings in 24h 'HH:MM' form."""
    return isinstance(value, str) and bool(_HHMM_PATTERN.fullmatch(value))


def apply_patch(config: OperatingConfig, patch: Any) -> OperatingConfig:
    """Return config with the recognized, well-typed fields of patch applied.

    Args:
        config: Current snapshot.
        patch: Arbitrary decoded JSON. Non-dicts are a no-op.

    Returns:
        New snapshot. Unknown keys and wrong-typed values are ignored.
    """
    if not isinstance(patch, dict):
        return config

    enabled = config.enabled
    # bool only; 0/1 and "true" are not accepted
    if isinstance(patch.get("enabled"), bool):
        enabled = patch["enabled"]

    hours = config.operating_hours
    hours_patch = patch.get("operating_hours")
    if isinstance(hours_patch, dict):
        if is_time_of_day(hours_patch.get("start")):
            hours = replace(hours, start=hours_patch["start"])
        if is_time_of_day(hours_patch.get("end")):
            hours = replace(hours, end=hours_patch["end"])

    return OperatingConfig(enabled=enabled, operating_hours=hours)


def within_operating_hours(config: OperatingConfig, now_hhmm: str) -> bool:
    """Whether now_hhmm falls inside the operating window.

    The window is [start, end). start > end wraps past midnight;
    start == end is an empty window. A disabled config is never open.
    """
    if not config.enabled:
        return False
    start, end = config.operating_hours.start, config.operating_hours.end
    if start == end:
        return False
    if start < end:
        return start <= now_hhmm < end
    return now_hhmm >= start or now_hhmm < end
