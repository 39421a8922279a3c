"""Timestamp helpers shared by state, audit log and logging."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return current UTC timestamp (timezone-aware)."""
    return datetime.now(timezone.utc)


def utc_iso(moment: datetime | None = None) -> str:
    """ISO-8601 UTC string with millisecond precision and a 'Z' suffix."""
    moment = moment or utc_now()
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def local_hhmm(moment: datetime | None = None) -> str:
    """Wall-clock 'HH:MM' of the server's local time."""
    moment = moment or datetime.now()
    return moment.strftime("%H:%M")
