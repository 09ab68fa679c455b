from __future__ import annotations

from datetime import date, datetime, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.exceptions import ContractViolation


def parse_iso_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp; a trailing ``Z`` means UTC."""
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise ContractViolation(f"Invalid timestamp: {value!r}") from exc


def now_utc() -> datetime:
    """Current UTC time, truncated to seconds.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc).replace(microsecond=0)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes coming back from MySQL DATETIME columns."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def resolve_timezone(name: Optional[str]) -> Optional[tzinfo]:
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except ZoneInfoNotFoundError as exc:
        raise ContractViolation(f"Unknown timezone: {name!r}") from exc


def local_date(value: datetime, tz: Optional[tzinfo] = None) -> date:
    """Calendar date of ``value`` in ``tz``.

    Aware datetimes are converted; naive ones are taken as already local.
    """
    if tz is not None and value.tzinfo is not None:
        return value.astimezone(tz).date()
    return value.date()
