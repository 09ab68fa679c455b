from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from typing import Any, Hashable, Mapping, Optional

from ..common.datetime_utils import as_utc, local_date, parse_iso_timestamp
from ..common.validators import require_field, validate_note
from ..core.enums import ClockKind
from ..core.exceptions import ContractViolation
from ..geo.model import Coordinate


def _first(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


@dataclass(frozen=True)
class ClockEvent:
    """Append-only fact: a user clocked in or out at an instant.

    Required fields are checked on construction so that a malformed event
    fails at the boundary instead of somewhere inside a report.
    """

    user_id: Hashable
    kind: ClockKind
    timestamp: datetime
    organization_id: Optional[Hashable] = None
    location: Optional[Coordinate] = None
    location_name: Optional[str] = None
    note: Optional[str] = None
    event_id: Optional[int] = None

    def __post_init__(self) -> None:
        require_field(self.user_id, "user_id")
        require_field(self.kind, "kind")
        require_field(self.timestamp, "timestamp")

        if not isinstance(self.kind, ClockKind):
            try:
                object.__setattr__(self, "kind", ClockKind(self.kind))
            except ValueError as exc:
                raise ContractViolation(f"Unknown clock kind: {self.kind!r}") from exc

        if not isinstance(self.timestamp, datetime):
            raise ContractViolation("timestamp must be a datetime")
        # Naive values are UTC, same as MySQL DATETIME columns.
        object.__setattr__(self, "timestamp", as_utc(self.timestamp).replace(microsecond=0))

        if self.location is not None and not isinstance(self.location, Coordinate):
            raise ContractViolation("location must be a coordinate")
        validate_note(self.note)

    @property
    def is_clock_in(self) -> bool:
        return self.kind == ClockKind.CLOCK_IN

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ClockEvent":
        """Build an event from a DB row or a decoded JSON payload.

        Accepts both snake_case and the camelCase names used by the web client.
        """
        timestamp = _first(data, "timestamp")
        if isinstance(timestamp, str):
            timestamp = parse_iso_timestamp(timestamp)

        return cls(
            user_id=_first(data, "user_id", "userId"),
            kind=_first(data, "kind", "type"),
            timestamp=timestamp,
            organization_id=_first(data, "organization_id", "organizationId"),
            location=Coordinate.from_mapping(data),
            location_name=_first(data, "location_name", "locationName"),
            note=data.get("note"),
            event_id=_first(data, "event_id", "id"),
        )

    def as_dict(self) -> dict:
        return {
            "id": self.event_id,
            "userId": self.user_id,
            "organizationId": self.organization_id,
            "type": self.kind.value,
            "timestamp": self.timestamp.isoformat(),
            "latitude": self.location.latitude if self.location else None,
            "longitude": self.location.longitude if self.location else None,
            "locationName": self.location_name,
            "note": self.note,
        }


@dataclass(frozen=True)
class Session:
    """A reconstructed shift. ``clock_out`` is ``None`` while still open."""

    user_id: Hashable
    clock_in: datetime
    clock_out: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.clock_out is None

    @property
    def duration_hours(self) -> float:
        if self.clock_out is None:
            return 0.0
        seconds = (self.clock_out - self.clock_in).total_seconds()
        return max(seconds, 0.0) / 3600.0

    def work_date(self, tz: Optional[tzinfo] = None) -> date:
        return local_date(self.clock_in, tz)

    def as_dict(self) -> dict:
        return {
            "userId": self.user_id,
            "clockIn": self.clock_in.isoformat(),
            "clockOut": self.clock_out.isoformat() if self.clock_out else None,
            "hours": round(self.duration_hours, 4),
            "open": self.is_open,
        }


@dataclass(frozen=True)
class DashboardStats:
    avg_hours_per_day: float
    daily_clock_ins: int
    total_hours_this_week: float

    def as_dict(self) -> dict:
        return {
            "avgHoursPerDay": self.avg_hours_per_day,
            "dailyClockIns": self.daily_clock_ins,
            "totalHoursThisWeek": self.total_hours_this_week,
        }
