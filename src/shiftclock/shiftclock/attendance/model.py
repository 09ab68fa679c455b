from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Hashable, List, Mapping, Optional

from ..common.validators import require_field, validate_note
from ..core.enums import ClockKind
from ..core.exceptions import ContractViolation
from ..geo.model import Coordinate
from ..ledger.model import ClockEvent, Session


@dataclass(frozen=True)
class ClockRequest:
    """A proposed clock action, not yet accepted."""

    user_id: Hashable
    kind: ClockKind
    organization_id: Optional[str] = None
    location: Optional[Coordinate] = None
    location_name: Optional[str] = None
    note: Optional[str] = None

    @classmethod
    def from_payload(cls, user_id: Hashable, payload: Mapping[str, Any]) -> "ClockRequest":
        kind = require_field(payload.get("type") or payload.get("kind"), "type")
        try:
            kind = ClockKind(str(kind).upper())
        except ValueError as exc:
            raise ContractViolation(f"Unknown clock kind: {kind!r}") from exc

        return cls(
            user_id=user_id,
            kind=kind,
            organization_id=payload.get("organizationId") or payload.get("organization_id"),
            location=Coordinate.from_mapping(payload),
            location_name=payload.get("locationName") or payload.get("location_name"),
            note=validate_note(payload.get("note") or None),
        )


@dataclass(frozen=True)
class UserHistory:
    """Everything the staff history page shows, from one ledger pass."""

    user_id: Hashable
    events: List[ClockEvent]
    sessions: List[Session]
    total_hours: float
    avg_hours_per_day: float
    clocked_in: bool
    open_session: Optional[Session] = None

    def as_dict(self) -> dict:
        return {
            "userId": self.user_id,
            "events": [e.as_dict() for e in self.events],
            "sessions": [s.as_dict() for s in self.sessions],
            "totalHours": self.total_hours,
            "avgHoursPerDay": self.avg_hours_per_day,
            "isClockedIn": self.clocked_in,
            "openSession": self.open_session.as_dict() if self.open_session else None,
        }
