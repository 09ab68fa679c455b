from __future__ import annotations

import csv
import io
import logging
from datetime import datetime, timedelta, tzinfo
from typing import Hashable, List, Optional, Sequence

from ..common.datetime_utils import now_utc
from ..core.constants import DEFAULT_STATS_WINDOW_DAYS
from ..core.enums import ClockKind
from ..core.exceptions import OutOfPerimeter, ValidationError
from ..geo.perimeter import distance_meters, is_within_perimeter
from ..ledger import (
    ClockEvent,
    DashboardStats,
    clocked_in_user_ids,
    daily_average_hours,
    dashboard_stats,
    is_currently_clocked_in,
    reconstruct_sessions,
    total_hours,
    weekly_stats_by_user,
)
from ..ledger.policies import ReconciliationPolicy
from ..organizations.service import OrganizationService
from ..users.model import User
from ..users.repository import UserRepository
from .model import ClockRequest, UserHistory
from .repository import ClockEventRepository

logger = logging.getLogger(__name__)


def _oldest_first(events: Sequence[ClockEvent]) -> List[ClockEvent]:
    # The store hands events back newest first. Reversing restores append
    # order, which the ledger uses to break timestamp ties.
    return list(reversed(events))


class ClockService:
    """Use case: accept or reject a clock action, then append it."""

    def __init__(
        self,
        events: ClockEventRepository,
        organizations: OrganizationService,
        *,
        require_location: bool = False,
    ):
        self._events = events
        self._organizations = organizations
        self._require_location = bool(require_location)

    def clock(self, request: ClockRequest, *, now: Optional[datetime] = None) -> ClockEvent:
        now = now or now_utc()

        org = self._organizations.get(request.organization_id) if request.organization_id else self._organizations.get_current()
        if not org:
            raise ValidationError("Organization not found")

        if request.kind == ClockKind.CLOCK_IN:
            self._check_location(request, org)

        event = ClockEvent(
            user_id=request.user_id,
            kind=request.kind,
            timestamp=now,
            organization_id=org.organization_id,
            location=request.location,
            location_name=request.location_name,
            note=request.note,
        )
        saved = self._events.append(event)
        logger.info("User %s %s at %s (org=%s)", saved.user_id, saved.kind.value, saved.timestamp.isoformat(), org.organization_id)
        return saved

    def _check_location(self, request: ClockRequest, org) -> None:
        if request.location is None:
            # Geolocation can fail silently on the device; that alone does not block a clock-in.
            if self._require_location:
                raise ValidationError("Location is required to clock in")
            logger.info("User %s clocking in without a location", request.user_id)
            return

        policy = org.policy
        if not is_within_perimeter(request.location, policy):
            distance = distance_meters(request.location, policy.center)
            logger.info(
                "Rejected clock-in for user %s: %.0fm from center, allowed %.0fm",
                request.user_id, distance, policy.radius_meters,
            )
            raise OutOfPerimeter(distance, policy.radius_meters)


class AttendanceReportService:
    """Read side: history, status and manager statistics.

    Every figure comes from the ledger; nothing here pairs events by itself.
    """

    def __init__(
        self,
        events: ClockEventRepository,
        users: UserRepository,
        *,
        policy: Optional[ReconciliationPolicy] = None,
        tz: Optional[tzinfo] = None,
        window_days: int = DEFAULT_STATS_WINDOW_DAYS,
    ):
        self._events = events
        self._users = users
        self._policy = policy
        self._tz = tz
        self._window = timedelta(days=int(window_days))

    def history_for_user(self, user_id: Hashable, *, now: Optional[datetime] = None) -> UserHistory:
        now = now or now_utc()
        newest_first = list(self._events.list_for_user(user_id))
        events = _oldest_first(newest_first)

        sessions = reconstruct_sessions(events, user_id, policy=self._policy)
        avg = daily_average_hours(sessions, sessions[0].clock_in, now, self._tz) if sessions else 0.0
        open_session = sessions[-1] if sessions and sessions[-1].is_open else None

        return UserHistory(
            user_id=user_id,
            events=newest_first,
            sessions=sessions,
            total_hours=total_hours(sessions),
            avg_hours_per_day=avg,
            clocked_in=is_currently_clocked_in(events, user_id),
            open_session=open_session,
        )

    def current_status(self, user_id: Hashable) -> dict:
        events = _oldest_first(self._events.list_for_user(user_id))
        sessions = reconstruct_sessions(events, user_id, policy=self._policy)
        open_session = sessions[-1] if sessions and sessions[-1].is_open else None
        return {
            "isClockedIn": is_currently_clocked_in(events, user_id),
            "openSession": open_session.as_dict() if open_session else None,
        }

    def clocked_in_users(self) -> List[User]:
        ids = clocked_in_user_ids(self._events.list_all())
        users = [self._users.get_by_id(uid) for uid in sorted(ids, key=str)]
        return [u for u in users if u is not None]

    def weekly_user_stats(self, *, now: Optional[datetime] = None) -> List[dict]:
        now = now or now_utc()
        events = _oldest_first(self._events.list_all())
        hours = weekly_stats_by_user(events, now - self._window, now, policy=self._policy)

        out: List[dict] = []
        for user in self._users.list_all():
            out.append(
                {
                    "userId": user.user_id,
                    "userName": user.display_name,
                    "totalHours": hours.pop(user.user_id, 0.0),
                }
            )
        # Events of users no longer in the directory still count.
        for uid, total in hours.items():
            out.append({"userId": uid, "userName": str(uid), "totalHours": total})
        return out

    def dashboard_stats(self, *, now: Optional[datetime] = None) -> DashboardStats:
        now = now or now_utc()
        events = _oldest_first(self._events.list_all(since=now - self._window))
        return dashboard_stats(events, now, window=self._window, tz=self._tz, policy=self._policy)

    def all_history(self) -> List[ClockEvent]:
        return list(self._events.list_all())

    def history_csv(self) -> bytes:
        names = {u.user_id: u.display_name for u in self._users.list_all()}

        out = io.StringIO()
        writer = csv.DictWriter(
            out,
            fieldnames=["timestamp", "user_id", "user_name", "type", "latitude", "longitude", "location_name", "note"],
        )
        writer.writeheader()
        for e in self.all_history():
            writer.writerow(
                {
                    "timestamp": e.timestamp.isoformat(),
                    "user_id": e.user_id,
                    "user_name": names.get(e.user_id, ""),
                    "type": e.kind.value,
                    "latitude": e.location.latitude if e.location else "",
                    "longitude": e.location.longitude if e.location else "",
                    "location_name": e.location_name or "",
                    "note": e.note or "",
                }
            )
        return out.getvalue().encode("utf-8-sig")
