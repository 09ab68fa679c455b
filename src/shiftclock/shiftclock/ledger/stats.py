from __future__ import annotations

from collections import defaultdict
from datetime import date, datetime, timedelta, tzinfo
from typing import Dict, Hashable, Iterable, List, Optional, Set

from ..core.constants import DEFAULT_CLOCK_IN_PERIOD_HOURS, DEFAULT_STATS_WINDOW_DAYS
from ..core.enums import ClockKind
from .model import ClockEvent, DashboardStats, Session
from .policies import ReconciliationPolicy
from .sessions import group_by_user, latest_event, sessions_by_user


def total_hours(sessions: Iterable[Session]) -> float:
    """Completed hours. Open sessions add nothing; reversed ones count as 0."""
    return sum(s.duration_hours for s in sessions if not s.is_open)


def _in_window(moment: datetime, start: datetime, end: datetime) -> bool:
    """Half-open: ``window_end`` belongs to the next window."""
    return start <= moment < end


def events_in_window(events: Iterable[ClockEvent], window_start: datetime, window_end: datetime) -> List[ClockEvent]:
    return [e for e in events if _in_window(e.timestamp, window_start, window_end)]


def daily_hours(
    sessions: Iterable[Session],
    window_start: datetime,
    window_end: datetime,
    tz: Optional[tzinfo] = None,
) -> Dict[date, float]:
    """Completed hours per calendar day of clock-in, inside the window."""
    per_day: Dict[date, float] = defaultdict(float)
    for s in sessions:
        if s.is_open or not _in_window(s.clock_in, window_start, window_end):
            continue
        per_day[s.work_date(tz)] += s.duration_hours
    return dict(per_day)


def daily_average_hours(
    sessions: Iterable[Session],
    window_start: datetime,
    window_end: datetime,
    tz: Optional[tzinfo] = None,
) -> float:
    """Average over days that actually have a session, not over the window length."""
    per_day = daily_hours(sessions, window_start, window_end, tz)
    if not per_day:
        return 0.0
    return sum(per_day.values()) / len(per_day)


def weekly_stats_by_user(
    all_events: Iterable[ClockEvent],
    window_start: datetime,
    window_end: datetime,
    *,
    policy: Optional[ReconciliationPolicy] = None,
) -> Dict[Hashable, float]:
    """Hours per user from events inside the window.

    Every user present in ``all_events`` gets an entry, 0.0 when idle.
    """
    all_events = list(all_events)
    stats: Dict[Hashable, float] = {uid: 0.0 for uid in group_by_user(all_events)}
    windowed = events_in_window(all_events, window_start, window_end)
    for uid, sessions in sessions_by_user(windowed, policy=policy).items():
        stats[uid] = total_hours(sessions)
    return stats


def clocked_in_user_ids(all_events: Iterable[ClockEvent]) -> Set[Hashable]:
    out: Set[Hashable] = set()
    for uid, events in group_by_user(all_events).items():
        latest = latest_event(events)
        if latest is not None and latest.kind == ClockKind.CLOCK_IN:
            out.add(uid)
    return out


def daily_clock_ins(
    all_events: Iterable[ClockEvent],
    now: datetime,
    *,
    period: timedelta = timedelta(hours=DEFAULT_CLOCK_IN_PERIOD_HOURS),
) -> int:
    start = now - period
    return sum(1 for e in all_events if e.kind == ClockKind.CLOCK_IN and start <= e.timestamp <= now)


def dashboard_stats(
    all_events: Iterable[ClockEvent],
    now: datetime,
    *,
    window: timedelta = timedelta(days=DEFAULT_STATS_WINDOW_DAYS),
    tz: Optional[tzinfo] = None,
    policy: Optional[ReconciliationPolicy] = None,
) -> DashboardStats:
    all_events = list(all_events)
    start = now - window
    windowed = events_in_window(all_events, start, now)

    per_user = sessions_by_user(windowed, policy=policy)
    every_session = [s for sessions in per_user.values() for s in sessions]

    return DashboardStats(
        avg_hours_per_day=daily_average_hours(every_session, start, now, tz),
        daily_clock_ins=daily_clock_ins(all_events, now),
        total_hours_this_week=sum(total_hours(sessions) for sessions in per_user.values()),
    )
