"""Session reconstruction from raw clock events.

Events may arrive in any order (stores typically hand them back newest
first), so everything here sorts internally by timestamp. ``sorted`` is
stable, which keeps insertion order for equal timestamps.
"""
from __future__ import annotations

from typing import Dict, Hashable, Iterable, List, Optional, Sequence

from ..core.enums import ClockKind
from .model import ClockEvent, Session
from .policies import LastClockInWins, ReconciliationPolicy

_DEFAULT_POLICY = LastClockInWins()


def _chronological(events: Iterable[ClockEvent]) -> List[ClockEvent]:
    return sorted(events, key=lambda e: e.timestamp)


def group_by_user(events: Iterable[ClockEvent]) -> Dict[Hashable, List[ClockEvent]]:
    """Split a mixed stream per user, keeping each user's insertion order."""
    grouped: Dict[Hashable, List[ClockEvent]] = {}
    for event in events:
        grouped.setdefault(event.user_id, []).append(event)
    return grouped


def pair_events(events: Sequence[ClockEvent], *, policy: Optional[ReconciliationPolicy] = None) -> List[Session]:
    """Pair one user's events into sessions.

    - CLOCK_IN while another is open: ``policy`` picks the survivor.
    - CLOCK_OUT with nothing open: orphan, dropped.
    - A clock-in still open at the end becomes an open session.
    """
    policy = policy or _DEFAULT_POLICY
    sessions: List[Session] = []
    open_in: Optional[ClockEvent] = None

    for event in _chronological(events):
        if event.kind == ClockKind.CLOCK_IN:
            if open_in is None:
                open_in = event
            else:
                open_in = policy.resolve_repeated_clock_in(open_in=open_in, incoming=event)
        elif open_in is not None:
            sessions.append(Session(user_id=open_in.user_id, clock_in=open_in.timestamp, clock_out=event.timestamp))
            open_in = None

    if open_in is not None:
        sessions.append(Session(user_id=open_in.user_id, clock_in=open_in.timestamp))
    return sessions


def reconstruct_sessions(
    events: Iterable[ClockEvent],
    user_id: Hashable,
    *,
    policy: Optional[ReconciliationPolicy] = None,
) -> List[Session]:
    """Chronological sessions of ``user_id``; other users' events are ignored."""
    return pair_events([e for e in events if e.user_id == user_id], policy=policy)


def sessions_by_user(
    events: Iterable[ClockEvent],
    *,
    policy: Optional[ReconciliationPolicy] = None,
) -> Dict[Hashable, List[Session]]:
    return {uid: pair_events(evts, policy=policy) for uid, evts in group_by_user(events).items()}


def latest_event(events: Iterable[ClockEvent]) -> Optional[ClockEvent]:
    """Most recent event by timestamp; on a tie the later-inserted one wins."""
    latest: Optional[ClockEvent] = None
    for event in events:
        if latest is None or event.timestamp >= latest.timestamp:
            latest = event
    return latest


def is_currently_clocked_in(events: Iterable[ClockEvent], user_id: Hashable) -> bool:
    latest = latest_event(e for e in events if e.user_id == user_id)
    return latest is not None and latest.kind == ClockKind.CLOCK_IN
