from __future__ import annotations

from ..model import ClockEvent
from .base import ReconciliationPolicy


class LastClockInWins(ReconciliationPolicy):
    """A repeated clock-in supersedes the earlier unmatched one."""

    name = "last_wins"

    def resolve_repeated_clock_in(self, *, open_in: ClockEvent, incoming: ClockEvent) -> ClockEvent:
        return incoming
