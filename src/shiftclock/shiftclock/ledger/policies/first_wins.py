from __future__ import annotations

from ..model import ClockEvent
from .base import ReconciliationPolicy


class FirstClockInWins(ReconciliationPolicy):
    """Keep the earliest unmatched clock-in and ignore later repeats."""

    name = "first_wins"

    def resolve_repeated_clock_in(self, *, open_in: ClockEvent, incoming: ClockEvent) -> ClockEvent:
        return open_in
