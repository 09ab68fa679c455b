from __future__ import annotations

from abc import ABC, abstractmethod

from ..model import ClockEvent


class ReconciliationPolicy(ABC):
    """Strategy Pattern: decide which clock-in survives a repeated CLOCK_IN."""

    name: str = ""

    @abstractmethod
    def resolve_repeated_clock_in(self, *, open_in: ClockEvent, incoming: ClockEvent) -> ClockEvent:
        """Return the clock-in that stays open; the other one is dropped unpaired."""
        raise NotImplementedError
