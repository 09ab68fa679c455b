from __future__ import annotations

from typing import Optional

from ..core.constants import DEFAULT_MOVEMENT_THRESHOLD_M
from ..core.enums import PerimeterTransition
from .model import Coordinate, PerimeterPolicy
from .perimeter import distance_meters, is_within_perimeter


class PerimeterWatch:
    """Follows a stream of location samples for one client.

    Samples that moved less than ``min_movement_meters`` from the last
    accepted one are ignored. One instance per client; not thread-safe.
    """

    def __init__(self, policy: PerimeterPolicy, *, min_movement_meters: float = DEFAULT_MOVEMENT_THRESHOLD_M):
        self._policy = policy
        self._min_movement = float(min_movement_meters)
        self._last: Optional[Coordinate] = None
        self._inside: Optional[bool] = None

    @property
    def inside(self) -> Optional[bool]:
        return self._inside

    @property
    def last_sample(self) -> Optional[Coordinate]:
        return self._last

    def has_moved(self, point: Coordinate) -> bool:
        if self._last is None:
            return True
        return distance_meters(self._last, point) >= self._min_movement

    def observe(self, point: Coordinate) -> Optional[PerimeterTransition]:
        if not self.has_moved(point):
            return None

        self._last = point
        was_inside = self._inside
        self._inside = is_within_perimeter(point, self._policy)

        if was_inside is None or was_inside == self._inside:
            return None
        return PerimeterTransition.ENTERED if self._inside else PerimeterTransition.EXITED


def should_remind_clock_out(transition: Optional[PerimeterTransition], clocked_in: bool) -> bool:
    """Leaving the perimeter while still clocked in."""
    return clocked_in and transition == PerimeterTransition.EXITED
