"""Example: the ledger and perimeter check without Flask or a database."""

from datetime import datetime, timezone

from shiftclock.core.enums import ClockKind
from shiftclock.geo import Coordinate, PerimeterPolicy, distance_meters, is_within_perimeter
from shiftclock.ledger import ClockEvent, is_currently_clocked_in, reconstruct_sessions, total_hours


def at(hour: int) -> datetime:
    return datetime(2026, 3, 2, hour, 0, tzinfo=timezone.utc)


def main():
    events = [
        ClockEvent(user_id=1, kind=ClockKind.CLOCK_OUT, timestamp=at(17)),
        ClockEvent(user_id=1, kind=ClockKind.CLOCK_IN, timestamp=at(9)),
        ClockEvent(user_id=1, kind=ClockKind.CLOCK_IN, timestamp=at(8)),
    ]
    sessions = reconstruct_sessions(events, 1)
    print(sessions, total_hours(sessions), is_currently_clocked_in(events, 1))

    policy = PerimeterPolicy(center=Coordinate(0.0, 0.0), radius_meters=2000)
    point = Coordinate(0.0, 0.01)
    print(round(distance_meters(point, policy.center)), is_within_perimeter(point, policy))


if __name__ == "__main__":
    main()
