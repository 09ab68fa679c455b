from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from shiftclock.core.enums import ClockKind
from shiftclock.ledger import (
    ClockEvent,
    Session,
    clocked_in_user_ids,
    daily_average_hours,
    daily_clock_ins,
    dashboard_stats,
    total_hours,
    weekly_stats_by_user,
)


def at(day: int, hour: int, minute: int = 0) -> datetime:
    return datetime(2026, 3, day, hour, minute, tzinfo=timezone.utc)


def ev(kind: str, when: datetime, user_id=1) -> ClockEvent:
    return ClockEvent(user_id=user_id, kind=ClockKind(kind), timestamp=when)


def test_total_hours_ignores_open_and_clamps_reversed_sessions():
    sessions = [
        Session(1, at(2, 8), at(2, 12)),
        Session(1, at(2, 18), at(2, 17)),
        Session(1, at(3, 8)),
    ]

    assert total_hours(sessions) == 4.0


def test_total_hours_never_negative():
    sessions = [Session(1, at(2, 18), at(2, 8)), Session(1, at(3, 9), at(3, 1))]
    assert total_hours(sessions) == 0.0


def test_daily_average_counts_only_active_days():
    sessions = [
        Session(1, at(2, 8), at(2, 16)),
        Session(1, at(2, 18), at(2, 20)),
        Session(1, at(5, 9), at(5, 15)),
        Session(1, at(6, 9)),
    ]

    avg = daily_average_hours(sessions, at(1, 0), at(8, 0))

    # (8 + 2 + 6) / 2 active days, not / 7
    assert avg == 8.0


def test_daily_average_respects_window():
    sessions = [Session(1, at(1, 8), at(1, 18)), Session(1, at(4, 8), at(4, 12))]

    assert daily_average_hours(sessions, at(2, 0), at(8, 0)) == 4.0
    assert daily_average_hours(sessions, at(9, 0), at(10, 0)) == 0.0


def test_daily_average_buckets_by_clock_in_day_in_reporting_timezone():
    # 23:00 UTC on the 2nd is already the 3rd in Ho Chi Minh City (UTC+7).
    sessions = [Session(1, at(2, 23), at(3, 3)), Session(1, at(3, 2), at(3, 6))]
    window = (at(1, 0), at(8, 0))

    assert daily_average_hours(sessions, *window) == 4.0
    assert daily_average_hours(sessions, *window, tz=ZoneInfo("Asia/Ho_Chi_Minh")) == 8.0


def test_weekly_stats_per_user_within_window():
    events = [
        ev("CLOCK_IN", at(2, 8), 1),
        ev("CLOCK_OUT", at(2, 16), 1),
        ev("CLOCK_IN", at(3, 8), 1),
        ev("CLOCK_OUT", at(3, 12), 1),
        ev("CLOCK_IN", at(2, 10), 2),
        ev("CLOCK_OUT", at(2, 11, 30), 2),
        ev("CLOCK_IN", at(4, 22), 2),
        ev("CLOCK_IN", at(20, 8), 3),
        ev("CLOCK_OUT", at(20, 9), 3),
    ]

    stats = weekly_stats_by_user(events, at(1, 0), at(8, 0))

    assert stats == {1: 12.0, 2: 1.5, 3: 0.0}


def test_weekly_stats_drop_clock_out_whose_clock_in_is_before_window():
    events = [ev("CLOCK_IN", at(1, 22)), ev("CLOCK_OUT", at(2, 6))]

    assert weekly_stats_by_user(events, at(2, 0), at(8, 0)) == {1: 0.0}


def test_weekly_stats_accept_any_order():
    events = [ev("CLOCK_OUT", at(2, 16)), ev("CLOCK_IN", at(2, 8))]
    assert weekly_stats_by_user(events, at(1, 0), at(8, 0)) == {1: 8.0}


def test_clocked_in_user_ids():
    events = [
        ev("CLOCK_IN", at(2, 8), "a"),
        ev("CLOCK_IN", at(2, 9), "b"),
        ev("CLOCK_OUT", at(2, 17), "b"),
        ev("CLOCK_OUT", at(2, 7), "c"),
        ev("CLOCK_IN", at(2, 6), "c"),
        ev("CLOCK_OUT", at(2, 5), "d"),
    ]

    assert clocked_in_user_ids(events) == {"a"}
    assert clocked_in_user_ids([]) == set()


def test_daily_clock_ins_counts_last_24_hours():
    now = at(5, 12)
    events = [
        ev("CLOCK_IN", at(4, 11)),
        ev("CLOCK_IN", at(4, 13)),
        ev("CLOCK_OUT", at(4, 20)),
        ev("CLOCK_IN", at(5, 8), 2),
    ]

    assert daily_clock_ins(events, now) == 2
    assert daily_clock_ins(events, now, period=timedelta(hours=5)) == 1


def test_dashboard_stats():
    now = at(8, 12)
    events = [
        ev("CLOCK_IN", at(2, 8), 1),
        ev("CLOCK_OUT", at(2, 16), 1),
        ev("CLOCK_IN", at(2, 9), 2),
        ev("CLOCK_OUT", at(2, 13), 2),
        ev("CLOCK_IN", at(7, 20), 1),
        ev("CLOCK_OUT", at(8, 2), 1),
        ev("CLOCK_IN", at(8, 9), 2),
        # outside the 7-day window
        ev("CLOCK_IN", at(1, 1), 3),
        ev("CLOCK_OUT", at(1, 9), 3),
    ]

    stats = dashboard_stats(events, now)

    assert stats.total_hours_this_week == pytest.approx(18.0)
    # day 2: 8 + 4, day 7: 6
    assert stats.avg_hours_per_day == pytest.approx(9.0)
    assert stats.daily_clock_ins == 2
    assert stats.as_dict() == {
        "avgHoursPerDay": stats.avg_hours_per_day,
        "dailyClockIns": 2,
        "totalHoursThisWeek": stats.total_hours_this_week,
    }


def test_dashboard_stats_empty():
    stats = dashboard_stats([], at(8, 12))

    assert stats.avg_hours_per_day == 0.0
    assert stats.daily_clock_ins == 0
    assert stats.total_hours_this_week == 0.0


def test_window_end_belongs_to_the_next_window():
    events = [ev("CLOCK_IN", at(7, 20)), ev("CLOCK_OUT", at(8, 0))]
    midnight_session = [Session(1, at(8, 0), at(8, 4))]

    assert weekly_stats_by_user(events, at(1, 0), at(8, 0)) == {1: 0.0}
    assert weekly_stats_by_user(events, at(1, 0), at(8, 1)) == {1: 4.0}
    assert daily_average_hours(midnight_session, at(1, 0), at(8, 0)) == 0.0
    assert daily_average_hours(midnight_session, at(8, 0), at(15, 0)) == 4.0
