"""Attendance ledger: sessions and hour statistics from raw clock events.

Everything here is pure; each call only reads its input and returns fresh
values, so it is safe to call from concurrent request handlers.
"""
from .factory import build_policy
from .model import ClockEvent, DashboardStats, Session
from .sessions import is_currently_clocked_in, reconstruct_sessions, sessions_by_user
from .stats import (
    clocked_in_user_ids,
    daily_average_hours,
    daily_clock_ins,
    dashboard_stats,
    total_hours,
    weekly_stats_by_user,
)

__all__ = [
    "ClockEvent",
    "DashboardStats",
    "Session",
    "build_policy",
    "clocked_in_user_ids",
    "daily_average_hours",
    "daily_clock_ins",
    "dashboard_stats",
    "is_currently_clocked_in",
    "reconstruct_sessions",
    "sessions_by_user",
    "total_hours",
    "weekly_stats_by_user",
]
