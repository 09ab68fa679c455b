from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for access checks."""

    MANAGER = "MANAGER"
    CARE_WORKER = "CARE_WORKER"


class ClockKind(str, Enum):
    """Kind of a clock event."""

    CLOCK_IN = "CLOCK_IN"
    CLOCK_OUT = "CLOCK_OUT"


class PerimeterTransition(str, Enum):
    """Change of inside/outside state between two location samples."""

    ENTERED = "ENTERED"
    EXITED = "EXITED"
