from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError
from .policies import FirstClockInWins, LastClockInWins, ReconciliationPolicy

_POLICIES = {
    LastClockInWins.name: LastClockInWins,
    FirstClockInWins.name: FirstClockInWins,
}


def build_policy(name: Optional[str] = None) -> ReconciliationPolicy:
    """Factory: policy by its config name, ``last_wins`` when unset."""
    key = (name or LastClockInWins.name).strip().lower()
    try:
        return _POLICIES[key]()
    except KeyError:
        raise ValidationError(f"Unknown duplicate clock-in policy: {name!r}") from None
