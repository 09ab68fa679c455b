from .base import ReconciliationPolicy
from .first_wins import FirstClockInWins
from .last_wins import LastClockInWins

__all__ = ["FirstClockInWins", "LastClockInWins", "ReconciliationPolicy"]
