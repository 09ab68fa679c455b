from __future__ import annotations

from datetime import datetime
from typing import Hashable, Optional, Protocol, Sequence

from ..ledger.model import ClockEvent


class ClockEventRepository(Protocol):
    """Append-only store of clock events.

    Reads return newest first; callers must not rely on that order.
    """

    def append(self, event: ClockEvent) -> ClockEvent:
        raise NotImplementedError

    def list_for_user(self, user_id: Hashable) -> Sequence[ClockEvent]:
        raise NotImplementedError

    def list_all(self, *, since: Optional[datetime] = None) -> Sequence[ClockEvent]:
        raise NotImplementedError
