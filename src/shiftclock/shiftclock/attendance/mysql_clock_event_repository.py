from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Any, Dict, Hashable, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, from_db_datetime, to_db_datetime
from ..ledger.model import ClockEvent
from .repository import ClockEventRepository

_COLUMNS = "event_id, user_id, organization_id, kind, occurred_at, latitude, longitude, location_name, note"


def _to_event(row: Dict[str, Any]) -> ClockEvent:
    return ClockEvent.from_mapping(
        {
            "event_id": int(row["event_id"]),
            "user_id": int(row["user_id"]),
            "organization_id": row.get("organization_id"),
            "kind": row["kind"],
            "timestamp": from_db_datetime(row["occurred_at"]),
            "latitude": row.get("latitude"),
            "longitude": row.get("longitude"),
            "location_name": row.get("location_name"),
            "note": row.get("note"),
        }
    )


class MySQLClockEventRepository(ClockEventRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def append(self, event: ClockEvent) -> ClockEvent:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO clock_events(user_id, organization_id, kind, occurred_at, latitude, longitude, location_name, note)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    event.user_id,
                    event.organization_id,
                    event.kind.value,
                    to_db_datetime(event.timestamp),
                    event.location.latitude if event.location else None,
                    event.location.longitude if event.location else None,
                    event.location_name,
                    event.note,
                ),
            )
            return replace(event, event_id=int(cur.lastrowid))

    def list_for_user(self, user_id: Hashable) -> Sequence[ClockEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM clock_events WHERE user_id=%s ORDER BY occurred_at DESC, event_id DESC",
                (user_id,),
            )
            return [_to_event(r) for r in fetchall(cur)]

    def list_all(self, *, since: Optional[datetime] = None) -> Sequence[ClockEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            if since is None:
                cur.execute(f"SELECT {_COLUMNS} FROM clock_events ORDER BY occurred_at DESC, event_id DESC")
            else:
                cur.execute(
                    f"SELECT {_COLUMNS} FROM clock_events WHERE occurred_at >= %s ORDER BY occurred_at DESC, event_id DESC",
                    (to_db_datetime(since),),
                )
            return [_to_event(r) for r in fetchall(cur)]
