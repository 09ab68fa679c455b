from __future__ import annotations

from typing import Any, Dict, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Organization
from .repository import OrganizationRepository

_COLUMNS = "organization_id, name, latitude, longitude, radius_meters, location_name"


def _to_organization(row: Dict[str, Any]) -> Organization:
    return Organization(
        organization_id=str(row["organization_id"]),
        name=row["name"],
        latitude=float(row["latitude"]),
        longitude=float(row["longitude"]),
        radius_meters=float(row["radius_meters"]),
        location_name=row.get("location_name"),
    )


class MySQLOrganizationRepository(OrganizationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, organization_id: str) -> Optional[Organization]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM organizations WHERE organization_id=%s", (organization_id,))
            row = fetchone(cur)
            return _to_organization(row) if row else None

    def get_first(self) -> Optional[Organization]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM organizations ORDER BY organization_id LIMIT 1")
            row = fetchone(cur)
            return _to_organization(row) if row else None

    def upsert(self, organization: Organization) -> Organization:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO organizations(organization_id, name, latitude, longitude, radius_meters, location_name)
                VALUES(%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    name=VALUES(name),
                    latitude=VALUES(latitude),
                    longitude=VALUES(longitude),
                    radius_meters=VALUES(radius_meters),
                    location_name=VALUES(location_name)
                """,
                (
                    organization.organization_id,
                    organization.name,
                    organization.latitude,
                    organization.longitude,
                    organization.radius_meters,
                    organization.location_name,
                ),
            )
        return organization
