from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_clock_event_repository import MySQLClockEventRepository
from .attendance.repository import ClockEventRepository
from .attendance.service import AttendanceReportService, ClockService
from .common.datetime_utils import resolve_timezone
from .core.constants import DEFAULT_MOVEMENT_THRESHOLD_M, DEFAULT_PERIMETER_RADIUS_M, DEFAULT_STATS_WINDOW_DAYS
from .database.connection import DBConfig, DatabaseConnection
from .ledger.factory import build_policy
from .organizations.mysql_organization_repository import MySQLOrganizationRepository
from .organizations.repository import OrganizationRepository
from .organizations.service import OrganizationService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    organizations_repo: OrganizationRepository
    events_repo: ClockEventRepository

    auth_service: AuthService
    user_service: UserService
    organization_service: OrganizationService
    clock_service: ClockService
    report_service: AttendanceReportService


def build_services(
    *,
    users_repo: UserRepository,
    organizations_repo: OrganizationRepository,
    events_repo: ClockEventRepository,
    conn: Optional[DatabaseConnection] = None,
    settings: object = None,
) -> Container:
    """Wire services over any repository implementation (MySQL or in-memory)."""

    def setting(name: str, default):
        return getattr(settings, name, default) if settings is not None else default

    organization_service = OrganizationService(
        organizations_repo,
        default_radius_meters=float(setting("DEFAULT_PERIMETER_RADIUS_M", DEFAULT_PERIMETER_RADIUS_M)),
        movement_threshold_meters=float(setting("MOVEMENT_THRESHOLD_M", DEFAULT_MOVEMENT_THRESHOLD_M)),
    )
    clock_service = ClockService(
        events_repo,
        organization_service,
        require_location=bool(setting("REQUIRE_LOCATION_FOR_CLOCK_IN", False)),
    )
    report_service = AttendanceReportService(
        events_repo,
        users_repo,
        policy=build_policy(setting("DUPLICATE_CLOCK_IN_POLICY", None)),
        tz=resolve_timezone(setting("REPORT_TIMEZONE", None)),
        window_days=int(setting("STATS_WINDOW_DAYS", DEFAULT_STATS_WINDOW_DAYS)),
    )

    return Container(
        conn=conn,
        users_repo=users_repo,
        organizations_repo=organizations_repo,
        events_repo=events_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        organization_service=organization_service,
        clock_service=clock_service,
        report_service=report_service,
    )


def build_container(*, db_config: dict, settings: object = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return build_services(
        users_repo=MySQLUserRepository(conn),
        organizations_repo=MySQLOrganizationRepository(conn),
        events_repo=MySQLClockEventRepository(conn),
        conn=conn,
        settings=settings,
    )
