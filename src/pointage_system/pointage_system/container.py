from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from zoneinfo import ZoneInfo

from .core.constants import DEFAULT_DISPLAY_TIMEZONE, DEFAULT_LOCATION_TIMEOUT_SECONDS
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_event_repository import MySQLEmployeeEventRepository
from .employees.repository import EmployeeEventRepository
from .employees.service import EmployeeEventService
from .reports.service import AdminReportService
from .rotations.mysql_rotation_repository import MySQLRotationRepository
from .rotations.repository import RotationRepository
from .rotations.service import RotationService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]
    tz: ZoneInfo
    location_timeout: float

    rotations_repo: RotationRepository
    events_repo: EmployeeEventRepository

    rotation_service: RotationService
    event_service: EmployeeEventService
    report_service: AdminReportService


def wire(
    *,
    rotations_repo: RotationRepository,
    events_repo: EmployeeEventRepository,
    conn: Optional[DatabaseConnection] = None,
    display_timezone: str = DEFAULT_DISPLAY_TIMEZONE,
    export_with_bom: bool = True,
    location_timeout: float = DEFAULT_LOCATION_TIMEOUT_SECONDS,
) -> Container:
    tz = ZoneInfo(display_timezone)
    rotation_service = RotationService(rotations_repo)
    event_service = EmployeeEventService(events_repo)
    report_service = AdminReportService(
        rotation_service,
        event_service,
        tz=tz,
        export_with_bom=export_with_bom,
    )

    return Container(
        conn=conn,
        tz=tz,
        location_timeout=float(location_timeout),
        rotations_repo=rotations_repo,
        events_repo=events_repo,
        rotation_service=rotation_service,
        event_service=event_service,
        report_service=report_service,
    )


def build_container(
    *,
    db_config: dict,
    display_timezone: str = DEFAULT_DISPLAY_TIMEZONE,
    export_with_bom: bool = True,
    location_timeout: float = DEFAULT_LOCATION_TIMEOUT_SECONDS,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire(
        rotations_repo=MySQLRotationRepository(conn),
        events_repo=MySQLEmployeeEventRepository(conn),
        conn=conn,
        display_timezone=display_timezone,
        export_with_bom=export_with_bom,
        location_timeout=location_timeout,
    )
