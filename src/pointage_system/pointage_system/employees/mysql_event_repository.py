from __future__ import annotations

from typing import Sequence

from ..common.datetime_utils import now_utc
from ..core.enums import EventType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, from_db_datetime, to_db_datetime
from .model import EmployeeEvent, EventSubmission, Location
from .repository import EmployeeEventRepository


class MySQLEmployeeEventRepository(EmployeeEventRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_event(self, submission: EventSubmission) -> EmployeeEvent:
        created_at = now_utc()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employee_events(nom, telephone, hotel, type, latitude, longitude, timestamp, created_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    submission.name,
                    submission.phone,
                    submission.hotel,
                    submission.event_type.value,
                    submission.location.latitude,
                    submission.location.longitude,
                    to_db_datetime(submission.timestamp),
                    to_db_datetime(created_at),
                ),
            )
            event_id = int(cur.lastrowid)

        return EmployeeEvent(
            event_id=event_id,
            name=submission.name,
            phone=submission.phone,
            hotel=submission.hotel,
            event_type=submission.event_type,
            location=submission.location,
            timestamp=submission.timestamp,
            created_at=created_at,
        )

    def list_events(self) -> Sequence[EmployeeEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT event_id, nom, telephone, hotel, type, latitude, longitude, timestamp, created_at
                FROM employee_events
                ORDER BY timestamp DESC, event_id DESC
                """
            )
            rows = fetchall(cur)

        return [
            EmployeeEvent(
                event_id=int(r["event_id"]),
                name=r["nom"],
                phone=r["telephone"],
                hotel=r["hotel"],
                event_type=EventType(r["type"]),
                location=Location(latitude=float(r["latitude"]), longitude=float(r["longitude"])),
                timestamp=from_db_datetime(r["timestamp"]),
                created_at=from_db_datetime(r["created_at"]),
            )
            for r in rows
        ]
