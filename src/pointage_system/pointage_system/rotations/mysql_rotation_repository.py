from __future__ import annotations

from collections import defaultdict
from typing import Iterable, Sequence

from ..common.datetime_utils import now_utc
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, from_db_datetime, like_pattern, to_db_datetime
from .model import ClockEntry, RotationQuery, RotationRecord, RotationSubmission, Submitter, SubmitterWithEntries
from .repository import RotationRepository


def _placeholders(values: Sequence[object]) -> str:
    return ",".join(["%s"] * len(values))


class MySQLRotationRepository(RotationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_submission(self, submission: RotationSubmission) -> SubmitterWithEntries:
        created_at = now_utc()
        s = submission.submitter

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO submitters(nom, telephone, hotel, created_at)
                VALUES(%s,%s,%s,%s)
                """,
                (s.name, s.phone, s.hotel, to_db_datetime(created_at)),
            )
            submitter = Submitter(name=s.name, phone=s.phone, hotel=s.hotel, submitter_id=int(cur.lastrowid))

            entries: list[ClockEntry] = []
            for day in submission.dates:
                cur.execute(
                    """
                    INSERT INTO clock_entries(submitter_id, work_date, created_at)
                    VALUES(%s,%s,%s)
                    """,
                    (submitter.submitter_id, day.work_date, to_db_datetime(created_at)),
                )
                entry_id = int(cur.lastrowid)

                records: list[RotationRecord] = []
                for r in day.rotations:
                    cur.execute(
                        """
                        INSERT INTO rotation_records(entry_id, matricule, rotations)
                        VALUES(%s,%s,%s)
                        """,
                        (entry_id, r.bus_identifier, r.rotation_count),
                    )
                    records.append(
                        RotationRecord(
                            bus_identifier=r.bus_identifier,
                            rotation_count=r.rotation_count,
                            record_id=int(cur.lastrowid),
                        )
                    )

                entries.append(
                    ClockEntry(
                        entry_id=entry_id,
                        work_date=day.work_date,
                        submitter=submitter,
                        created_at=created_at,
                        rotations=tuple(records),
                    )
                )

        return SubmitterWithEntries(submitter=submitter, created_at=created_at, entries=tuple(entries))

    def list_entries(self, query: RotationQuery) -> Sequence[ClockEntry]:
        clauses: list[str] = []
        params: list[object] = []

        if query.work_date is not None:
            clauses.append("e.work_date=%s")
            params.append(query.work_date)
        if query.search is not None:
            pattern = like_pattern(query.search.lower())
            clauses.append("(LOWER(s.nom) LIKE %s OR LOWER(s.hotel) LIKE %s OR LOWER(s.telephone) LIKE %s)")
            params.extend([pattern, pattern, pattern])

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    e.entry_id, e.work_date, e.created_at,
                    s.submitter_id, s.nom, s.telephone, s.hotel
                FROM clock_entries e
                JOIN submitters s ON s.submitter_id = e.submitter_id
                {where}
                ORDER BY e.created_at DESC, e.entry_id DESC
                """,
                tuple(params),
            )
            rows = fetchall(cur)
            records = self._records_for(cur, [int(r["entry_id"]) for r in rows])

        return [
            ClockEntry(
                entry_id=int(r["entry_id"]),
                work_date=r["work_date"],
                submitter=Submitter(
                    name=r["nom"],
                    phone=r["telephone"],
                    hotel=r["hotel"],
                    submitter_id=int(r["submitter_id"]),
                ),
                created_at=from_db_datetime(r["created_at"]),
                rotations=tuple(records.get(int(r["entry_id"]), ())),
            )
            for r in rows
        ]

    def list_submitters(self) -> Sequence[SubmitterWithEntries]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT submitter_id, nom, telephone, hotel, created_at
                FROM submitters
                ORDER BY created_at DESC, submitter_id DESC
                """
            )
            submitter_rows = fetchall(cur)
            ids = [int(r["submitter_id"]) for r in submitter_rows]

            entry_rows: list[dict] = []
            if ids:
                cur.execute(
                    f"""
                    SELECT entry_id, submitter_id, work_date, created_at
                    FROM clock_entries
                    WHERE submitter_id IN ({_placeholders(ids)})
                    ORDER BY entry_id ASC
                    """,
                    tuple(ids),
                )
                entry_rows = fetchall(cur)
            records = self._records_for(cur, [int(r["entry_id"]) for r in entry_rows])

        submitters = {
            int(r["submitter_id"]): Submitter(
                name=r["nom"], phone=r["telephone"], hotel=r["hotel"], submitter_id=int(r["submitter_id"])
            )
            for r in submitter_rows
        }
        entries_by_submitter: dict[int, list[ClockEntry]] = defaultdict(list)
        for r in entry_rows:
            sid = int(r["submitter_id"])
            entries_by_submitter[sid].append(
                ClockEntry(
                    entry_id=int(r["entry_id"]),
                    work_date=r["work_date"],
                    submitter=submitters[sid],
                    created_at=from_db_datetime(r["created_at"]),
                    rotations=tuple(records.get(int(r["entry_id"]), ())),
                )
            )

        return [
            SubmitterWithEntries(
                submitter=submitters[int(r["submitter_id"])],
                created_at=from_db_datetime(r["created_at"]),
                entries=tuple(entries_by_submitter.get(int(r["submitter_id"]), ())),
            )
            for r in submitter_rows
        ]

    @staticmethod
    def _records_for(cur, entry_ids: Iterable[int]) -> dict[int, list[RotationRecord]]:
        ids = list(entry_ids)
        if not ids:
            return {}

        cur.execute(
            f"""
            SELECT record_id, entry_id, matricule, rotations
            FROM rotation_records
            WHERE entry_id IN ({_placeholders(ids)})
            ORDER BY record_id ASC
            """,
            tuple(ids),
        )
        out: dict[int, list[RotationRecord]] = defaultdict(list)
        for r in fetchall(cur):
            out[int(r["entry_id"])].append(
                RotationRecord(
                    bus_identifier=r["matricule"],
                    rotation_count=int(r["rotations"]),
                    record_id=int(r["record_id"]),
                )
            )
        return out
