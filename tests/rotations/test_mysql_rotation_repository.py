from __future__ import annotations

from datetime import date, datetime

import mysql.connector
import pytest

from src.pointage_system.pointage_system.core.exceptions import StoreError
from src.pointage_system.pointage_system.rotations.model import (
    DateSubmission,
    RotationQuery,
    RotationRecord,
    RotationSubmission,
    Submitter,
)
from src.pointage_system.pointage_system.rotations.mysql_rotation_repository import MySQLRotationRepository


class FakeCursor:
    def __init__(self, results=None, fail_on_call=None):
        self.calls: list[tuple[str, tuple]] = []
        self._results = list(results or [])
        self._fail_on_call = fail_on_call
        self.lastrowid = 0

    def execute(self, sql, params=()):
        self.calls.append((" ".join(sql.split()), tuple(params)))
        if self._fail_on_call is not None and len(self.calls) == self._fail_on_call:
            raise mysql.connector.Error("write failed")
        self.lastrowid += 1

    def fetchall(self):
        return self._results.pop(0) if self._results else []

    def fetchone(self):
        rows = self.fetchall()
        return rows[0] if rows else None

    def close(self):
        pass


class FakeConnection:
    def __init__(self, cursor: FakeCursor):
        self._cursor = cursor
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=True):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeConnFactory:
    def __init__(self, cursor: FakeCursor):
        self.conn = FakeConnection(cursor)

    def connect(self, *, with_database=True):
        return self.conn


def _submission() -> RotationSubmission:
    return RotationSubmission(
        submitter=Submitter(name="Karim", phone="0612", hotel="Ibis"),
        dates=(
            DateSubmission(date(2024, 3, 10), (RotationRecord("BUS-1", 3), RotationRecord("BUS-2", 5))),
            DateSubmission(date(2024, 3, 11), (RotationRecord("BUS-1", 1),)),
        ),
    )


def test_create_submission_writes_everything_in_one_committed_transaction():
    cur = FakeCursor()
    factory = FakeConnFactory(cur)

    saved = MySQLRotationRepository(factory).create_submission(_submission())

    inserts = [sql.split("(")[0] for sql, _ in cur.calls]
    assert inserts == [
        "INSERT INTO submitters",
        "INSERT INTO clock_entries",
        "INSERT INTO rotation_records",
        "INSERT INTO rotation_records",
        "INSERT INTO clock_entries",
        "INSERT INTO rotation_records",
    ]
    assert factory.conn.committed and factory.conn.closed
    assert [len(e.rotations) for e in saved.entries] == [2, 1]
    assert saved.entries[0].rotations[1].rotation_count == 5
    assert saved.entries[0].created_at.tzinfo is not None


def test_failed_child_insert_rolls_back_and_raises_store_error():
    cur = FakeCursor(fail_on_call=4)
    factory = FakeConnFactory(cur)

    with pytest.raises(StoreError):
        MySQLRotationRepository(factory).create_submission(_submission())

    assert factory.conn.rolled_back
    assert not factory.conn.committed
    assert factory.conn.closed


def test_list_entries_without_filter_has_no_where_clause():
    cur = FakeCursor(results=[[]])

    assert MySQLRotationRepository(FakeConnFactory(cur)).list_entries(RotationQuery()) == []

    sql, params = cur.calls[0]
    assert "WHERE" not in sql
    assert "ORDER BY e.created_at DESC, e.entry_id DESC" in sql
    assert params == ()


def test_list_entries_translates_filters_and_attaches_children():
    created = datetime(2024, 3, 10, 9, 0)
    cur = FakeCursor(
        results=[
            [
                {
                    "entry_id": 7,
                    "work_date": date(2024, 3, 10),
                    "created_at": created,
                    "submitter_id": 2,
                    "nom": "Karim",
                    "telephone": "0612",
                    "hotel": "Ibis",
                }
            ],
            [
                {"record_id": 1, "entry_id": 7, "matricule": "BUS-1", "rotations": 3},
                {"record_id": 2, "entry_id": 7, "matricule": "BUS-2", "rotations": 5},
            ],
        ]
    )

    entries = MySQLRotationRepository(FakeConnFactory(cur)).list_entries(
        RotationQuery(work_date=date(2024, 3, 10), search="IB_is")
    )

    sql, params = cur.calls[0]
    assert "e.work_date=%s AND (LOWER(s.nom) LIKE %s" in sql
    assert params == (date(2024, 3, 10), "%ib\\_is%", "%ib\\_is%", "%ib\\_is%")
    assert cur.calls[1][1] == (7,)

    assert len(entries) == 1
    assert entries[0].total_rotations == 8
    assert entries[0].submitter.hotel == "Ibis"
    assert entries[0].created_at.tzinfo is not None


def test_connection_failure_is_reported_as_store_error():
    class DownFactory:
        def connect(self, *, with_database=True):
            raise mysql.connector.Error("Can't connect")

    with pytest.raises(StoreError, match="indisponible"):
        MySQLRotationRepository(DownFactory()).list_entries(RotationQuery())


def test_search_alone_is_lowercased_and_escaped_for_like():
    cur = FakeCursor(results=[[]])

    MySQLRotationRepository(FakeConnFactory(cur)).list_entries(RotationQuery(search="Hôtel 50%"))

    sql, params = cur.calls[0]
    assert "WHERE (LOWER(s.nom) LIKE %s OR LOWER(s.hotel) LIKE %s OR LOWER(s.telephone) LIKE %s)" in sql
    assert "work_date" not in sql.split("WHERE", 1)[1]
    assert params == ("%hôtel 50\\%%",) * 3
    # no entries, no child lookup
    assert len(cur.calls) == 1


def test_dropped_connection_during_rollback_still_raises_store_error():
    class DroppedConnection(FakeConnection):
        def rollback(self):
            raise mysql.connector.Error("Lost connection to MySQL server during query")

    cur = FakeCursor(fail_on_call=2)
    factory = FakeConnFactory(cur)
    factory.conn = DroppedConnection(cur)

    with pytest.raises(StoreError, match="write failed"):
        MySQLRotationRepository(factory).create_submission(_submission())

    assert factory.conn.committed is False
    assert factory.conn.closed is True
