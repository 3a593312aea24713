from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Optional

from src.pointage_system.pointage_system.core.enums import EventType
from src.pointage_system.pointage_system.core.exceptions import StoreError
from src.pointage_system.pointage_system.employees.model import EmployeeEvent, EventSubmission, Location
from src.pointage_system.pointage_system.reports.filters import text_matches
from src.pointage_system.pointage_system.rotations.model import (
    ClockEntry,
    RotationQuery,
    RotationRecord,
    RotationSubmission,
    Submitter,
    SubmitterWithEntries,
)

T0 = datetime(2024, 3, 10, 7, 0, 0, tzinfo=timezone.utc)


def filter_entries(entries: list[ClockEntry], query: RotationQuery) -> list[ClockEntry]:
    """Python stand-in for the WHERE clause MySQLRotationRepository builds."""
    kept = []
    for e in entries:
        if query.work_date is not None and e.work_date != query.work_date:
            continue
        s = e.submitter
        if query.search is not None and not text_matches(query.search, s.name, s.hotel, s.phone):
            continue
        kept.append(e)
    return kept


class InMemoryRotationRepository:
    def __init__(self):
        self.submitters: list[SubmitterWithEntries] = []
        self._ids = {"submitter": 0, "entry": 0, "record": 0}
        self._tick = 0
        self.fail_with: Optional[Exception] = None

    def _next(self, kind: str) -> int:
        self._ids[kind] += 1
        return self._ids[kind]

    def _now(self) -> datetime:
        self._tick += 1
        return T0 + timedelta(minutes=self._tick)

    def create_submission(self, submission: RotationSubmission) -> SubmitterWithEntries:
        if self.fail_with:
            raise self.fail_with
        created_at = self._now()
        s = submission.submitter
        submitter = Submitter(name=s.name, phone=s.phone, hotel=s.hotel, submitter_id=self._next("submitter"))
        entries = tuple(
            ClockEntry(
                entry_id=self._next("entry"),
                work_date=d.work_date,
                submitter=submitter,
                created_at=created_at,
                rotations=tuple(
                    RotationRecord(r.bus_identifier, r.rotation_count, record_id=self._next("record"))
                    for r in d.rotations
                ),
            )
            for d in submission.dates
        )
        saved = SubmitterWithEntries(submitter=submitter, created_at=created_at, entries=entries)
        self.submitters.append(saved)
        return saved

    def add(self, *, name: str, phone: str, hotel: str, work_date: date, rotations: list[tuple[str, int]]) -> ClockEntry:
        submission = RotationSubmission(
            submitter=Submitter(name=name, phone=phone, hotel=hotel),
            dates=(),
        )
        saved = self.create_submission(submission)
        entry = ClockEntry(
            entry_id=self._next("entry"),
            work_date=work_date,
            submitter=saved.submitter,
            created_at=saved.created_at,
            rotations=tuple(RotationRecord(b, n, record_id=self._next("record")) for b, n in rotations),
        )
        self.submitters[-1] = SubmitterWithEntries(saved.submitter, saved.created_at, (entry,))
        return entry

    def all_entries(self) -> list[ClockEntry]:
        return [e for s in self.submitters for e in s.entries]

    def list_entries(self, query: RotationQuery) -> list[ClockEntry]:
        if self.fail_with:
            raise self.fail_with
        items = filter_entries(self.all_entries(), query)
        return sorted(items, key=lambda e: (e.created_at, e.entry_id), reverse=True)

    def list_submitters(self) -> list[SubmitterWithEntries]:
        return sorted(self.submitters, key=lambda s: (s.created_at, s.submitter.submitter_id), reverse=True)


class InMemoryEventRepository:
    def __init__(self):
        self.events: list[EmployeeEvent] = []
        self.fail_with: Optional[Exception] = None

    def create_event(self, submission: EventSubmission) -> EmployeeEvent:
        if self.fail_with:
            raise self.fail_with
        event = EmployeeEvent(
            event_id=len(self.events) + 1,
            name=submission.name,
            phone=submission.phone,
            hotel=submission.hotel,
            event_type=submission.event_type,
            location=submission.location,
            timestamp=submission.timestamp,
            created_at=T0,
        )
        self.events.append(event)
        return event

    def add(self, *, name: str, phone: str, hotel: str, event_type: EventType, timestamp: datetime,
            lat: float = 33.5731, lng: float = -7.5898) -> EmployeeEvent:
        return self.create_event(
            EventSubmission(
                name=name,
                phone=phone,
                hotel=hotel,
                event_type=event_type,
                location=Location(lat, lng),
                timestamp=timestamp,
            )
        )

    def list_events(self) -> list[EmployeeEvent]:
        if self.fail_with:
            raise self.fail_with
        return sorted(self.events, key=lambda e: (e.timestamp, e.event_id), reverse=True)


def store_down() -> StoreError:
    return StoreError("Base de données indisponible: connexion refusée")
