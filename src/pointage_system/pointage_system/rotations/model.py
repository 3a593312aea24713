from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..common.validators import require_date


@dataclass(frozen=True)
class Submitter:
    """Identité déclarée par la personne qui pointe (non unique en base)."""

    name: str
    phone: str
    hotel: str
    submitter_id: Optional[int] = None

    @property
    def identity(self) -> tuple[str, str, str]:
        return (self.name, self.phone, self.hotel)


@dataclass(frozen=True)
class RotationRecord:
    bus_identifier: str
    rotation_count: int
    record_id: Optional[int] = None


@dataclass(frozen=True)
class ClockEntry:
    """Pointage d'une journée: un soumetteur, une date, ses rotations de bus."""

    entry_id: int
    work_date: date
    submitter: Submitter
    created_at: datetime
    rotations: tuple[RotationRecord, ...] = ()

    @property
    def total_rotations(self) -> int:
        return sum(r.rotation_count for r in self.rotations)


@dataclass(frozen=True)
class DateSubmission:
    work_date: date
    rotations: tuple[RotationRecord, ...]


@dataclass(frozen=True)
class RotationSubmission:
    """Validated input for one submission (one or more dates)."""

    submitter: Submitter
    dates: tuple[DateSubmission, ...]


@dataclass(frozen=True)
class SubmitterWithEntries:
    submitter: Submitter
    created_at: datetime
    entries: tuple[ClockEntry, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class RotationQuery:
    """Filtres optionnels côté serveur; ``None`` signifie « pas de filtre »."""

    work_date: Optional[date] = None
    search: Optional[str] = None

    @classmethod
    def from_args(cls, *, date_value: Optional[str], search: Optional[str]) -> "RotationQuery":
        term = (search or "").strip() or None
        day = require_date(date_value, "Date") if date_value and date_value.strip() else None
        return cls(work_date=day, search=term)

    @property
    def is_empty(self) -> bool:
        return self.work_date is None and self.search is None


def entry_to_dict(entry: ClockEntry) -> dict:
    return {
        "id": entry.entry_id,
        "date": entry.work_date.isoformat(),
        "createdAt": entry.created_at.isoformat(),
        "user": {
            "id": entry.submitter.submitter_id,
            "nom": entry.submitter.name,
            "telephone": entry.submitter.phone,
            "hotel": entry.submitter.hotel,
        },
        "buses": [
            {"id": r.record_id, "matricule": r.bus_identifier, "rotations": r.rotation_count}
            for r in entry.rotations
        ],
    }


def submitter_to_dict(item: SubmitterWithEntries) -> dict:
    return {
        "id": item.submitter.submitter_id,
        "nom": item.submitter.name,
        "telephone": item.submitter.phone,
        "hotel": item.submitter.hotel,
        "createdAt": item.created_at.isoformat(),
        "pointages": [
            {
                "id": e.entry_id,
                "date": e.work_date.isoformat(),
                "createdAt": e.created_at.isoformat(),
                "buses": [
                    {"id": r.record_id, "matricule": r.bus_identifier, "rotations": r.rotation_count}
                    for r in e.rotations
                ],
            }
            for e in item.entries
        ],
    }
