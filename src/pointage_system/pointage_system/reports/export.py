from __future__ import annotations

import csv
import io
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import Generic, Iterable, Sequence, TypeVar
from zoneinfo import ZoneInfo

from ..common.datetime_utils import format_day, format_time, local_day, to_zone
from ..core.constants import DISPLAY_DATETIME_FORMAT
from ..employees.model import EmployeeEvent
from ..rotations.model import ClockEntry

T = TypeVar("T")


class RowFlattener(ABC, Generic[T]):
    """Turns parent records into flat export rows (Strategy Pattern for exports)."""

    header: tuple[str, ...] = ()

    @abstractmethod
    def rows(self, items: Iterable[T]) -> Iterable[list[str]]:
        raise NotImplementedError


class EventRowFlattener(RowFlattener[EmployeeEvent]):
    """One row per event."""

    header = ("Nom", "Téléphone", "Hôtel", "Date", "Heure", "Type", "Position")

    def __init__(self, tz: ZoneInfo):
        self._tz = tz

    def rows(self, items: Iterable[EmployeeEvent]) -> Iterable[list[str]]:
        for e in items:
            yield [
                e.name,
                e.phone,
                e.hotel,
                format_day(local_day(e.timestamp, self._tz)),
                format_time(e.timestamp, self._tz),
                e.event_type.value,
                f"{e.location.latitude}, {e.location.longitude}",
            ]


class RotationRowFlattener(RowFlattener[ClockEntry]):
    """One row per rotation record; entries without records produce no row."""

    header = ("Nom", "Téléphone", "Hôtel", "Date", "Matricule", "Rotations", "Créé le")

    def __init__(self, tz: ZoneInfo):
        self._tz = tz

    def rows(self, items: Iterable[ClockEntry]) -> Iterable[list[str]]:
        for entry in items:
            s = entry.submitter
            created = to_zone(entry.created_at, self._tz).strftime(DISPLAY_DATETIME_FORMAT)
            for r in entry.rotations:
                yield [
                    s.name,
                    s.phone,
                    s.hotel,
                    format_day(entry.work_date),
                    r.bus_identifier,
                    str(r.rotation_count),
                    created,
                ]


def encode_csv(header: Sequence[str], rows: Iterable[Sequence[str]], *, with_bom: bool = True) -> bytes:
    """Header plus rows, every field quoted, rows separated by ``\\n``."""
    out = io.StringIO()
    writer = csv.writer(out, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(header)
    writer.writerows(rows)

    text = out.getvalue()
    if text.endswith("\n"):
        text = text[:-1]
    return text.encode("utf-8-sig" if with_bom else "utf-8")


def export_filename(prefix: str, today: date) -> str:
    return f"{prefix}_{today.isoformat()}.csv"


@dataclass(frozen=True)
class CsvExport:
    filename: str
    content: bytes
    mimetype: str = "text/csv; charset=utf-8"


def build_export(
    flattener: RowFlattener[T],
    items: Iterable[T],
    *,
    prefix: str,
    today: date,
    with_bom: bool = True,
) -> CsvExport:
    return CsvExport(
        filename=export_filename(prefix, today),
        content=encode_csv(flattener.header, flattener.rows(items), with_bom=with_bom),
    )
