from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Sequence
from zoneinfo import ZoneInfo

from ..common.datetime_utils import format_day, format_time, local_day
from ..core.constants import OSM_URL_TEMPLATE
from ..employees.model import EmployeeEvent
from ..rotations.model import ClockEntry, entry_to_dict


def map_url(latitude: float, longitude: float) -> str:
    return OSM_URL_TEMPLATE.format(lat=latitude, lng=longitude)


@dataclass(frozen=True)
class EventLine:
    event_type: str
    label: str
    heure: str
    latitude: float
    longitude: float
    created_on: str

    def to_dict(self) -> dict:
        return {
            "type": self.event_type,
            "label": self.label,
            "heure": self.heure,
            "position": {"latitude": self.latitude, "longitude": self.longitude},
            "mapUrl": map_url(self.latitude, self.longitude),
            "createdAt": self.created_on,
        }


@dataclass(frozen=True)
class PersonDayGroup:
    nom: str
    telephone: str
    hotel: str
    day: date
    events: tuple[EventLine, ...]

    def to_dict(self) -> dict:
        return {
            "nom": self.nom,
            "telephone": self.telephone,
            "hotel": self.hotel,
            "date": format_day(self.day),
            "pointages": [e.to_dict() for e in self.events],
        }


def group_events_by_person_day(events: Iterable[EmployeeEvent], tz: ZoneInfo) -> list[PersonDayGroup]:
    """One group per (name, phone, hotel, local day), in order of first appearance."""
    grouped: dict[tuple[str, str, str, date], list[EventLine]] = {}

    for e in events:
        day = local_day(e.timestamp, tz)
        key = (e.name, e.phone, e.hotel, day)
        grouped.setdefault(key, []).append(
            EventLine(
                event_type=e.event_type.value,
                label=e.event_type.label,
                heure=format_time(e.timestamp, tz),
                latitude=e.location.latitude,
                longitude=e.location.longitude,
                created_on=format_day(local_day(e.created_at, tz)),
            )
        )

    return [
        PersonDayGroup(nom=k[0], telephone=k[1], hotel=k[2], day=k[3], events=tuple(lines))
        for k, lines in grouped.items()
    ]


@dataclass(frozen=True)
class HotelGroup:
    hotel: str
    entries: tuple[ClockEntry, ...]
    total_rotations: int
    submitter_count: int

    @property
    def entry_count(self) -> int:
        return len(self.entries)

    def to_dict(self) -> dict:
        return {
            "hotel": self.hotel,
            "pointages": self.entry_count,
            "totalRotations": self.total_rotations,
            "personnes": self.submitter_count,
            "entries": [entry_to_dict(e) for e in self.entries],
        }


def _newest_first(entry: ClockEntry):
    return (entry.created_at, entry.entry_id)


def group_entries_by_hotel(entries: Iterable[ClockEntry]) -> list[HotelGroup]:
    members: dict[str, list[ClockEntry]] = {}
    for e in entries:
        members.setdefault(e.submitter.hotel, []).append(e)

    groups = []
    for hotel in sorted(members):
        items = sorted(members[hotel], key=_newest_first, reverse=True)
        groups.append(
            HotelGroup(
                hotel=hotel,
                entries=tuple(items),
                total_rotations=sum(e.total_rotations for e in items),
                submitter_count=len({e.submitter.identity for e in items}),
            )
        )
    return groups


@dataclass(frozen=True)
class RotationSummary:
    entry_count: int
    total_rotations: int
    hotel_count: int

    def to_dict(self) -> dict:
        return {
            "pointages": self.entry_count,
            "totalRotations": self.total_rotations,
            "hotels": self.hotel_count,
        }


def summarize_entries(entries: Sequence[ClockEntry]) -> RotationSummary:
    return RotationSummary(
        entry_count=len(entries),
        total_rotations=sum(e.total_rotations for e in entries),
        hotel_count=len({e.submitter.hotel for e in entries}),
    )
