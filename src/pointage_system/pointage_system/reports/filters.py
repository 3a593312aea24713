"""Admin-side filters over already fetched records.

Each filter field is optional; a cleared field drops its predicate instead of
matching against an empty value.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable, Iterable, Optional
from zoneinfo import ZoneInfo

from ..common.datetime_utils import local_day
from ..common.validators import require_date
from ..core.enums import EventType
from ..core.exceptions import ValidationError
from ..employees.model import EmployeeEvent

ALL_TYPES = "all"


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass(frozen=True)
class EventFilter:
    search: Optional[str] = None
    day: Optional[date] = None
    event_type: Optional[EventType] = None

    @classmethod
    def from_args(
        cls,
        *,
        search: Optional[str] = None,
        date_value: Optional[str] = None,
        type_value: Optional[str] = None,
    ) -> "EventFilter":
        date_value = _clean(date_value)
        type_value = _clean(type_value)

        event_type = None
        if type_value is not None and type_value != ALL_TYPES:
            try:
                event_type = EventType(type_value)
            except ValueError:
                raise ValidationError("Type de pointage invalide") from None

        return cls(
            search=_clean(search),
            day=require_date(date_value, "Date") if date_value else None,
            event_type=event_type,
        )

    @property
    def is_active(self) -> bool:
        return self.search is not None or self.day is not None or self.event_type is not None

    def cleared(self) -> "EventFilter":
        return EventFilter()


def text_matches(term: str, *fields: str) -> bool:
    needle = term.casefold()
    return any(needle in (f or "").casefold() for f in fields)


def build_event_predicates(flt: EventFilter, tz: ZoneInfo) -> list[Callable[[EmployeeEvent], bool]]:
    predicates: list[Callable[[EmployeeEvent], bool]] = []

    if flt.search is not None:
        term = flt.search
        predicates.append(lambda e: text_matches(term, e.name, e.phone, e.hotel))
    if flt.day is not None:
        day = flt.day
        predicates.append(lambda e: local_day(e.timestamp, tz) == day)
    if flt.event_type is not None:
        event_type = flt.event_type
        predicates.append(lambda e: e.event_type == event_type)

    return predicates


def filter_events(events: Iterable[EmployeeEvent], flt: EventFilter, tz: ZoneInfo) -> list[EmployeeEvent]:
    predicates = build_event_predicates(flt, tz)
    return [e for e in events if all(p(e) for p in predicates)]
