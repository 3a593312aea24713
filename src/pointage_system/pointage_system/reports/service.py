from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional
from zoneinfo import ZoneInfo

from ..common.datetime_utils import local_day, now_utc
from ..core.constants import EVENTS_EXPORT_PREFIX, ROTATIONS_EXPORT_PREFIX
from ..employees.model import EmployeeEvent
from ..employees.service import EmployeeEventService
from ..rotations.model import ClockEntry, RotationQuery
from ..rotations.service import RotationService
from .aggregation import (
    HotelGroup,
    PersonDayGroup,
    RotationSummary,
    group_entries_by_hotel,
    group_events_by_person_day,
    summarize_entries,
)
from .export import CsvExport, EventRowFlattener, RotationRowFlattener, build_export
from .filters import EventFilter, filter_events


@dataclass(frozen=True)
class RotationOverview:
    entries: list[ClockEntry]
    summary: RotationSummary
    hotels: list[HotelGroup]


@dataclass(frozen=True)
class EmployeeOverview:
    groups: list[PersonDayGroup]
    event_count: int
    filters_active: bool


class AdminReportService:
    def __init__(
        self,
        rotations: RotationService,
        events: EmployeeEventService,
        *,
        tz: ZoneInfo,
        export_with_bom: bool = True,
    ):
        self._rotations = rotations
        self._events = events
        self._tz = tz
        self._with_bom = bool(export_with_bom)

    def _today(self) -> date:
        return local_day(now_utc(), self._tz)

    def rotation_overview(self, query: RotationQuery) -> RotationOverview:
        entries = list(self._rotations.search(query))
        return RotationOverview(
            entries=entries,
            summary=summarize_entries(entries),
            hotels=group_entries_by_hotel(entries),
        )

    def rotation_export(self, query: RotationQuery, *, today: Optional[date] = None) -> CsvExport:
        entries = self._rotations.search(query)
        return build_export(
            RotationRowFlattener(self._tz),
            entries,
            prefix=ROTATIONS_EXPORT_PREFIX,
            today=today or self._today(),
            with_bom=self._with_bom,
        )

    def filtered_events(self, flt: EventFilter) -> list[EmployeeEvent]:
        return filter_events(self._events.list_events(), flt, self._tz)

    def employee_overview(self, flt: EventFilter) -> EmployeeOverview:
        events = self.filtered_events(flt)
        return EmployeeOverview(
            groups=group_events_by_person_day(events, self._tz),
            event_count=len(events),
            filters_active=flt.is_active,
        )

    def employee_export(self, flt: EventFilter, *, today: Optional[date] = None) -> CsvExport:
        return build_export(
            EventRowFlattener(self._tz),
            self.filtered_events(flt),
            prefix=EVENTS_EXPORT_PREFIX,
            today=today or self._today(),
            with_bom=self._with_bom,
        )
