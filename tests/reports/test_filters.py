from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from src.pointage_system.pointage_system.core.enums import EventType
from src.pointage_system.pointage_system.core.exceptions import ValidationError
from src.pointage_system.pointage_system.reports.filters import EventFilter, filter_events


def _seed(events_repo, paris):
    add = events_repo.add
    add(name="Late", phone="1", hotel="Ibis", event_type=EventType.END, timestamp=datetime(2024, 3, 9, 23, 59, tzinfo=paris))
    add(name="Early", phone="2", hotel="Ibis", event_type=EventType.START, timestamp=datetime(2024, 3, 10, 0, 30, tzinfo=paris))
    add(name="Noon", phone="3", hotel="Mercure", event_type=EventType.END, timestamp=datetime(2024, 3, 10, 12, 0, tzinfo=paris))
    add(name="Next", phone="4", hotel="Ibis", event_type=EventType.START, timestamp=datetime(2024, 3, 11, 0, 1, tzinfo=paris))
    return events_repo.list_events()


def test_date_filter_compares_calendar_days_in_display_timezone(events_repo, paris):
    events = _seed(events_repo, paris)

    kept = filter_events(events, EventFilter(day=date(2024, 3, 10)), paris)

    assert sorted(e.name for e in kept) == ["Early", "Noon"]


def test_date_filter_differs_from_naive_utc_split(events_repo, paris):
    events = _seed(events_repo, paris)
    # 00:30 Paris is still the 9th in UTC, 00:01 on the 11th is the 10th in UTC
    utc_days = {e.name: e.timestamp.astimezone(timezone.utc).date() for e in events}
    assert utc_days["Early"] == date(2024, 3, 9)
    assert utc_days["Next"] == date(2024, 3, 10)

    kept = {e.name for e in filter_events(events, EventFilter(day=date(2024, 3, 10)), paris)}
    assert "Early" in kept and "Next" not in kept


def test_text_filter_matches_any_field_case_insensitively(events_repo, paris):
    events = _seed(events_repo, paris)

    assert {e.name for e in filter_events(events, EventFilter(search="mercure"), paris)} == {"Noon"}
    assert {e.name for e in filter_events(events, EventFilter(search="4"), paris)} == {"Next"}
    assert {e.name for e in filter_events(events, EventFilter(search="EARL"), paris)} == {"Early"}


def test_filters_are_conjunctive(events_repo, paris):
    events = _seed(events_repo, paris)

    flt = EventFilter(search="ibis", day=date(2024, 3, 10), event_type=EventType.START)

    assert [e.name for e in filter_events(events, flt, paris)] == ["Early"]


def test_clearing_filters_restores_full_list(events_repo, paris):
    events = _seed(events_repo, paris)
    flt = EventFilter.from_args(search="Ibis", date_value="2024-03-10", type_value="debut")
    assert len(filter_events(events, flt, paris)) == 1

    assert filter_events(events, flt.cleared(), paris) == events


def test_from_args_treats_blank_and_all_as_cleared():
    flt = EventFilter.from_args(search="  ", date_value="", type_value="all")

    assert flt == EventFilter()
    assert not flt.is_active


def test_from_args_rejects_unknown_type():
    with pytest.raises(ValidationError):
        EventFilter.from_args(type_value="pause")
