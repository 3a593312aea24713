from __future__ import annotations

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

from ..core.constants import DISPLAY_DATE_FORMAT, DISPLAY_TIME_FORMAT


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_iso_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp (``Z`` suffix accepted) into an aware datetime.

    Naive values are taken as UTC, which is what browsers send with
    ``Date.toISOString()``.
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def now_utc() -> datetime:
    """Current time (aware, UTC).

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def to_zone(value: datetime, tz: ZoneInfo) -> datetime:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(tz)


def local_day(value: datetime, tz: ZoneInfo) -> date:
    """Calendar day of ``value`` as seen in ``tz``."""
    return to_zone(value, tz).date()


def format_day(value: date) -> str:
    return value.strftime(DISPLAY_DATE_FORMAT)


def format_time(value: datetime, tz: ZoneInfo) -> str:
    return to_zone(value, tz).strftime(DISPLAY_TIME_FORMAT)
