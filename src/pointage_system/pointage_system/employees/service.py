from __future__ import annotations

from typing import Any, Mapping, Sequence

from ..common.datetime_utils import now_utc, parse_iso_timestamp
from ..common.validators import require_coordinate, require_non_empty
from ..core.constants import HOTEL_MAX_LEN, NAME_MAX_LEN, PHONE_MAX_LEN
from ..core.enums import EventType
from ..core.exceptions import ValidationError
from .model import EmployeeEvent, EventSubmission, Location
from .repository import EmployeeEventRepository


def parse_event_submission(payload: Mapping[str, Any]) -> EventSubmission:
    """Validate a raw ``{nom, telephone, hotel, type, location, timestamp}`` payload."""
    if not isinstance(payload, Mapping):
        raise ValidationError("Tous les champs sont requis")

    missing = [k for k in ("nom", "telephone", "hotel", "type", "location") if not payload.get(k)]
    if missing:
        raise ValidationError("Tous les champs sont requis")

    try:
        event_type = EventType(payload["type"])
    except ValueError:
        raise ValidationError("Type de pointage invalide") from None

    location = payload["location"]
    if not isinstance(location, Mapping):
        raise ValidationError("Position invalide")
    has_lat = location.get("latitude") is not None
    has_lng = location.get("longitude") is not None
    if has_lat != has_lng:
        raise ValidationError("Latitude et longitude doivent être fournies ensemble")

    raw_ts = payload.get("timestamp")
    if raw_ts in (None, ""):
        timestamp = now_utc()
    elif isinstance(raw_ts, str):
        try:
            timestamp = parse_iso_timestamp(raw_ts)
        except ValueError:
            raise ValidationError(f"Horodatage invalide: {raw_ts!r}") from None
    else:
        raise ValidationError("Horodatage invalide")

    return EventSubmission(
        name=require_non_empty(payload["nom"], "Nom", max_len=NAME_MAX_LEN),
        phone=require_non_empty(payload["telephone"], "Téléphone", max_len=PHONE_MAX_LEN),
        hotel=require_non_empty(payload["hotel"], "Hôtel", max_len=HOTEL_MAX_LEN),
        event_type=event_type,
        location=Location(
            latitude=require_coordinate(location.get("latitude"), "Latitude", bound=90.0),
            longitude=require_coordinate(location.get("longitude"), "Longitude", bound=180.0),
        ),
        timestamp=timestamp,
    )


class EmployeeEventService:
    def __init__(self, events: EmployeeEventRepository):
        self._events = events

    def submit(self, payload: Mapping[str, Any]) -> EmployeeEvent:
        return self._events.create_event(parse_event_submission(payload))

    def list_events(self) -> Sequence[EmployeeEvent]:
        return self._events.list_events()
