from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.enums import EventType


@dataclass(frozen=True)
class Location:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class EventSubmission:
    name: str
    phone: str
    hotel: str
    event_type: EventType
    location: Location
    timestamp: datetime


@dataclass(frozen=True)
class EmployeeEvent:
    """Pointage employé ponctuel (début ou fin), géolocalisé."""

    event_id: int
    name: str
    phone: str
    hotel: str
    event_type: EventType
    location: Location
    timestamp: datetime
    created_at: datetime


def event_to_dict(event: EmployeeEvent) -> dict:
    return {
        "id": event.event_id,
        "nom": event.name,
        "telephone": event.phone,
        "hotel": event.hotel,
        "type": event.event_type.value,
        "latitude": event.location.latitude,
        "longitude": event.location.longitude,
        "timestamp": event.timestamp.isoformat(),
        "createdAt": event.created_at.isoformat(),
    }
