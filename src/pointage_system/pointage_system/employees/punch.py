from __future__ import annotations

import logging
import queue
import threading
from dataclasses import dataclass
from typing import Protocol

from ..common.datetime_utils import now_utc
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_LOCATION_TIMEOUT_SECONDS
from ..core.enums import EventType
from ..core.exceptions import LocationUnavailableError
from ..profiles.store import Profile, ProfileStore
from .model import EmployeeEvent, Location
from .service import EmployeeEventService

logger = logging.getLogger(__name__)


class LocationProvider(Protocol):
    def current_location(self) -> Location:
        """Block until a fix is available; raise on refusal."""

        raise NotImplementedError


@dataclass(frozen=True)
class FixedLocationProvider:
    """Provider returning a known position (kiosks installed at a fixed spot)."""

    location: Location

    def current_location(self) -> Location:
        return self.location


def acquire_location(provider: LocationProvider, *, timeout: float) -> Location:
    """Ask ``provider`` for a fix, giving up after ``timeout`` seconds.

    The provider runs on a daemon thread: one that never answers is
    abandoned and does not keep the process alive.
    """
    results: queue.Queue = queue.Queue(maxsize=1)

    def _run():
        try:
            results.put((True, provider.current_location()))
        except Exception as e:
            results.put((False, e))

    threading.Thread(target=_run, name="location-fix", daemon=True).start()
    try:
        ok, value = results.get(timeout=timeout)
    except queue.Empty:
        raise LocationUnavailableError("Délai de localisation dépassé") from None

    if ok:
        return value
    if isinstance(value, LocationUnavailableError):
        raise value
    raise LocationUnavailableError(f"Localisation refusée: {value}") from value


class PunchWorkflow:
    """Employee start/end punch: identity check, location fix, store, remember."""

    def __init__(
        self,
        events: EmployeeEventService,
        locations: LocationProvider,
        profiles: ProfileStore,
        *,
        location_timeout: float = DEFAULT_LOCATION_TIMEOUT_SECONDS,
    ):
        self._events = events
        self._locations = locations
        self._profiles = profiles
        self._timeout = float(location_timeout)

    def prefill(self) -> Profile:
        return self._profiles.load()

    def punch(self, *, nom: str, telephone: str, hotel: str, event_type: EventType) -> EmployeeEvent:
        nom = require_non_empty(nom, "Nom")
        telephone = require_non_empty(telephone, "Téléphone")
        hotel = require_non_empty(hotel, "Hôtel")

        location = acquire_location(self._locations, timeout=self._timeout)

        event = self._events.submit(
            {
                "nom": nom,
                "telephone": telephone,
                "hotel": hotel,
                "type": event_type.value,
                "location": {"latitude": location.latitude, "longitude": location.longitude},
                "timestamp": now_utc().isoformat(),
            }
        )
        self._profiles.save(Profile(nom=nom, telephone=telephone))
        logger.info("Pointage %s enregistré pour %s (%s)", event_type.value, nom, hotel)
        return event
