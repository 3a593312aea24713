from __future__ import annotations

from typing import Any, Mapping, Sequence

from ..common.validators import require_date, require_non_empty, require_rotations
from ..core.constants import HOTEL_MAX_LEN, MATRICULE_MAX_LEN, NAME_MAX_LEN, PHONE_MAX_LEN
from ..core.exceptions import ValidationError
from .model import (
    ClockEntry,
    DateSubmission,
    RotationQuery,
    RotationRecord,
    RotationSubmission,
    Submitter,
    SubmitterWithEntries,
)
from .repository import RotationRepository


def parse_rotation_submission(payload: Mapping[str, Any]) -> RotationSubmission:
    """Validate a raw ``{nom, telephone, hotel, pointages}`` payload.

    Every check runs before anything touches the store, so a rejected
    submission never leaves rows behind.
    """
    if not isinstance(payload, Mapping):
        raise ValidationError("Données de pointage invalides")

    submitter = Submitter(
        name=require_non_empty(payload.get("nom"), "Nom", max_len=NAME_MAX_LEN),
        phone=require_non_empty(payload.get("telephone"), "Téléphone", max_len=PHONE_MAX_LEN),
        hotel=require_non_empty(payload.get("hotel"), "Hôtel", max_len=HOTEL_MAX_LEN),
    )

    raw_dates = payload.get("pointages")
    if not isinstance(raw_dates, list) or not raw_dates:
        raise ValidationError("Veuillez ajouter au moins un pointage")

    dates: list[DateSubmission] = []
    for raw in raw_dates:
        if not isinstance(raw, Mapping):
            raise ValidationError("Pointage invalide")
        work_date = require_date(raw.get("date"), "Date")

        raw_buses = raw.get("buses")
        if not isinstance(raw_buses, list) or not raw_buses:
            raise ValidationError("Tous les pointages doivent avoir au moins un bus avec un matricule")

        rotations = []
        for bus in raw_buses:
            if not isinstance(bus, Mapping):
                raise ValidationError("Bus invalide")
            rotations.append(
                RotationRecord(
                    bus_identifier=require_non_empty(bus.get("matricule"), "Matricule", max_len=MATRICULE_MAX_LEN),
                    rotation_count=require_rotations(bus.get("rotations")),
                )
            )
        dates.append(DateSubmission(work_date=work_date, rotations=tuple(rotations)))

    return RotationSubmission(submitter=submitter, dates=tuple(dates))


class RotationService:
    def __init__(self, rotations: RotationRepository):
        self._rotations = rotations

    def submit(self, payload: Mapping[str, Any]) -> SubmitterWithEntries:
        submission = parse_rotation_submission(payload)
        return self._rotations.create_submission(submission)

    def search(self, query: RotationQuery | None = None) -> Sequence[ClockEntry]:
        return self._rotations.list_entries(query or RotationQuery())

    def list_submitters(self) -> Sequence[SubmitterWithEntries]:
        return self._rotations.list_submitters()
