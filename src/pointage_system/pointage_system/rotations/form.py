"""Immutable model of the bus-rotation submission form.

Each edit returns a new ``PointageForm``; nothing is mutated in place, so a
caller can keep previous versions around for undo.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import Union

from ..core.exceptions import ValidationError
from .model import RotationSubmission
from .service import parse_rotation_submission


@dataclass(frozen=True)
class BusForm:
    matricule: str = ""
    rotations: int = 1


@dataclass(frozen=True)
class DateForm:
    date: str
    buses: tuple[BusForm, ...] = (BusForm(),)


@dataclass(frozen=True)
class PointageForm:
    nom: str = ""
    telephone: str = ""
    hotel: str = ""
    pointages: tuple[DateForm, ...] = ()

    def with_identity(self, *, nom: str | None = None, telephone: str | None = None, hotel: str | None = None) -> "PointageForm":
        return replace(
            self,
            nom=self.nom if nom is None else nom,
            telephone=self.telephone if telephone is None else telephone,
            hotel=self.hotel if hotel is None else hotel,
        )

    def add_date(self, day: date) -> "PointageForm":
        return replace(self, pointages=self.pointages + (DateForm(date=day.isoformat()),))

    def update_date(self, index: int, value: str, *, merge: bool = False) -> "PointageForm":
        """Change the date of entry ``index``.

        If another entry already uses ``value`` the edit is rejected, unless
        ``merge`` is set: then the edited entry's buses are appended to the
        existing entry and the edited entry disappears.
        """
        self._check_date_index(index)
        clash = next((i for i, d in enumerate(self.pointages) if d.date == value and i != index), None)

        if clash is None:
            return self._replace_date(index, replace(self.pointages[index], date=value))
        if not merge:
            raise ValidationError(f"La date {value} existe déjà")

        current = self.pointages[index]
        merged = tuple(
            replace(d, buses=d.buses + current.buses) if i == clash else d
            for i, d in enumerate(self.pointages)
        )
        return replace(self, pointages=tuple(d for i, d in enumerate(merged) if i != index))

    def remove_date(self, index: int) -> "PointageForm":
        self._check_date_index(index)
        return replace(self, pointages=tuple(d for i, d in enumerate(self.pointages) if i != index))

    def add_bus(self, date_index: int) -> "PointageForm":
        self._check_date_index(date_index)
        entry = self.pointages[date_index]
        return self._replace_date(date_index, replace(entry, buses=entry.buses + (BusForm(),)))

    def update_bus(self, date_index: int, bus_index: int, field: str, value: Union[str, int]) -> "PointageForm":
        if field not in ("matricule", "rotations"):
            raise ValueError(f"Unknown bus field: {field!r}")
        entry = self._date_with_bus(date_index, bus_index)
        buses = tuple(
            replace(b, **{field: value}) if i == bus_index else b for i, b in enumerate(entry.buses)
        )
        return self._replace_date(date_index, replace(entry, buses=buses))

    def remove_bus(self, date_index: int, bus_index: int) -> "PointageForm":
        entry = self._date_with_bus(date_index, bus_index)
        buses = tuple(b for i, b in enumerate(entry.buses) if i != bus_index)
        return self._replace_date(date_index, replace(entry, buses=buses))

    def reset(self) -> "PointageForm":
        return PointageForm()

    def to_payload(self) -> dict:
        return {
            "nom": self.nom,
            "telephone": self.telephone,
            "hotel": self.hotel,
            "pointages": [
                {
                    "date": d.date,
                    "buses": [{"matricule": b.matricule, "rotations": b.rotations} for b in d.buses],
                }
                for d in self.pointages
            ],
        }

    def validate(self) -> RotationSubmission:
        return parse_rotation_submission(self.to_payload())

    def _replace_date(self, index: int, entry: DateForm) -> "PointageForm":
        return replace(self, pointages=tuple(entry if i == index else d for i, d in enumerate(self.pointages)))

    def _check_date_index(self, index: int) -> None:
        if not 0 <= index < len(self.pointages):
            raise IndexError(f"No date entry at index {index}")

    def _date_with_bus(self, date_index: int, bus_index: int) -> DateForm:
        self._check_date_index(date_index)
        entry = self.pointages[date_index]
        if not 0 <= bus_index < len(entry.buses):
            raise IndexError(f"No bus at index {bus_index}")
        return entry
