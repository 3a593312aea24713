from __future__ import annotations

from enum import Enum


class EventType(str, Enum):
    """Type d'un pointage employé (valeurs stockées telles quelles en base)."""

    START = "debut"
    END = "fin"

    @property
    def label(self) -> str:
        return {EventType.START: "Début", EventType.END: "Fin"}[self]
