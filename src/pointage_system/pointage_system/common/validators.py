from __future__ import annotations

from datetime import date
from typing import Any, Optional

from ..core.constants import MAX_ROTATIONS, MIN_ROTATIONS
from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date


def require_non_empty(value: Any, field_name: str, *, max_len: Optional[int] = None) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} est requis")
    value = value.strip()
    if max_len is not None and len(value) > max_len:
        raise ValidationError(f"{field_name} trop long ({max_len} caractères maximum)")
    return value


def require_date(value: Any, field_name: str) -> date:
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} est requise")
    try:
        return parse_iso_date(value.strip())
    except ValueError:
        raise ValidationError(f"{field_name} invalide: {value!r}") from None


def require_rotations(value: Any, field_name: str = "Rotations") -> int:
    # bool is an int subclass; "true" is not a rotation count
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} invalide")
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value.strip())
    if not isinstance(value, int) or value < MIN_ROTATIONS:
        raise ValidationError(f"{field_name} doit être un entier >= {MIN_ROTATIONS}")
    if value > MAX_ROTATIONS:
        raise ValidationError(f"{field_name} trop grand (maximum {MAX_ROTATIONS})")
    return value


def require_coordinate(value: Any, field_name: str, *, bound: float) -> float:
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"{field_name} est requise")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} invalide") from None
    if not -bound <= number <= bound:
        raise ValidationError(f"{field_name} hors limites")
    return number
