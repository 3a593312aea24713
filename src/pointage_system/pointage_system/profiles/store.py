"""Per-device memory of the employee's name and phone.

The punch form pre-fills these two fields; the hotel is asked every time.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Profile:
    nom: str = ""
    telephone: str = ""


class ProfileStore(Protocol):
    def load(self) -> Profile:
        raise NotImplementedError

    def save(self, profile: Profile) -> None:
        raise NotImplementedError


class InMemoryProfileStore:
    def __init__(self, profile: Profile | None = None):
        self._profile = profile or Profile()

    def load(self) -> Profile:
        return self._profile

    def save(self, profile: Profile) -> None:
        self._profile = profile


class JsonFileProfileStore:
    def __init__(self, path: str | Path):
        self._path = Path(path)

    def load(self) -> Profile:
        if not self._path.exists():
            return Profile()
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Profil illisible %s: %s", self._path, e)
            return Profile()
        if not isinstance(data, dict):
            return Profile()
        return Profile(nom=str(data.get("nom") or ""), telephone=str(data.get("telephone") or ""))

    def save(self, profile: Profile) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(
            json.dumps({"nom": profile.nom, "telephone": profile.telephone}, ensure_ascii=False),
            encoding="utf-8",
        )
