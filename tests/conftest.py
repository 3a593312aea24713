from __future__ import annotations

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from tests.fakes import InMemoryEventRepository, InMemoryRotationRepository


@pytest.fixture
def paris() -> ZoneInfo:
    return ZoneInfo("Europe/Paris")


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 3, 10, 8, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def rotations_repo() -> InMemoryRotationRepository:
    return InMemoryRotationRepository()


@pytest.fixture
def events_repo() -> InMemoryEventRepository:
    return InMemoryEventRepository()
