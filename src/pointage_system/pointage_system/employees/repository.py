from __future__ import annotations

from typing import Protocol, Sequence

from .model import EmployeeEvent, EventSubmission


class EmployeeEventRepository(Protocol):
    def create_event(self, submission: EventSubmission) -> EmployeeEvent:
        raise NotImplementedError

    def list_events(self) -> Sequence[EmployeeEvent]:
        """All events, most recent ``timestamp`` first."""

        raise NotImplementedError
