from __future__ import annotations

from typing import Protocol, Sequence

from .model import ClockEntry, RotationQuery, RotationSubmission, SubmitterWithEntries


class RotationRepository(Protocol):
    """Interface du repository des pointages de bus.

    Note (DIP): la couche service dépend de cette interface, pas d'une base concrète.
    """

    def create_submission(self, submission: RotationSubmission) -> SubmitterWithEntries:
        """Persist submitter, entries and rotation records in a single transaction."""

        raise NotImplementedError

    def list_entries(self, query: RotationQuery) -> Sequence[ClockEntry]:
        raise NotImplementedError

    def list_submitters(self) -> Sequence[SubmitterWithEntries]:
        raise NotImplementedError
