"""Merge-or-insert reconciliation for new time entries."""

import logging
from dataclasses import dataclass

from worklog.core.errors import ValidationError
from worklog.core.models import EntryCandidate, TimeEntry
from worklog.core.storage import StorageManager

logger = logging.getLogger(__name__)


@dataclass
class ReconcileResult:
    """Outcome of reconciling one candidate entry.

    Attributes:
        entry: The persisted entry; after a merge its hours are the new total
        merged: True if the candidate was folded into an existing row
    """

    entry: TimeEntry
    merged: bool


def validate_candidate(candidate: EntryCandidate) -> None:
    """Check the value invariants of a candidate entry.

    Raises:
        ValidationError: If hours or rate is not positive or the description is empty
    """
    if candidate.hours <= 0:
        raise ValidationError("error.hours_positive")
    if candidate.hourly_rate <= 0:
        raise ValidationError("error.rate_positive")
    if not candidate.description:
        raise ValidationError("error.description_required")


class Reconciler:
    """Accumulates repeated logging of the same work into one row.

    Two entries describe the same work when date, consultant, project,
    description and hourly rate are all equal. Description and rate are
    compared exactly.
    """

    def __init__(self, storage: StorageManager):
        """Initialize reconciler.

        Args:
            storage: Store the entries live in
        """
        self.storage = storage

    def reconcile(self, candidate: EntryCandidate) -> ReconcileResult:
        """Merge the candidate into a matching entry, or insert it.

        Args:
            candidate: Entry to log

        Returns:
            ReconcileResult with the persisted entry

        Raises:
            ValidationError: If the candidate is invalid (store untouched)
            StoreError: If the write was not confirmed
        """
        validate_candidate(candidate)
        entry, merged = self.storage.upsert_entry(candidate)
        if merged:
            logger.debug(f"Candidate {candidate.merge_key} merged into entry {entry.id}")
        return ReconcileResult(entry=entry, merged=merged)
