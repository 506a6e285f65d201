"""Core ledger functionality."""

from worklog.core.filters import EntryFilter, build_filter
from worklog.core.ledger import LedgerResult, LedgerRow, TimeLedger, Totals
from worklog.core.models import Consultant, Customer, Project, TimeEntry
from worklog.core.reconcile import Reconciler, ReconcileResult
from worklog.core.storage import StorageManager

__all__ = [
    "Consultant",
    "Customer",
    "EntryFilter",
    "LedgerResult",
    "LedgerRow",
    "Project",
    "ReconcileResult",
    "Reconciler",
    "StorageManager",
    "TimeEntry",
    "TimeLedger",
    "Totals",
    "build_filter",
]
