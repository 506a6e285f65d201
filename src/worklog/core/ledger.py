"""Ledger operations: logging hours and querying aggregated entries."""

import datetime
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterable, Optional

from worklog.core.config import ConfigManager
from worklog.core.errors import ValidationError
from worklog.core.filters import EntryFilter, parse_date
from worklog.core.models import EntryCandidate, TimeEntry
from worklog.core.reconcile import Reconciler, ReconcileResult
from worklog.core.storage import StorageManager

logger = logging.getLogger(__name__)


@dataclass
class LedgerRow:
    """One time entry with resolved names and computed cost."""

    date: datetime.date
    consultant: str
    project: str
    customer: str
    description: str
    hours: float
    hourly_rate: float
    cost: float

    @classmethod
    def from_entry(cls, entry: TimeEntry) -> "LedgerRow":
        """Flatten a TimeEntry with its related rows loaded."""
        return cls(
            date=entry.date,
            consultant=entry.consultant.name,
            project=entry.project.name,
            customer=entry.project.customer.name,
            description=entry.description,
            hours=entry.hours,
            hourly_rate=entry.hourly_rate,
            cost=entry.hours * entry.hourly_rate,
        )


@dataclass
class Totals:
    """Summed hours and cost."""

    hours: float = 0.0
    cost: float = 0.0

    def add(self, hours: float, cost: float) -> None:
        self.hours += hours
        self.cost += cost


@dataclass
class LedgerResult:
    """Entries matching a filter plus totals and per-entity breakdowns.

    Breakdown dictionaries are ordered by name.

    Attributes:
        rows: Entries ordered by date
        total_hours: Sum of hours over all rows
        total_cost: Sum of cost over all rows
        by_consultant: Totals per consultant name
        by_project: Totals per project name
        by_customer: Totals per customer name
        entry_filter: Filter the result was produced with
    """

    rows: list[LedgerRow] = field(default_factory=list)
    total_hours: float = 0.0
    total_cost: float = 0.0
    by_consultant: dict[str, Totals] = field(default_factory=dict)
    by_project: dict[str, Totals] = field(default_factory=dict)
    by_customer: dict[str, Totals] = field(default_factory=dict)
    entry_filter: Optional[EntryFilter] = None

    @property
    def is_empty(self) -> bool:
        """True when no entries matched. Not an error."""
        return not self.rows

    @property
    def count(self) -> int:
        return len(self.rows)


def summarize(rows: Iterable[LedgerRow], entry_filter: Optional[EntryFilter] = None) -> LedgerResult:
    """Compute totals and per-entity breakdowns for a sequence of rows.

    Args:
        rows: Ledger rows, already ordered
        entry_filter: Filter that produced the rows

    Returns:
        LedgerResult
    """
    result = LedgerResult(entry_filter=entry_filter)
    by_consultant: dict[str, Totals] = defaultdict(Totals)
    by_project: dict[str, Totals] = defaultdict(Totals)
    by_customer: dict[str, Totals] = defaultdict(Totals)

    for row in rows:
        result.rows.append(row)
        result.total_hours += row.hours
        result.total_cost += row.cost
        by_consultant[row.consultant].add(row.hours, row.cost)
        by_project[row.project].add(row.hours, row.cost)
        by_customer[row.customer].add(row.hours, row.cost)

    result.by_consultant = dict(sorted(by_consultant.items()))
    result.by_project = dict(sorted(by_project.items()))
    result.by_customer = dict(sorted(by_customer.items()))
    return result


@dataclass
class LogRequest:
    """Hours to log, after applying configured defaults.

    Attributes:
        date: Day of work
        hours: Hours worked
        description: Work description
        consultant: Consultant name
        client: Customer name
        project: Project name
        hourly_rate: Billing rate
    """

    date: datetime.date
    hours: float
    description: str
    consultant: str
    client: str
    project: str
    hourly_rate: float


def prepare_log_request(
    hours: float,
    description: str,
    project: Optional[str] = None,
    client: Optional[str] = None,
    consultant: Optional[str] = None,
    rate: Optional[float] = None,
    date: Optional[str] = None,
    config: Optional[ConfigManager] = None,
    current_date: Optional[datetime.date] = None,
) -> LogRequest:
    """Apply configured defaults and validate a request to log hours.

    Nothing is read from or written to the store, so invalid input never
    opens a database connection.

    Args:
        hours: Hours worked
        description: Work description
        project: Project name, falls back to the configured default
        client: Customer name, falls back to the configured default
        consultant: Consultant name, falls back to the configured default
        rate: Hourly rate, falls back to the configured default
        date: Day of work as YYYY-MM-DD, today if None
        config: Source of defaults
        current_date: Stand-in for today

    Returns:
        LogRequest

    Raises:
        ValidationError: If a required field is missing or a value is invalid
    """
    if config is not None:
        consultant = consultant or config.default_consultant
        client = client or config.default_client
        project = project or config.default_project
        rate = rate or config.default_rate

    if not consultant:
        raise ValidationError("error.consultant_required")
    if not client:
        raise ValidationError("error.customer_required")
    if not project:
        raise ValidationError("error.project_required")
    if rate is None or rate <= 0:
        raise ValidationError("error.rate_required")
    if hours is None or hours <= 0:
        raise ValidationError("error.hours_positive")
    if not description or not description.strip():
        raise ValidationError("error.description_required")

    entry_date = parse_date(date) if date else (current_date or datetime.date.today())

    return LogRequest(
        date=entry_date,
        hours=hours,
        description=description,
        consultant=consultant,
        client=client,
        project=project,
        hourly_rate=rate,
    )


class TimeLedger:
    """Core ledger functionality shared by every CLI command."""

    def __init__(self, storage: StorageManager, config: Optional[ConfigManager] = None):
        """Initialize the ledger.

        Args:
            storage: Store holding the ledger
            config: Supplies default consultant/client/project/rate for logging
        """
        self.storage = storage
        self.config = config
        self.reconciler = Reconciler(storage)

    def prepare(
        self,
        hours: float,
        description: str,
        project: Optional[str] = None,
        client: Optional[str] = None,
        consultant: Optional[str] = None,
        rate: Optional[float] = None,
        date: Optional[str] = None,
        current_date: Optional[datetime.date] = None,
    ) -> LogRequest:
        """Validate a request using this ledger's configured defaults."""
        return prepare_log_request(
            hours,
            description,
            project=project,
            client=client,
            consultant=consultant,
            rate=rate,
            date=date,
            config=self.config,
            current_date=current_date,
        )

    def log_hours(self, request: LogRequest) -> ReconcileResult:
        """Resolve entities and reconcile the request into the ledger.

        Args:
            request: Validated request from prepare()

        Returns:
            ReconcileResult; entry.hours is the total after any merge
        """
        consultant = self.storage.get_or_create_consultant(request.consultant)
        customer = self.storage.get_or_create_customer(request.client)
        project = self.storage.get_or_create_project(request.project, customer.id)

        candidate = EntryCandidate(
            date=request.date,
            hours=request.hours,
            description=request.description,
            hourly_rate=request.hourly_rate,
            project_id=project.id,
            consultant_id=consultant.id,
        )
        return self.reconciler.reconcile(candidate)

    def add(
        self,
        hours: float,
        description: str,
        project: Optional[str] = None,
        client: Optional[str] = None,
        consultant: Optional[str] = None,
        rate: Optional[float] = None,
        date: Optional[str] = None,
    ) -> ReconcileResult:
        """Validate and log hours in one call."""
        request = self.prepare(hours, description, project, client, consultant, rate, date)
        return self.log_hours(request)

    def query(self, entry_filter: EntryFilter) -> LedgerResult:
        """Fetch entries matching a filter and aggregate them.

        Args:
            entry_filter: Normalized filter from build_filter()

        Returns:
            LedgerResult (check is_empty for the no-entries case)
        """
        entries = self.storage.find_entries(
            start_date=entry_filter.start,
            end_date=entry_filter.end,
            consultant=entry_filter.consultant,
            project=entry_filter.project,
            customer=entry_filter.customer,
        )
        result = summarize((LedgerRow.from_entry(e) for e in entries), entry_filter)
        logger.info(
            f"Query matched {result.count} entries "
            f"({result.total_hours:.2f}h, {result.total_cost:.2f})"
        )
        return result
