"""Monthly report generation."""

import datetime
from typing import Optional

from rich.console import Console  # type: ignore[import-not-found]

from worklog.core.filters import EntryFilter, month_range, parse_month
from worklog.core.ledger import LedgerResult, TimeLedger
from worklog.i18n import Translator
from worklog.output.table_format import TableRenderer


def month_filter(month: Optional[str], current_date: Optional[datetime.date] = None) -> EntryFilter:
    """Build the full-month filter for a YYYY-MM string (default: current month).

    Raises:
        ValidationError: If the month string is malformed
    """
    if month:
        year, month_number = parse_month(month)
    else:
        now = current_date or datetime.date.today()
        year, month_number = now.year, now.month
    start, end = month_range(year, month_number)
    return EntryFilter(start=start, end=end)


def month_label(entry_filter: EntryFilter, translator: Optional[Translator] = None) -> str:
    """Localized month of a month filter, e.g. 'March 2024' or 'mars 2024'.

    Raises:
        ValueError: If the filter has no start date
    """
    if entry_filter.start is None:
        raise ValueError("month_label needs a filter with a start date")
    t = translator or Translator()
    start = entry_filter.start
    return f"{t(f'month.{start.month}')} {start.year}"


class ReportGenerator:
    """Generate the monthly time report."""

    def __init__(self, console: Optional[Console] = None, translator: Optional[Translator] = None):
        """Initialize report generator.

        Args:
            console: Rich console for output. Creates default if None.
            translator: Message lookup. Defaults to Swedish.
        """
        self.console = console or Console()
        self.t = translator or Translator()
        self.tables = TableRenderer(self.t)

    def monthly_report(self, ledger: TimeLedger, month: Optional[str] = None) -> LedgerResult:
        """Query one month and print the report.

        Args:
            ledger: Ledger to query
            month: Month as YYYY-MM, current month if None

        Returns:
            The queried result (empty when nothing was logged)
        """
        entry_filter = month_filter(month)
        result = ledger.query(entry_filter)
        self.print_report(result, month_label(entry_filter, self.t))
        return result

    def print_report(self, result: LedgerResult, label: str) -> None:
        """Print entries and summary for one period.

        Args:
            result: Ledger result for the period
            label: Period label used in the title
        """
        if result.is_empty:
            self.console.print(f"[yellow]{self.t('report.no_entries', month=label)}[/yellow]")
            return

        self.console.print(f"\n[bold cyan]{self.t('report.title', month=label)}[/bold cyan]\n")
        self.console.print(self.tables.entries_table(result))
        self.console.print()

        self.console.print(f"[bold]{self.t('report.summary')}[/bold]\n")
        self.console.print(self.tables.totals_table(result))
        self.console.print()

        self.tables.print_breakdowns(self.console, result)
