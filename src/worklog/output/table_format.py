"""Table rendering with rich."""

from typing import Optional, TextIO

from rich.console import Console  # type: ignore[import-not-found]
from rich.markup import escape  # type: ignore[import-not-found]
from rich.table import Table  # type: ignore[import-not-found]

from worklog.core.ledger import LedgerResult, Totals
from worklog.i18n import Translator
from worklog.output.base import DATE_FORMAT, OutputFormat, Renderer, format_number

# Width used when the destination is not a terminal
FILE_WIDTH = 160


class TableRenderer(Renderer):
    """Render entries, totals and per-entity breakdowns as tables.

    Used by both the get and report commands.
    """

    format = OutputFormat.TABLE

    def __init__(self, translator: Optional[Translator] = None):
        """Initialize renderer.

        Args:
            translator: Message lookup for headers and labels
        """
        self.t = translator or Translator()

    def console_for(self, stream: TextIO) -> Console:
        """Create a rich console writing to the stream."""
        isatty = getattr(stream, "isatty", lambda: False)
        return Console(
            file=stream,
            highlight=False,
            width=None if isatty() else FILE_WIDTH,
        )

    def write(self, result: LedgerResult, stream: TextIO) -> None:
        console = self.console_for(stream)
        self.print_result(console, result, title=self.t("table.title", count=result.count))

    def print_result(self, console: Console, result: LedgerResult, title: Optional[str] = None) -> None:
        """Print the entry table, totals and breakdowns to a console."""
        console.print(self.entries_table(result, title))
        console.print()
        console.print(self.totals_table(result))
        console.print()
        self.print_breakdowns(console, result)

    def print_breakdowns(self, console: Console, result: LedgerResult) -> None:
        """Print the per-consultant, per-project and per-customer tables."""
        for key, totals in (
            ("breakdown.consultant", result.by_consultant),
            ("breakdown.project", result.by_project),
            ("breakdown.customer", result.by_customer),
        ):
            console.print(self.breakdown_table(self.t(key), totals))
            console.print()

    def entries_table(self, result: LedgerResult, title: Optional[str] = None) -> Table:
        """Build the per-entry table."""
        t = self.t
        table = Table(title=title)
        table.add_column(t("header.date"), style="cyan", no_wrap=True)
        table.add_column(t("header.consultant"), max_width=20, overflow="ellipsis")
        table.add_column(t("header.hours"), style="magenta", justify="right")
        table.add_column(t("header.rate"), justify="right")
        table.add_column(t("header.cost"), style="green", justify="right")
        table.add_column(t("header.project"), style="blue", max_width=25, overflow="ellipsis")
        table.add_column(t("header.customer"), max_width=20, overflow="ellipsis")
        table.add_column(t("header.description"), max_width=40, overflow="ellipsis")

        for row in result.rows:
            table.add_row(
                row.date.strftime(DATE_FORMAT),
                escape(row.consultant),
                format_number(row.hours),
                format_number(row.hourly_rate),
                format_number(row.cost),
                escape(row.project),
                escape(row.customer),
                escape(row.description),
            )

        return table

    def totals_table(self, result: LedgerResult) -> Table:
        """Build the grand totals table."""
        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_column(style="dim")
        table.add_column(style="bold", justify="right")
        table.add_row(f"{self.t('total.hours')}:", format_number(result.total_hours))
        table.add_row(f"{self.t('total.cost')}:", format_number(result.total_cost))
        return table

    def breakdown_table(self, title: str, totals: dict[str, Totals]) -> Table:
        """Build a per-entity hours/cost table."""
        table = Table(title=title, title_justify="left")
        table.add_column("", style="cyan")
        table.add_column(self.t("header.hours"), style="magenta", justify="right")
        table.add_column(self.t("header.cost"), style="green", justify="right")

        for name, item in totals.items():
            table.add_row(escape(name), format_number(item.hours), format_number(item.cost))

        return table
