"""Main CLI application."""

import logging
import sys
from pathlib import Path
from typing import Any, Callable, NoReturn, Optional

import click
from rich.console import Console
from rich.markup import escape

from worklog import __version__
from worklog.analysis.reports import ReportGenerator, month_filter, month_label
from worklog.cli.config_commands import config
from worklog.core.config import ConfigManager
from worklog.core.errors import ValidationError, WorklogError
from worklog.core.filters import EntryFilter, build_filter, parse_month
from worklog.core.ledger import TimeLedger, prepare_log_request
from worklog.core.storage import StorageManager
from worklog.i18n import Translator
from worklog.output import OutputFormat, get_renderer, open_output

console = Console()
error_console = Console(stderr=True)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str, verbose: bool = False) -> None:
    """Send worklog log records to stderr.

    Args:
        level: Level name from the config file
        verbose: Force DEBUG
    """
    log_level = logging.DEBUG if verbose else getattr(logging, level.upper(), logging.WARNING)
    logger = logging.getLogger("worklog")
    logger.setLevel(log_level)

    # Replace any handler from an earlier invocation in the same process
    for handler in list(logger.handlers):
        if getattr(handler, "_worklog_cli", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._worklog_cli = True  # type: ignore[attr-defined]
    logger.addHandler(handler)


def fail(ctx: click.Context, error: Exception) -> NoReturn:
    """Print an error in the user's language and exit with status 1."""
    t: Translator = ctx.obj.get("translator") or Translator.detect()
    message = error.describe(t) if isinstance(error, WorklogError) else str(error)
    error_console.print(f"[red]{t('error')}:[/red] {escape(message)}")
    sys.exit(1)


def get_ledger(ctx: click.Context) -> TimeLedger:
    """Get the TimeLedger for this invocation, connecting on first use."""
    ledger: Optional[TimeLedger] = ctx.obj.get("ledger")
    if ledger is None:
        config_mgr: ConfigManager = ctx.obj["config"]
        storage = StorageManager(config_mgr.database_url())
        ctx.call_on_close(storage.close)
        ledger = TimeLedger(storage, config_mgr)
        ctx.obj["ledger"] = ledger
    return ledger


class MonthParamType(click.ParamType):
    """Month as a number (1-12) or as YYYY-MM."""

    name = "month"

    def convert(self, value: Any, param: Optional[click.Parameter], ctx: Optional[click.Context]) -> Any:
        if isinstance(value, tuple):
            return value
        text = str(value).strip()
        if text.isdigit():
            return (None, int(text))
        try:
            return parse_month(text)
        except ValidationError as e:
            obj = ctx.find_object(dict) if ctx is not None else None
            t = (obj or {}).get("translator") or Translator.detect()
            self.fail(e.describe(t), param, ctx)


MONTH = MonthParamType()


def filter_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the shared entry filter options to a command."""
    options = [
        click.option("-n", "--consultant", help="Filter by consultant name"),
        click.option("-p", "--project", help="Filter by project name"),
        click.option("-c", "--customer", help="Filter by customer name"),
        click.option("-m", "--month", type=MONTH, help="Month (1-12 or YYYY-MM)"),
        click.option("-w", "--week", type=int, help="ISO week number (1-53)"),
        click.option("-y", "--year", type=int, help="Year (alone: the whole year)"),
        click.option("-D", "--date", "date_str", help="Single date (YYYY-MM-DD)"),
        click.option("--today", is_flag=True, help="Only today's entries"),
        click.option("--from", "from_date", help="Start date, inclusive (YYYY-MM-DD)"),
        click.option("--to", "to_date", help="End date, inclusive (YYYY-MM-DD)"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def filter_from_options(
    options: dict[str, Any], default_to_current_month: bool
) -> EntryFilter:
    """Build an EntryFilter from the parsed filter options."""
    year = options.get("year")
    month = None
    if options.get("month"):
        month_year, month = options["month"]
        year = month_year or year
    return build_filter(
        consultant=options.get("consultant"),
        project=options.get("project"),
        customer=options.get("customer"),
        week=options.get("week"),
        year=year,
        month=month,
        date=options.get("date_str"),
        today=options.get("today", False),
        from_date=options.get("from_date"),
        to_date=options.get("to_date"),
        default_to_current_month=default_to_current_month,
    )


@click.group()
@click.version_option(version=__version__, prog_name="worklog")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Config file (default: $WORKLOG_CONFIG or ~/.worklog/config.yml)",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], verbose: bool) -> None:
    """Worklog - log consultant hours and report on them.

    Hours are logged per consultant, project and customer, and can be
    listed, exported and summarized per month.
    """
    ctx.ensure_object(dict)
    try:
        config_mgr = ConfigManager(config_path)
    except WorklogError as e:
        fail(ctx, e)

    ctx.obj["config"] = config_mgr
    ctx.obj["translator"] = Translator.detect(config_mgr.language)
    setup_logging(config_mgr.log_level, verbose)


@cli.command()
@click.option("-t", "--hours", type=float, required=True, help="Hours worked")
@click.option("-d", "--description", required=True, help="Description of the work")
@click.option("-p", "--project", help="Project name")
@click.option("-c", "--client", help="Customer name")
@click.option("-n", "--consultant", help="Consultant name")
@click.option("-r", "--rate", type=float, help="Hourly rate")
@click.option("-D", "--date", "date_str", help="Date (YYYY-MM-DD, default: today)")
@click.pass_context
def add(
    ctx: click.Context,
    hours: float,
    description: str,
    project: Optional[str],
    client: Optional[str],
    consultant: Optional[str],
    rate: Optional[float],
    date_str: Optional[str],
) -> None:
    """Log hours.

    Hours logged again for the same date, consultant, project, description
    and rate are added to the existing entry.

    Example:
        worklog add -t 3.5 -d "Code review" -p Backend -c Acme -n Anna -r 950
    """
    t: Translator = ctx.obj["translator"]

    try:
        request = prepare_log_request(
            hours,
            description,
            project=project,
            client=client,
            consultant=consultant,
            rate=rate,
            date=date_str,
            config=ctx.obj["config"],
        )
        result = get_ledger(ctx).log_hours(request)
    except WorklogError as e:
        fail(ctx, e)

    entry = result.entry
    if result.merged:
        console.print(f"[green]✓[/green] {t('add.success_merged')}")
    else:
        console.print(f"[green]✓[/green] {t('add.success')}")

    console.print(f"  {t('add.output.date', value=entry.date.isoformat())}", markup=False)
    console.print(f"  {t('add.output.consultant', value=entry.consultant.name)}", markup=False)
    console.print(f"  {t('add.output.hours', value=entry.hours)}", markup=False)
    console.print(f"  {t('add.output.rate', value=entry.hourly_rate)}", markup=False)
    console.print(f"  {t('add.output.cost', value=entry.cost)}", markup=False)
    console.print(f"  {t('add.output.project', value=entry.project.name)}", markup=False)
    console.print(f"  {t('add.output.customer', value=entry.project.customer.name)}", markup=False)
    console.print(f"  {t('add.output.description', value=entry.description)}", markup=False)


@cli.command()
@filter_options
@click.option(
    "-o",
    "--output",
    "output_format",
    type=click.Choice([f.value for f in OutputFormat]),
    default=OutputFormat.TABLE.value,
    help="Output format",
)
@click.option(
    "--output-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write to a file instead of stdout",
)
@click.pass_context
def get(ctx: click.Context, output_format: str, output_file: Optional[Path], **options: Any) -> None:
    """List logged hours.

    Without a date option the current month is shown.

    Examples:
        worklog get
        worklog get --month 3 --year 2024 -o csv
        worklog get --week 12 --consultant Anna
        worklog get --from 2024-01-01 --to 2024-01-31 -o json --output-file jan.json
    """
    t: Translator = ctx.obj["translator"]

    try:
        entry_filter = filter_from_options(options, default_to_current_month=True)
        result = get_ledger(ctx).query(entry_filter)

        if result.is_empty:
            console.print(f"[yellow]{t('get.no_results')}[/yellow]")
            return

        renderer = get_renderer(OutputFormat(output_format), t)
        with open_output(output_file) as stream:
            renderer.render(result, stream)
    except WorklogError as e:
        fail(ctx, e)

    if output_file:
        console.print(f"[green]✓[/green] {escape(t('export.success', count=result.count, path=output_file))}")


@cli.command()
@filter_options
@click.option(
    "-o",
    "--output",
    "output_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file (default: stdout)",
)
@click.option(
    "-f",
    "--format",
    "output_format",
    type=click.Choice([OutputFormat.CSV.value]),
    default=OutputFormat.CSV.value,
    help="Export format",
)
@click.pass_context
def export(ctx: click.Context, output_file: Optional[Path], output_format: str, **options: Any) -> None:
    """Export logged hours as CSV.

    Unlike get, no date range is applied unless one is given.

    Examples:
        worklog export -o all.csv
        worklog export --month 2024-03 --customer Acme -o acme-march.csv
    """
    t: Translator = ctx.obj["translator"]

    try:
        entry_filter = filter_from_options(options, default_to_current_month=False)
        result = get_ledger(ctx).query(entry_filter)

        if result.is_empty:
            console.print(f"[yellow]{t('get.no_results')}[/yellow]")
            return

        renderer = get_renderer(OutputFormat(output_format), t)
        with open_output(output_file) as stream:
            renderer.render(result, stream)
    except WorklogError as e:
        fail(ctx, e)

    if output_file:
        console.print(f"[green]✓[/green] {escape(t('export.success', count=result.count, path=output_file))}")


@cli.command()
@click.option("-m", "--month", help="Month (YYYY-MM, default: current month)")
@click.pass_context
def report(ctx: click.Context, month: Optional[str]) -> None:
    """Show a summary of all hours logged in one month.

    Examples:
        worklog report
        worklog report --month 2024-03
    """
    generator = ReportGenerator(console, ctx.obj["translator"])
    try:
        entry_filter = month_filter(month)
        result = get_ledger(ctx).query(entry_filter)
    except WorklogError as e:
        fail(ctx, e)

    generator.print_report(result, month_label(entry_filter, ctx.obj["translator"]))


cli.add_command(config)


def main() -> None:
    """Console script entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
