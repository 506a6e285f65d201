"""Tests for table, CSV and JSON rendering."""

import io
import json
from datetime import date
from pathlib import Path

import pytest  # type: ignore[import-not-found]

from worklog.core.errors import RenderError
from worklog.core.ledger import LedgerResult, LedgerRow, summarize
from worklog.i18n import Translator
from worklog.output import (
    CSVRenderer,
    JSONRenderer,
    OutputFormat,
    TableRenderer,
    get_renderer,
    open_output,
)


class FailingStream(io.StringIO):
    """Stream whose writes fail like a full disk."""

    def write(self, s: str) -> int:
        raise OSError("No space left on device")


@pytest.fixture
def result() -> LedgerResult:
    """Two rows, one of them 3.5 hours at 500."""
    rows = [
        LedgerRow(
            date=date(2024, 3, 15),
            consultant="Anna",
            project="Backend",
            customer="Acme",
            description="Code review",
            hours=3.5,
            hourly_rate=500.0,
            cost=1750.0,
        ),
        LedgerRow(
            date=date(2024, 3, 16),
            consultant="Bertil",
            project="Frontend",
            customer="Globex",
            description="Design, round 2",
            hours=1.0,
            hourly_rate=800.0,
            cost=800.0,
        ),
    ]
    return summarize(rows)


class TestCSVRenderer:
    """Test CSV output."""

    def test_exact_output(self, result: LedgerResult) -> None:
        """Test header, rows, quoting and the totals row."""
        stream = io.StringIO()
        CSVRenderer().render(result, stream)

        assert stream.getvalue() == (
            "DATE,CONSULTANT,PROJECT,CUSTOMER,DESCRIPTION,HOURS,RATE,COST\n"
            "2024-03-15,Anna,Backend,Acme,Code review,3.50,500.00,1750.00\n"
            '2024-03-16,Bertil,Frontend,Globex,"Design, round 2",1.00,800.00,800.00\n'
            ",,,,TOTAL,4.50,,2550.00\n"
        )

    def test_empty_result_has_header_and_totals(self) -> None:
        """Test CSV for an empty result."""
        stream = io.StringIO()
        CSVRenderer().render(summarize([]), stream)

        lines = stream.getvalue().splitlines()
        assert lines == [
            "DATE,CONSULTANT,PROJECT,CUSTOMER,DESCRIPTION,HOURS,RATE,COST",
            ",,,,TOTAL,0.00,,0.00",
        ]


class TestJSONRenderer:
    """Test JSON output."""

    def test_document(self, result: LedgerResult) -> None:
        """Test the JSON document structure and values."""
        stream = io.StringIO()
        JSONRenderer().render(result, stream)

        data = json.loads(stream.getvalue())
        assert data["count"] == 2
        assert data["total_hours"] == 4.5
        assert data["total_cost"] == 2550.0
        assert data["entries"][0] == {
            "date": "2024-03-15",
            "consultant": "Anna",
            "project": "Backend",
            "customer": "Acme",
            "description": "Code review",
            "hours": 3.5,
            "hourly_rate": 500.0,
            "cost": 1750.0,
        }

    def test_non_ascii_kept(self) -> None:
        """Test that non-ASCII names are written as-is."""
        row = LedgerRow(date(2024, 1, 2), "Åsa", "Öl", "Kund", "Möte", 1, 100, 100)
        stream = io.StringIO()
        JSONRenderer().render(summarize([row]), stream)

        assert "Åsa" in stream.getvalue()
        assert stream.getvalue().endswith("\n")


class TestTableRenderer:
    """Test table output."""

    def test_contains_values_and_totals(self, result: LedgerResult) -> None:
        """Test that the table shows entries, totals and breakdowns."""
        stream = io.StringIO()
        TableRenderer(Translator("en")).render(result, stream)

        output = stream.getvalue()
        assert "1750.00" in output
        assert "2550.00" in output
        assert "Code review" in output
        assert "Total hours" in output
        assert "Per consultant" in output
        assert "Globex" in output

    def test_swedish_headers(self, result: LedgerResult) -> None:
        """Test localized headers."""
        stream = io.StringIO()
        TableRenderer(Translator("sv")).render(result, stream)

        output = stream.getvalue()
        assert "Konsult" in output
        assert "Kostnad" in output

    def test_print_breakdowns(self, result: LedgerResult) -> None:
        """Test the per-consultant, per-project and per-customer tables."""
        stream = io.StringIO()
        renderer = TableRenderer(Translator("en"))
        renderer.print_breakdowns(renderer.console_for(stream), result)

        output = stream.getvalue()
        assert "Per consultant" in output
        assert "Per project" in output
        assert "Per customer" in output
        assert "Total hours" not in output


class TestRendererSelection:
    """Test get_renderer and open_output."""

    @pytest.mark.parametrize(
        "output_format, renderer_type",
        [
            (OutputFormat.TABLE, TableRenderer),
            (OutputFormat.CSV, CSVRenderer),
            (OutputFormat.JSON, JSONRenderer),
        ],
    )
    def test_get_renderer(self, output_format: OutputFormat, renderer_type: type) -> None:
        """Test that each format maps to its renderer."""
        assert isinstance(get_renderer(output_format), renderer_type)

    def test_open_output_writes_file(self, temp_dir: Path, result: LedgerResult) -> None:
        """Test writing to a file in a new directory."""
        path = temp_dir / "out" / "entries.csv"
        with open_output(path) as stream:
            CSVRenderer().render(result, stream)

        assert path.read_text(encoding="utf-8").startswith("DATE,CONSULTANT")

    def test_open_output_failure(self, temp_dir: Path) -> None:
        """Test that an unwritable destination raises RenderError."""
        blocker = temp_dir / "file"
        blocker.write_text("")

        with pytest.raises(RenderError):
            with open_output(blocker / "entries.csv"):
                pass

    def test_write_failure_becomes_render_error(self, result: LedgerResult) -> None:
        """Test that a failing stream raises RenderError."""
        stream = FailingStream()

        with pytest.raises(RenderError):
            JSONRenderer().render(result, stream)
