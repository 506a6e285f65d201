"""JSON rendering."""

import json
from typing import Any, TextIO

from worklog.core.ledger import LedgerResult
from worklog.output.base import DATE_FORMAT, OutputFormat, Renderer, format_number


def _number(value: float) -> float:
    # Same rounding as the CSV and table output
    return float(format_number(value))


class JSONRenderer(Renderer):
    """Render entries and totals as a JSON document."""

    format = OutputFormat.JSON

    def __init__(self, indent: int = 2):
        """Initialize renderer.

        Args:
            indent: JSON indentation level
        """
        self.indent = indent

    def to_dict(self, result: LedgerResult) -> dict[str, Any]:
        """Build the JSON document for a result."""
        return {
            "entries": [
                {
                    "date": row.date.strftime(DATE_FORMAT),
                    "consultant": row.consultant,
                    "project": row.project,
                    "customer": row.customer,
                    "description": row.description,
                    "hours": _number(row.hours),
                    "hourly_rate": _number(row.hourly_rate),
                    "cost": _number(row.cost),
                }
                for row in result.rows
            ],
            "total_hours": _number(result.total_hours),
            "total_cost": _number(result.total_cost),
            "count": result.count,
        }

    def write(self, result: LedgerResult, stream: TextIO) -> None:
        json.dump(self.to_dict(result), stream, indent=self.indent, ensure_ascii=False)
        stream.write("\n")
