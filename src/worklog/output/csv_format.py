"""CSV rendering."""

import csv
from typing import TextIO

from worklog.core.ledger import LedgerResult
from worklog.output.base import COLUMNS, DATE_FORMAT, OutputFormat, Renderer, format_number

TOTAL_LABEL = "TOTAL"


class CSVRenderer(Renderer):
    """Render entries as CSV with a trailing totals row."""

    format = OutputFormat.CSV

    def write(self, result: LedgerResult, stream: TextIO) -> None:
        writer = csv.writer(stream, lineterminator="\n")
        writer.writerow(COLUMNS)

        for row in result.rows:
            writer.writerow(
                [
                    row.date.strftime(DATE_FORMAT),
                    row.consultant,
                    row.project,
                    row.customer,
                    row.description,
                    format_number(row.hours),
                    format_number(row.hourly_rate),
                    format_number(row.cost),
                ]
            )

        writer.writerow(
            [
                "",
                "",
                "",
                "",
                TOTAL_LABEL,
                format_number(result.total_hours),
                "",
                format_number(result.total_cost),
            ]
        )
