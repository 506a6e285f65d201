"""Rendering of ledger results as table, CSV or JSON."""

from typing import Optional

from worklog.i18n import Translator
from worklog.output.base import COLUMNS, OutputFormat, Renderer, format_number, open_output
from worklog.output.csv_format import CSVRenderer
from worklog.output.json_format import JSONRenderer
from worklog.output.table_format import TableRenderer


def get_renderer(output_format: OutputFormat, translator: Optional[Translator] = None) -> Renderer:
    """Return the renderer for a format.

    Args:
        output_format: Requested format
        translator: Used by the table renderer for headers and labels

    Returns:
        Renderer instance
    """
    if output_format == OutputFormat.CSV:
        return CSVRenderer()
    if output_format == OutputFormat.JSON:
        return JSONRenderer()
    return TableRenderer(translator)


__all__ = [
    "COLUMNS",
    "CSVRenderer",
    "JSONRenderer",
    "OutputFormat",
    "Renderer",
    "TableRenderer",
    "format_number",
    "get_renderer",
    "open_output",
]
