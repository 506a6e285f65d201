"""Base classes for rendering ledger results."""

import sys
from abc import ABC, abstractmethod
from contextlib import contextmanager
from enum import Enum
from pathlib import Path
from typing import Iterator, Optional, TextIO

from worklog.core.errors import RenderError
from worklog.core.ledger import LedgerResult

# Column order of the CSV/JSON record schema
COLUMNS = [
    "DATE",
    "CONSULTANT",
    "PROJECT",
    "CUSTOMER",
    "DESCRIPTION",
    "HOURS",
    "RATE",
    "COST",
]

DATE_FORMAT = "%Y-%m-%d"


class OutputFormat(str, Enum):
    """Supported output formats."""

    TABLE = "table"
    CSV = "csv"
    JSON = "json"


def format_number(value: float) -> str:
    """Format hours, rates and costs with two decimals."""
    return f"{value:.2f}"


class Renderer(ABC):
    """Base class for all renderers."""

    format: OutputFormat

    @abstractmethod
    def write(self, result: LedgerResult, stream: TextIO) -> None:
        """Write the result to an open text stream.

        Args:
            result: Ledger query result
            stream: Destination
        """
        pass

    def render(self, result: LedgerResult, stream: TextIO) -> None:
        """Write the result, converting I/O failures to RenderError.

        Raises:
            RenderError: If the stream cannot be written
        """
        try:
            self.write(result, stream)
        except OSError as e:
            raise RenderError("error.render_write", format=self.format.value, cause=e) from e


@contextmanager
def open_output(path: Optional[Path]) -> Iterator[TextIO]:
    """Open an output file for writing, or yield stdout when no path is given.

    Raises:
        RenderError: If the file cannot be created
    """
    if path is None:
        yield sys.stdout
        return

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        f = open(path, "w", newline="", encoding="utf-8")
    except OSError as e:
        raise RenderError("error.render_create", path=path, cause=e) from e

    with f:
        yield f
