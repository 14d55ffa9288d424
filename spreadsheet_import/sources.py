"""
Row sources: turn a stored spreadsheet into the rows to import.
"""

import logging
from dataclasses import dataclass
from typing import Any, Protocol

from django.conf import settings
from django.core.files.storage import storages

from .constants import DEFAULT_CSV_ENCODING
from .exceptions import RowLimitExceeded
from .readers import get_streaming_reader
from .rules import is_blank

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceRow:
    """One spreadsheet row; ``index`` is its 0-based position in the sheet."""

    index: int
    cells: list

    @property
    def line_number(self) -> int:
        return self.index + 1

    def __getitem__(self, column: int) -> Any:
        return self.cells[column]

    def __len__(self) -> int:
        return len(self.cells)


def is_blank_row(cells: list) -> bool:
    return all(is_blank(cell) for cell in cells)


class RowSource(Protocol):
    def load(
        self,
        source: str,
        disk: str,
        skip_header: bool = False,
        handle_blank_rows: bool = False,
        rows_limit: int | None = None,
    ) -> list[SourceRow]: ...


class StorageRowSource:
    """
    Load rows from a file kept in one of the configured Django storages.

    ``disk`` is a storage alias from ``settings.STORAGES``. Rows are streamed
    once: the limit is enforced while reading, so an oversized file is
    rejected without being decoded to the end.
    """

    def __init__(self, encoding: str | None = None):
        self.encoding = encoding or getattr(settings, "SPREADSHEET_IMPORT_CSV_ENCODING", DEFAULT_CSV_ENCODING)

    def load(
        self,
        source: str,
        disk: str,
        skip_header: bool = False,
        handle_blank_rows: bool = False,
        rows_limit: int | None = None,
    ) -> list[SourceRow]:
        """
        Decode the file into rows.

        Args:
            source: File name inside the storage
            disk: Storage alias
            skip_header: Drop the first row
            handle_blank_rows: Drop rows whose cells are all blank
            rows_limit: Maximum number of rows after the header skip; falsy means unlimited

        Returns:
            list[SourceRow]: Rows in sheet order

        Raises:
            RowLimitExceeded: If the file holds more rows than ``rows_limit``
        """
        reader = get_streaming_reader(storages[disk], source, encoding=self.encoding)
        rows = []

        with reader:
            for index, cells in enumerate(reader.read_rows()):
                if skip_header and index == 0:
                    continue
                rows.append(SourceRow(index=index, cells=cells))
                if rows_limit and len(rows) > rows_limit:
                    raise RowLimitExceeded(rows_limit)

        if handle_blank_rows:
            rows = [row for row in rows if not is_blank_row(row.cells)]

        logger.debug(f"Loaded {len(rows)} rows from {source} on disk '{disk}'")
        return rows
