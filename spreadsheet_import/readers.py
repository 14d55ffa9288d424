"""Streaming readers that decode spreadsheet files from a Django storage."""

import csv
import io
import os
from pathlib import Path
from typing import Iterator

import openpyxl
from django.core.files.storage import Storage

from .constants import CSV_EXTENSIONS, DEFAULT_CSV_ENCODING, XLSX_EXTENSIONS
from .exceptions import UnsupportedFileType


def storage_is_remote(storage: Storage, name: str) -> bool:
    """A file is remote when its storage cannot expose it at an existing local filesystem path."""
    try:
        local_path = storage.path(name)
    except NotImplementedError:
        return True
    return not os.path.exists(local_path)


class StreamingReader:
    """Base class for streaming file readers."""

    def __init__(self, storage: Storage, name: str):
        """
        Initialize reader.

        Args:
            storage: Storage holding the file
            name: File name inside the storage
        """
        self.storage = storage
        self.name = name
        self.file_stream = None

    @property
    def is_remote(self) -> bool:
        return storage_is_remote(self.storage, self.name)

    def __enter__(self):
        """Open the file stream."""
        self.file_stream = self.storage.open(self.name, "rb")
        if not self.file_stream.seekable():
            # openpyxl needs a seekable stream
            with self.file_stream as remote_file:
                self.file_stream = io.BytesIO(remote_file.read())
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Close the file stream."""
        if self.file_stream is not None:
            self.file_stream.close()

    def read_rows(self) -> Iterator[list]:
        """
        Read every row of the file, header included.

        Yields:
            list: Row data as list of cell values
        """
        raise NotImplementedError


class CSVStreamingReader(StreamingReader):
    """Streaming reader for CSV files."""

    def __init__(self, storage: Storage, name: str, encoding: str = DEFAULT_CSV_ENCODING):
        super().__init__(storage, name)
        self.encoding = encoding

    def read_rows(self) -> Iterator[list]:
        if self.file_stream is None:
            raise ValueError("file_stream is not initialized")

        # Wrap binary stream in TextIOWrapper for csv.reader
        text_stream = io.TextIOWrapper(self.file_stream, encoding=self.encoding, newline="")
        yield from csv.reader(text_stream)


class XLSXStreamingReader(StreamingReader):
    """Streaming reader for the first worksheet of XLSX files."""

    def read_rows(self) -> Iterator[list]:
        if self.file_stream is None:
            raise ValueError("file_stream is not initialized")

        workbook = openpyxl.load_workbook(self.file_stream, read_only=True, data_only=True)
        try:
            sheet = workbook.worksheets[0]
            for row in sheet.iter_rows(values_only=True):
                yield list(row)
        finally:
            workbook.close()


def get_streaming_reader(storage: Storage, name: str, encoding: str = DEFAULT_CSV_ENCODING) -> StreamingReader:
    """
    Get appropriate streaming reader based on file extension.

    Raises:
        UnsupportedFileType: If the extension is neither CSV nor XLSX
    """
    ext = Path(name).suffix.lower()
    if ext in CSV_EXTENSIONS:
        return CSVStreamingReader(storage, name, encoding=encoding)
    if ext in XLSX_EXTENSIONS:
        return XLSXStreamingReader(storage, name)
    raise UnsupportedFileType(ext or name)
