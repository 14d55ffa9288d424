"""
Global pytest configuration and shared fixtures.

Spreadsheets used by the tests are written into the configured Django
storages (``default`` is a local FileSystemStorage under a temporary
MEDIA_ROOT, ``memory`` is an InMemoryStorage standing in for a remote disk)
and removed again after each test.
"""

import csv
import io
from contextlib import contextmanager

import pytest
from django.core.files.base import ContentFile
from django.core.files.storage import storages
from openpyxl import Workbook


class RecordingNotifier:
    """Notifier collecting every report as a (severity, title, body, persistent) tuple."""

    def __init__(self):
        self.reports = []

    def report(self, severity, title, body, persistent=False):
        self.reports.append((severity, title, body, persistent))

    @property
    def severities(self):
        return [report[0] for report in self.reports]

    @property
    def bodies(self):
        return [report[2] for report in self.reports]


class InMemoryRecordStore:
    """
    Dict-backed record store for running the executor without a database.

    ``atomic()`` snapshots the records and restores them on rollback or error.
    """

    def __init__(self, records=None):
        self.records = list(records or [])
        self._rollback = False

    @contextmanager
    def atomic(self):
        snapshot = list(self.records)
        self._rollback = False
        try:
            yield
        except Exception:
            self.records = snapshot
            raise
        if self._rollback:
            self.records = snapshot

    def mark_rollback(self):
        self._rollback = True

    def create(self, attributes):
        record = dict(attributes)
        self.records.append(record)
        return record

    def fill_and_save(self, attributes):
        return self.create(attributes)

    def find_where(self, field, value):
        for record in self.records:
            if record.get(field) == value:
                return record
        return None


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def memory_store():
    return InMemoryRecordStore()


@pytest.fixture
def stored_files():
    """Track (disk, name) pairs written during a test and delete them afterwards."""
    files = []
    yield files
    for disk, name in files:
        storage = storages[disk]
        if storage.exists(name):
            storage.delete(name)


@pytest.fixture
def write_csv(stored_files):
    """
    Write rows as a CSV file into a storage.

    Usage:
        name = write_csv([["Name", "Email"], ["Jane", "jane@example.com"]])
    """

    def _write(rows, name="customers.csv", disk="default"):
        output = io.StringIO()
        csv.writer(output).writerows(rows)
        saved_name = storages[disk].save(name, ContentFile(output.getvalue().encode("utf-8")))
        stored_files.append((disk, saved_name))
        return saved_name

    return _write


@pytest.fixture
def write_xlsx(stored_files):
    """Write rows into the first worksheet of an XLSX file inside a storage."""

    def _write(rows, name="customers.xlsx", disk="default", extra_sheets=None):
        workbook = Workbook()
        sheet = workbook.active
        for row in rows:
            sheet.append(row)
        for title, sheet_rows in (extra_sheets or {}).items():
            extra = workbook.create_sheet(title)
            for row in sheet_rows:
                extra.append(row)

        output = io.BytesIO()
        workbook.save(output)
        saved_name = storages[disk].save(name, ContentFile(output.getvalue()))
        stored_files.append((disk, saved_name))
        return saved_name

    return _write


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """
    Auto-categorize tests as unit or integration.

    Tests that go through the database-backed executor or the management
    command are integration tests; everything else is a unit test. Explicit
    ``@pytest.mark.integration`` / ``@pytest.mark.unit`` markers win.
    """
    for item in items:
        marker_names = {marker.name for marker in item.iter_markers()}
        if "integration" in marker_names or "unit" in marker_names:
            continue

        is_integration = "test_executor" in item.nodeid or "command" in item.nodeid
        item.add_marker(pytest.mark.integration if is_integration else pytest.mark.unit)
