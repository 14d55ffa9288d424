"""
Fluent entry point for configuring and running an import.

Example usage:
    result = (
        SpreadsheetImport.make("imports/customers.xlsx")
        .model("crm.Customer")
        .fields({"name": 0, "email": 1, "profile": {"city": 2}})
        .form_schemas(
            {
                "name": ImportField.make("name").required().rules(["max:100"]),
                "email": ImportField.make("email").required().rules(["email"]),
                "profile.city": ImportField.make("profile.city"),
            }
        )
        .skip_header(True)
        .unique_field("email")
        .execute()
    )

Every configuring call returns a new builder, so a partially configured
builder can be shared and extended without affecting other imports.
"""

from typing import Any

from django.conf import settings
from django.db.models import Model

from .config import AfterCreateHook, BeforeCreateHook, Callback, ImportConfig, RecordCreation
from .constants import DEFAULT_DISK
from .executor import ExecutionResult, ImportExecutor
from .notifications import Notifier
from .paths import dot
from .sources import RowSource
from .stores import RecordStore


class SpreadsheetImport:
    """Immutable builder producing an ``ImportConfig`` and running it."""

    def __init__(self, options: dict | None = None, collaborators: dict | None = None):
        self._options = dict(options or {})
        self._collaborators = dict(collaborators or {})

    @classmethod
    def make(cls, source: str) -> "SpreadsheetImport":
        """Start a new import of the spreadsheet stored under ``source``."""
        rows_limit = getattr(settings, "SPREADSHEET_IMPORT_ROWS_LIMIT", None)
        return cls(
            {
                "source": source,
                "disk": getattr(settings, "SPREADSHEET_IMPORT_DEFAULT_DISK", DEFAULT_DISK),
                "mass_create": getattr(settings, "SPREADSHEET_IMPORT_MASS_CREATE", True),
                "rows_limit": rows_limit or None,
            }
        )

    def _with_options(self, **changes: Any) -> "SpreadsheetImport":
        return type(self)({**self._options, **changes}, self._collaborators)

    def _with_collaborators(self, **changes: Any) -> "SpreadsheetImport":
        return type(self)(self._options, {**self._collaborators, **changes})

    def spreadsheet(self, source: str) -> "SpreadsheetImport":
        return self._with_options(source=source)

    def fields(self, fields: dict) -> "SpreadsheetImport":
        """Map field ids to 0-based column indexes; nested mappings become dot-path ids."""
        return self._with_options(fields=dot(fields))

    def form_schemas(self, form_schemas: dict) -> "SpreadsheetImport":
        return self._with_options(form_schemas=dict(form_schemas))

    def model(self, model: type[Model] | str) -> "SpreadsheetImport":
        """Target model class, or an ``"app_label.ModelName"`` label."""
        return self._with_options(model=model)

    def disk(self, disk: str = DEFAULT_DISK) -> "SpreadsheetImport":
        """Storage alias (from ``settings.STORAGES``) holding the spreadsheet."""
        return self._with_options(disk=disk)

    def skip_header(self, skip_header: bool) -> "SpreadsheetImport":
        return self._with_options(skip_header=skip_header)

    def mass_create(self, mass_create: bool = True) -> "SpreadsheetImport":
        return self._with_options(mass_create=mass_create)

    def handle_blank_rows(self, handle_blank_rows: bool = False) -> "SpreadsheetImport":
        return self._with_options(handle_blank_rows=handle_blank_rows)

    def rows_limit(self, rows: int | None = None) -> "SpreadsheetImport":
        return self._with_options(rows_limit=rows)

    def unique_field(self, field: str | bool) -> "SpreadsheetImport":
        """Field whose existing values make a row a skipped duplicate; ``False`` disables the check."""
        return self._with_options(unique_field=field or None)

    def mutate_before_create(self, fn: BeforeCreateHook | None) -> "SpreadsheetImport":
        return self._with_options(before_create=fn)

    def mutate_after_create(self, fn: AfterCreateHook | None) -> "SpreadsheetImport":
        return self._with_options(after_create=fn)

    def handle_record_creation(self, fn: RecordCreation | None) -> "SpreadsheetImport":
        return self._with_options(record_creation=fn)

    def run_on_success(self, fn: Callback | bool) -> "SpreadsheetImport":
        return self._with_options(on_success=fn or None)

    def run_on_fail(self, fn: Callback | bool) -> "SpreadsheetImport":
        return self._with_options(on_fail=fn or None)

    def notifier(self, notifier: Notifier) -> "SpreadsheetImport":
        return self._with_collaborators(notifier=notifier)

    def record_store(self, record_store: RecordStore) -> "SpreadsheetImport":
        return self._with_collaborators(record_store=record_store)

    def row_source(self, row_source: RowSource) -> "SpreadsheetImport":
        return self._with_collaborators(row_source=row_source)

    def build(self) -> ImportConfig:
        return ImportConfig(**self._options)

    def execute(self) -> ExecutionResult:
        return ImportExecutor(self.build(), **self._collaborators).execute()
