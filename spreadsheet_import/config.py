"""Immutable import configuration."""

from dataclasses import dataclass, field
from typing import Any, Callable

from django.apps import apps
from django.db.models import Model

from .constants import (
    ERROR_INVALID_COLUMN,
    ERROR_MISSING_FORM_SCHEMA,
    ERROR_MISSING_MODEL,
    ERROR_MISSING_SOURCE,
    ERROR_MODEL_NOT_FOUND,
)
from .exceptions import ConfigurationError
from .fields import ImportField
from .notifications import translate

# attributes -> attributes (a None result keeps the input)
BeforeCreateHook = Callable[[dict], dict | None]
# (record, attributes) -> ignored
AfterCreateHook = Callable[[Any, dict], Any]
# attributes -> created record
RecordCreation = Callable[[dict], Any]
Callback = Callable[[], Any]


@dataclass(frozen=True)
class ImportConfig:
    """
    Everything one import run needs, fixed before execution starts.

    ``fields`` is a flat mapping of dot-path id to column index; nested
    mappings are flattened by the builder.
    """

    source: str = ""
    model: type[Model] | str | None = None
    fields: dict = field(default_factory=dict)
    form_schemas: dict = field(default_factory=dict)
    disk: str = "default"
    skip_header: bool = False
    mass_create: bool = True
    handle_blank_rows: bool = False
    rows_limit: int | None = None
    unique_field: str | None = None
    before_create: BeforeCreateHook | None = None
    after_create: AfterCreateHook | None = None
    record_creation: RecordCreation | None = None
    on_success: Callback | None = None
    on_fail: Callback | None = None

    def get_model(self) -> type[Model]:
        """
        Resolve the target model class.

        Raises:
            ConfigurationError: If no model is configured or the label is unknown
        """
        if self.model is None:
            raise ConfigurationError(translate(ERROR_MISSING_MODEL))
        if not isinstance(self.model, str):
            return self.model
        try:
            return apps.get_model(self.model)
        except (LookupError, ValueError):
            raise ConfigurationError(translate(ERROR_MODEL_NOT_FOUND, model=self.model))

    def validate(self) -> None:
        """
        Check that the configuration is complete and consistent.

        Raises:
            ConfigurationError: On the first inconsistency found
        """
        if not self.source:
            raise ConfigurationError(translate(ERROR_MISSING_SOURCE))

        for key, column in self.fields.items():
            if key not in self.form_schemas:
                raise ConfigurationError(translate(ERROR_MISSING_FORM_SCHEMA, field=key))

            schema = self.form_schemas[key]
            if not isinstance(schema, ImportField):
                continue
            if isinstance(column, bool) or not isinstance(column, int) or column < 0:
                raise ConfigurationError(translate(ERROR_INVALID_COLUMN, field=key, column=column))
            # Compiling surfaces unknown rules before any row is read
            schema.get_validation_rules()

    def do_mutate_before_create(self, attributes: dict) -> dict:
        if self.before_create is None:
            return attributes
        mutated = self.before_create(attributes)
        return attributes if mutated is None else mutated

    def do_mutate_after_create(self, record: Any, attributes: dict) -> None:
        if self.after_create is not None:
            self.after_create(record, attributes)

    def do_run_on_success(self) -> None:
        if self.on_success is not None:
            self.on_success()

    def do_run_on_fail(self) -> None:
        if self.on_fail is not None:
            self.on_fail()
