"""
Configuration parser for file-driven imports.

This module provides the MappingConfigParser class that parses and validates
JSON/YAML mapping files used by the ``import_spreadsheet`` command.
"""

import json
import logging

import yaml
from django.utils.translation import gettext as _

from .builder import SpreadsheetImport
from .fields import ImportField
from .paths import SEPARATOR

logger = logging.getLogger(__name__)

# Configuration error messages
ERROR_INVALID_CONFIG = "Invalid import configuration"
ERROR_MISSING_FIELDS = "Configuration must have a non-empty 'fields' mapping"
ERROR_INVALID_FIELD_CONFIG = "Invalid field configuration for '{field}'"
ERROR_UNKNOWN_OPTION = "Unknown import option '{option}'. Allowed options: {allowed}"

FIELD_KEYS = {"column", "required", "rules", "messages", "label"}
IMPORT_OPTIONS = {"model", "disk", "skip_header", "mass_create", "handle_blank_rows", "rows_limit", "unique_field"}


class MappingConfigParser:
    """
    Parser and validator for import mapping configuration.

    Supports JSON and YAML formats.

    Example configuration:
        {
          "model": "crm.Customer",
          "skip_header": true,
          "unique_field": "email",
          "fields": {
            "name": {"column": 0, "required": true, "rules": ["max:100"], "label": "Name"},
            "email": {"column": 1, "rules": "required|email"},
            "age": 2,
            "profile": {
              "city": {"column": 3}
            }
          }
        }

    A field entry is either a column index, a field definition holding a
    ``column`` key, or a nested group of further entries.
    """

    def __init__(self, config: dict | str):
        """
        Initialize parser with configuration.

        Args:
            config: Dictionary or JSON/YAML string
        """
        if isinstance(config, str):
            config = self._parse_string(config)

        self.config = config
        self.validate()

    def _parse_string(self, config_str: str) -> dict:
        """
        Parse configuration from JSON or YAML string.

        Raises:
            ValueError: If unable to parse
        """
        # Try JSON first
        try:
            return json.loads(config_str)
        except json.JSONDecodeError:
            pass

        # Try YAML
        try:
            return yaml.safe_load(config_str)
        except yaml.YAMLError as e:
            raise ValueError(f"{_(ERROR_INVALID_CONFIG)}: {e}")

    def validate(self):
        """
        Validate the configuration structure.

        Raises:
            ValueError: If configuration is invalid
        """
        if not isinstance(self.config, dict):
            raise ValueError(_(ERROR_INVALID_CONFIG))

        fields = self.config.get("fields")
        if not isinstance(fields, dict) or not fields:
            raise ValueError(_(ERROR_MISSING_FIELDS))

        for option in self.config:
            if option != "fields" and option not in IMPORT_OPTIONS:
                raise ValueError(
                    _(ERROR_UNKNOWN_OPTION).format(option=option, allowed=", ".join(sorted(IMPORT_OPTIONS)))
                )

        self._collect_fields(fields)

    def _collect_fields(self, entries: dict, prefix: str = "") -> tuple[dict, dict]:
        """
        Walk field entries and build the column mapping and form schemas.

        Returns:
            tuple: (flat id -> column mapping, flat id -> ImportField mapping)
        """
        columns = {}
        schemas = {}

        for key, entry in entries.items():
            field_id = f"{prefix}{key}"

            if isinstance(entry, int) and not isinstance(entry, bool):
                columns[field_id] = entry
                schemas[field_id] = ImportField.make(field_id)
            elif isinstance(entry, dict) and "column" in entry:
                columns[field_id] = entry["column"]
                schemas[field_id] = self._build_field(field_id, entry)
            elif isinstance(entry, dict) and entry:
                nested_columns, nested_schemas = self._collect_fields(entry, prefix=f"{field_id}{SEPARATOR}")
                columns.update(nested_columns)
                schemas.update(nested_schemas)
            else:
                raise ValueError(_(ERROR_INVALID_FIELD_CONFIG).format(field=field_id))

        return columns, schemas

    def _build_field(self, field_id: str, entry: dict) -> ImportField:
        unknown = set(entry) - FIELD_KEYS
        if unknown:
            raise ValueError(_(ERROR_INVALID_FIELD_CONFIG).format(field=field_id))

        field = ImportField.make(field_id).required(bool(entry.get("required", False)))
        if entry.get("label"):
            field = field.label(entry["label"])
        if entry.get("rules"):
            field = field.rules(entry["rules"])
        if entry.get("messages"):
            field = field.validation_messages(entry["messages"])
        return field

    def get_fields(self) -> tuple[dict, dict]:
        return self._collect_fields(self.config["fields"])

    def get_options(self) -> dict:
        return {option: value for option, value in self.config.items() if option in IMPORT_OPTIONS}

    def apply(self, spreadsheet_import: SpreadsheetImport) -> SpreadsheetImport:
        """Configure a builder from this mapping."""
        columns, schemas = self.get_fields()
        configured = spreadsheet_import.fields(columns).form_schemas(schemas)

        for option, value in self.get_options().items():
            configured = getattr(configured, option)(value)

        logger.debug(f"Applied mapping configuration with {len(columns)} fields")
        return configured
