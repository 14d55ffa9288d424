"""Tests for import_spreadsheet management command."""

import json
import tempfile
from io import StringIO
from pathlib import Path

from django.core.files.base import ContentFile
from django.core.files.storage import storages
from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase

from tests.testapp.models import Customer

CSV_CONTENT = "Name,Email,Age\nJane,jane@example.com,30\nJohn,john@example.com,41\n"

MAPPING = {
    "model": "testapp.Customer",
    "skip_header": True,
    "fields": {
        "name": {"column": 0, "required": True},
        "email": {"column": 1, "rules": ["email"]},
        "age": {"column": 2, "rules": "integer"},
    },
}


class ImportSpreadsheetCommandTest(TestCase):
    """Test cases for import_spreadsheet management command"""

    def setUp(self):
        self.tmp_dir = tempfile.TemporaryDirectory()
        self.config_path = Path(self.tmp_dir.name) / "customers.json"
        self.config_path.write_text(json.dumps(MAPPING), encoding="utf-8")
        self.file_name = storages["default"].save("command/customers.csv", ContentFile(CSV_CONTENT.encode("utf-8")))

    def tearDown(self):
        storages["default"].delete(self.file_name)
        self.tmp_dir.cleanup()

    def test_imports_file(self):
        """Test importing every row of the file"""
        out = StringIO()

        call_command("import_spreadsheet", self.file_name, "--config", str(self.config_path), stdout=out)

        self.assertEqual(Customer.objects.count(), 2)
        self.assertEqual(Customer.objects.get(email="jane@example.com").age, 30)
        self.assertIn("Created: 2, Skipped: 0", out.getvalue())
        self.assertIn("Import succeeded: 2 rows imported, 0 skipped", out.getvalue())

    def test_unique_field_override_skips_existing(self):
        """Test --unique-field skips rows already in the database"""
        Customer.objects.create(name="Jane", email="jane@example.com")
        out = StringIO()

        call_command(
            "import_spreadsheet",
            self.file_name,
            "--config",
            str(self.config_path),
            "--unique-field",
            "email",
            stdout=out,
        )

        self.assertEqual(Customer.objects.count(), 2)
        self.assertIn("Created: 1, Skipped: 1", out.getvalue())

    def test_rows_limit_override(self):
        """Test --rows-limit rejects a file that is too large"""
        err = StringIO()

        with self.assertRaises(CommandError) as context:
            call_command(
                "import_spreadsheet",
                self.file_name,
                "--config",
                str(self.config_path),
                "--rows-limit",
                1,
                stderr=err,
            )

        self.assertIn("maximum number of rows allowed is 1", str(context.exception))
        self.assertEqual(Customer.objects.count(), 0)

    def test_validation_failure_raises(self):
        """Test a failing row aborts the whole import"""
        mapping = {**MAPPING, "fields": {**MAPPING["fields"], "age": {"column": 2, "rules": ["digits:3"]}}}
        self.config_path.write_text(json.dumps(mapping), encoding="utf-8")
        err = StringIO()

        with self.assertRaises(CommandError):
            call_command("import_spreadsheet", self.file_name, "--config", str(self.config_path), stderr=err)

        self.assertEqual(Customer.objects.count(), 0)
        self.assertIn("Line 2", err.getvalue())

    def test_missing_config_file(self):
        """Test error when the mapping file does not exist"""
        with self.assertRaises(CommandError) as context:
            call_command("import_spreadsheet", self.file_name, "--config", "/nonexistent/mapping.json")

        self.assertIn("File not found", str(context.exception))

    def test_invalid_config(self):
        """Test error when the mapping has no fields"""
        self.config_path.write_text(json.dumps({"model": "testapp.Customer"}), encoding="utf-8")

        with self.assertRaises(CommandError) as context:
            call_command("import_spreadsheet", self.file_name, "--config", str(self.config_path))

        self.assertIn("Invalid mapping configuration", str(context.exception))
