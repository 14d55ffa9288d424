from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from spreadsheet_import.builder import SpreadsheetImport
from spreadsheet_import.mapping_config import MappingConfigParser
from spreadsheet_import.notifications import CommandNotifier


class Command(BaseCommand):
    help = "Import a CSV/XLSX file from a storage into a model, all rows or none"

    def add_arguments(self, parser):
        parser.add_argument(
            "path",
            type=str,
            help="File name of the spreadsheet inside the storage",
        )
        parser.add_argument(
            "--config",
            required=True,
            help="Path to the JSON or YAML mapping configuration",
        )
        parser.add_argument(
            "--model",
            help="Target model as app_label.ModelName (overrides the configuration)",
        )
        parser.add_argument(
            "--disk",
            help="Storage alias holding the spreadsheet",
        )
        parser.add_argument(
            "--skip-header",
            action="store_true",
            help="Skip the first row of the file",
        )
        parser.add_argument(
            "--no-mass-create",
            action="store_true",
            help="Save records one instance at a time instead of Model.objects.create()",
        )
        parser.add_argument(
            "--handle-blank-rows",
            action="store_true",
            help="Ignore rows whose cells are all blank",
        )
        parser.add_argument(
            "--rows-limit",
            type=int,
            help="Reject files with more data rows than this",
        )
        parser.add_argument(
            "--unique-field",
            help="Skip rows whose value for this field already exists",
        )

    def handle(self, *args, **options):
        config_path = options["config"]

        try:
            config_content = Path(config_path).read_text(encoding="utf-8")
        except FileNotFoundError:
            raise CommandError(f"File not found: {config_path}")

        try:
            mapping = MappingConfigParser(config_content)
        except ValueError as e:
            raise CommandError(f"Invalid mapping configuration: {e}")

        spreadsheet_import = mapping.apply(SpreadsheetImport.make(options["path"]))
        spreadsheet_import = self._apply_overrides(spreadsheet_import, options)

        result = spreadsheet_import.notifier(CommandNotifier(self)).execute()

        if not result.success:
            raise CommandError(f"Import failed: {result.error or 'see messages above'}")

        self.stdout.write(
            self.style.SUCCESS(
                f"Successfully imported {options['path']}. "
                f"Created: {result.created_count}, Skipped: {result.skipped_count}"
            )
        )

    def _apply_overrides(self, spreadsheet_import: SpreadsheetImport, options: dict) -> SpreadsheetImport:
        if options["model"]:
            spreadsheet_import = spreadsheet_import.model(options["model"])
        if options["disk"]:
            spreadsheet_import = spreadsheet_import.disk(options["disk"])
        if options["skip_header"]:
            spreadsheet_import = spreadsheet_import.skip_header(True)
        if options["no_mass_create"]:
            spreadsheet_import = spreadsheet_import.mass_create(False)
        if options["handle_blank_rows"]:
            spreadsheet_import = spreadsheet_import.handle_blank_rows(True)
        if options["rows_limit"] is not None:
            spreadsheet_import = spreadsheet_import.rows_limit(options["rows_limit"])
        if options["unique_field"]:
            spreadsheet_import = spreadsheet_import.unique_field(options["unique_field"])
        return spreadsheet_import
