from django.apps import AppConfig


class SpreadsheetImportConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "spreadsheet_import"
    verbose_name = "Spreadsheet Import"
