from .base import config

# Spreadsheet import settings
SPREADSHEET_IMPORT_DEFAULT_DISK = config("SPREADSHEET_IMPORT_DEFAULT_DISK", default="default")
SPREADSHEET_IMPORT_ROWS_LIMIT = config("SPREADSHEET_IMPORT_ROWS_LIMIT", default=0, cast=int)  # 0 = unlimited
SPREADSHEET_IMPORT_MASS_CREATE = config("SPREADSHEET_IMPORT_MASS_CREATE", default=True, cast=bool)
SPREADSHEET_IMPORT_CSV_ENCODING = config("SPREADSHEET_IMPORT_CSV_ENCODING", default="utf-8-sig")
