from pathlib import Path

from decouple import Csv, config

BASE_DIR = Path(__file__).resolve().parent.parent.parent

ENVIRONMENT = config("ENVIRONMENT", default="local")

SECRET_KEY = config("SECRET_KEY", default="spreadsheet-import-dev-key-change-in-prod")

DEBUG = config("DEBUG", default=False, cast=bool)

ALLOWED_HOSTS = config("ALLOWED_HOSTS", default="localhost,127.0.0.1", cast=Csv())

LOG_LEVEL = config("LOG_LEVEL", default="INFO")

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"
