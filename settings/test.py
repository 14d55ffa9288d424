"""
This configuration file overrides some necessary configs
to allow running unittests.
"""

import tempfile
import warnings

from .base import *  # noqa
from .base import INSTALLED_APPS

warnings.simplefilter("ignore", category=RuntimeWarning)


ALLOWED_HOSTS = ["*"]

INTERNAL_IPS = ["127.0.0.1"]

# Models used as import targets in tests
INSTALLED_APPS = INSTALLED_APPS + ["tests.testapp"]

# Use in-memory SQLite database for tests
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

LANGUAGE_CODE = "en"

DEBUG = False

MEDIA_ROOT = tempfile.mkdtemp(prefix="spreadsheet-import-tests-")

STORAGES = {
    "default": {
        "BACKEND": "django.core.files.storage.FileSystemStorage",
    },
    "staticfiles": {
        "BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage",
    },
    "memory": {
        "BACKEND": "django.core.files.storage.InMemoryStorage",
    },
}

SPREADSHEET_IMPORT_DEFAULT_DISK = "default"
SPREADSHEET_IMPORT_ROWS_LIMIT = 0
SPREADSHEET_IMPORT_MASS_CREATE = True

# Disable logging in tests to improve performance
LOGGING = {
    "version": 1,
    "disable_existing_loggers": True,
    "handlers": {
        "null": {
            "class": "logging.NullHandler",
        },
    },
    "root": {
        "handlers": ["null"],
    },
}
