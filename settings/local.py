"""
This configuration file overrides some necessary configs
to easily develop the app.
"""

from .base import *  # noqa

DEBUG = True

ALLOWED_HOSTS = ["*"]

INTERNAL_IPS = ["127.0.0.1"]

# Verbose import logs (duplicate skips, loaded row counts) while developing
LOGGING["loggers"]["spreadsheet_import"]["level"] = "DEBUG"  # noqa: F405
