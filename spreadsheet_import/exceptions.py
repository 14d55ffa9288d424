"""Exceptions raised by the spreadsheet import engine."""

from django.utils.translation import gettext as _

from .constants import ERROR_ROWS_LIMIT_EXCEEDED, ERROR_UNSUPPORTED_FILE_TYPE


class SpreadsheetImportError(Exception):
    """Base class for all spreadsheet import errors."""

    pass


class ConfigurationError(SpreadsheetImportError):
    """Raised when the import is configured inconsistently."""

    pass


class RowLimitExceeded(ConfigurationError):
    """Raised when the source holds more rows than the configured limit."""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(_(ERROR_ROWS_LIMIT_EXCEEDED).format(limit=limit))


class UnsupportedFileType(SpreadsheetImportError):
    """Raised when no reader exists for the source file extension."""

    def __init__(self, extension: str):
        self.extension = extension
        super().__init__(_(ERROR_UNSUPPORTED_FILE_TYPE).format(extension=extension))


class ValidatorEngineError(SpreadsheetImportError):
    """Raised when a validation rule crashes instead of reporting a ValidationError."""

    pass
