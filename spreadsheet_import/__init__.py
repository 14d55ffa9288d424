"""
Spreadsheet (CSV/XLSX) import into Django models.
"""

from .builder import SpreadsheetImport
from .config import ImportConfig
from .exceptions import (
    ConfigurationError,
    RowLimitExceeded,
    SpreadsheetImportError,
    UnsupportedFileType,
    ValidatorEngineError,
)
from .executor import ExecutionResult, ImportExecutor
from .fields import FieldPipeline, ImportField
from .guard import DuplicationGuard
from .mapping_config import MappingConfigParser
from .notifications import CommandNotifier, LoggingNotifier, MessagesNotifier, Notifier
from .sources import SourceRow, StorageRowSource
from .stores import DjangoRecordStore, RecordStore
from .validation import RowValidator, ValidationOutcome

__all__ = [
    # Entry point
    "SpreadsheetImport",
    "ImportConfig",
    "ImportExecutor",
    "ExecutionResult",
    # Fields and validation
    "ImportField",
    "FieldPipeline",
    "RowValidator",
    "ValidationOutcome",
    "DuplicationGuard",
    # Collaborators
    "StorageRowSource",
    "SourceRow",
    "RecordStore",
    "DjangoRecordStore",
    "Notifier",
    "LoggingNotifier",
    "MessagesNotifier",
    "CommandNotifier",
    # Configuration files
    "MappingConfigParser",
    # Errors
    "SpreadsheetImportError",
    "ConfigurationError",
    "RowLimitExceeded",
    "UnsupportedFileType",
    "ValidatorEngineError",
]
