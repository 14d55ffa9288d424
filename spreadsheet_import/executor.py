"""
Import executor.

Runs every row of a spreadsheet through the field pipeline, row validation,
duplicate detection and record creation inside a single transaction. The
import either commits completely (duplicates aside, which are skipped) or
leaves the store untouched.
"""

import logging
from dataclasses import dataclass
from typing import Any

from .config import ImportConfig
from .constants import (
    ERROR_IMPORTING_FILE_TITLE,
    IMPORT_FAILED,
    IMPORT_FAILED_TITLE,
    IMPORT_SUCCEEDED,
    IMPORT_SUCCEEDED_TITLE,
    LOG_DUPLICATE_SKIPPED,
    LOG_IMPORT_COMPLETED,
    LOG_IMPORT_ROLLED_BACK,
    LOG_IMPORT_STARTED,
    LOG_MISSING_UNIQUE_VALUE,
    SEVERITY_DANGER,
    SEVERITY_SUCCESS,
)
from .fields import FieldPipeline
from .guard import DuplicationGuard
from .notifications import LoggingNotifier, Notifier, translate
from .sources import RowSource, SourceRow, StorageRowSource
from .stores import DjangoRecordStore, RecordStore
from .validation import RowValidator

logger = logging.getLogger(__name__)


@dataclass
class ExecutionResult:
    """Outcome of one import run."""

    success: bool = False
    created_count: int = 0
    skipped_count: int = 0
    total_rows: int = 0
    line_number: int | None = None
    error: str | None = None
    # True once the import transaction has completed without rollback
    committed: bool = False


class ImportExecutor:
    """
    Execute one configured import.

    Args:
        config: Finalized import configuration
        notifier: Receives the user-facing reports (logs them by default)
        record_store: Persistence collaborator (Django ORM on the configured model by default)
        row_source: Decodes the source file (Django storages by default)

    ``execute()`` never raises: every error ends in the fail callback and a
    danger report, and is visible on the returned ``ExecutionResult``.
    """

    def __init__(
        self,
        config: ImportConfig,
        notifier: Notifier | None = None,
        record_store: RecordStore | None = None,
        row_source: RowSource | None = None,
    ):
        self.config = config
        self.notifier = notifier or LoggingNotifier()
        self.record_store = record_store
        self.row_source = row_source or StorageRowSource()

    def execute(self) -> ExecutionResult:
        config = self.config
        result = ExecutionResult()
        fail_callback_ran = False

        try:
            config.validate()
            store = self.record_store or DjangoRecordStore(config.get_model())
            logger.info(LOG_IMPORT_STARTED.format(model=config.model, source=config.source))

            rows = self.row_source.load(
                config.source,
                config.disk,
                skip_header=config.skip_header,
                handle_blank_rows=config.handle_blank_rows,
                rows_limit=config.rows_limit,
            )
            result.total_rows = len(rows)

            with store.atomic():
                result.success = self._process_rows(rows, store, result)
                if not result.success:
                    store.mark_rollback()
            result.committed = result.success

            if result.success:
                logger.info(
                    LOG_IMPORT_COMPLETED.format(
                        model=config.model,
                        created=result.created_count,
                        skipped=result.skipped_count,
                    )
                )
                config.do_run_on_success()
                self.notifier.report(
                    SEVERITY_SUCCESS,
                    translate(IMPORT_SUCCEEDED_TITLE),
                    translate(IMPORT_SUCCEEDED, count=result.created_count, skipped=result.skipped_count),
                    persistent=True,
                )
            else:
                logger.warning(
                    LOG_IMPORT_ROLLED_BACK.format(model=config.model, line=result.line_number, error=result.error)
                )
                result.created_count = 0
                fail_callback_ran = True
                config.do_run_on_fail()
                self.notifier.report(
                    SEVERITY_DANGER,
                    translate(IMPORT_FAILED_TITLE),
                    translate(IMPORT_FAILED),
                    persistent=True,
                )
        except Exception as e:
            logger.exception(f"Import failed: {e}")
            result.success = False
            if not result.committed:
                result.created_count = 0
            result.error = str(e)
            if not fail_callback_ran:
                self._run_fail_callback_safely()
            self.notifier.report(SEVERITY_DANGER, translate(ERROR_IMPORTING_FILE_TITLE), str(e))

        return result

    def _process_rows(self, rows: list[SourceRow], store: RecordStore, result: ExecutionResult) -> bool:
        """Process rows in order; return False as soon as one row aborts the import."""
        config = self.config
        pipeline = FieldPipeline(config.fields, config.form_schemas)
        validator = RowValidator(self.notifier)
        guard = DuplicationGuard(store, config.unique_field) if config.unique_field else None

        for row in rows:
            prepared = pipeline.prepare(row.cells)
            outcome = validator.validate(
                prepared.attributes,
                prepared.rules,
                prepared.messages,
                line_number=row.line_number,
                labels=prepared.labels,
            )
            if outcome.failed:
                result.line_number = outcome.line_number
                result.error = outcome.error
                return False

            attributes = config.do_mutate_before_create(outcome.attributes)

            if guard is not None:
                if not guard.has_value(attributes):
                    message = LOG_MISSING_UNIQUE_VALUE.format(field=config.unique_field, line=row.line_number)
                    logger.warning(message)
                    result.line_number = row.line_number
                    result.error = message
                    return False

                if guard.is_duplicate(attributes):
                    logger.debug(
                        LOG_DUPLICATE_SKIPPED.format(
                            line=row.line_number,
                            field=config.unique_field,
                            value=guard.resolve(attributes),
                        )
                    )
                    result.skipped_count += 1
                    continue

            record = self._create_record(store, attributes)
            config.do_mutate_after_create(record, attributes)
            result.created_count += 1

        return True

    def _create_record(self, store: RecordStore, attributes: dict) -> Any:
        if self.config.record_creation is not None:
            return self.config.record_creation(attributes)
        if self.config.mass_create:
            return store.create(attributes)
        return store.fill_and_save(attributes)

    def _run_fail_callback_safely(self) -> None:
        try:
            self.config.do_run_on_fail()
        except Exception as e:
            logger.exception(f"Fail callback raised: {e}")
