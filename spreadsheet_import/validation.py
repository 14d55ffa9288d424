"""Row-level validation of prepared attributes."""

import logging
from dataclasses import dataclass, field
from typing import Any

from django.core.exceptions import ValidationError

from .constants import (
    ERROR_VALIDATOR_ENGINE,
    IMPORT_FAILED_TITLE,
    SEVERITY_DANGER,
    VALIDATION_FIELD_ERROR,
    VALIDATION_LINE_MESSAGE,
)
from .exceptions import ValidatorEngineError
from .notifications import Notifier, translate
from .paths import get_path, undot
from .rules import Rule, is_blank

logger = logging.getLogger(__name__)


@dataclass
class ValidationOutcome:
    """Either the validated attribute tree or the first failure of the row."""

    attributes: dict = field(default_factory=dict)
    failed: bool = False
    line_number: int | None = None
    error: str | None = None

    @classmethod
    def passed(cls, attributes: dict) -> "ValidationOutcome":
        return cls(attributes=attributes)

    @classmethod
    def failure(cls, line_number: int, error: str) -> "ValidationOutcome":
        return cls(failed=True, line_number=line_number, error=error)


class RowValidator:
    """
    Validate one row against its field rules.

    The flat dot-path attributes are expanded into a nested tree first, so
    every rule sees the value at its own path. All fields are checked and the
    first error encountered (in field declaration order) is reported.
    """

    def __init__(self, notifier: Notifier):
        self.notifier = notifier

    def validate(
        self,
        attributes: dict,
        rules: dict[str, tuple[Rule, ...]],
        messages: dict[str, dict],
        line_number: int,
        labels: dict[str, str] | None = None,
    ) -> ValidationOutcome:
        """
        Validate attributes and report the first error, if any.

        Args:
            attributes: Flat mapping of dot-path id to value
            rules: Compiled rules per dot-path id
            messages: Custom messages per dot-path id, keyed by rule name
            line_number: Spreadsheet line reported to the user
            labels: Human readable attribute names per dot-path id

        Returns:
            ValidationOutcome: The nested attribute tree, or the failure

        Raises:
            ValidatorEngineError: If a rule crashes with anything but a ValidationError
        """
        tree = undot(attributes)
        labels = labels or {}
        errors = []

        for path, field_rules in rules.items():
            value = get_path(tree, path)
            error = self._first_error(path, value, field_rules, messages.get(path, {}), labels.get(path, path))
            if error:
                errors.append(error)

        if errors:
            first_error = errors[0]
            logger.warning(f"Validation failed at line {line_number}: {first_error}")
            self.notifier.report(
                SEVERITY_DANGER,
                translate(IMPORT_FAILED_TITLE),
                translate(VALIDATION_LINE_MESSAGE, line=line_number, error=first_error),
                persistent=True,
            )
            return ValidationOutcome.failure(line_number, first_error)

        return ValidationOutcome.passed(tree)

    def _first_error(self, path: str, value: Any, rules: tuple[Rule, ...], messages: dict, label: str) -> str | None:
        blank = is_blank(value)

        for rule in rules:
            if blank and not rule.implicit:
                continue
            try:
                rule(value)
            except ValidationError as e:
                if rule.name in messages:
                    return messages[rule.name]
                return translate(VALIDATION_FIELD_ERROR, attribute=label, message=" ".join(e.messages))
            except Exception as e:
                raise ValidatorEngineError(translate(ERROR_VALIDATOR_ENGINE, field=path, error=e)) from e

        return None
