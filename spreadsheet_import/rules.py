"""
Validation rule expressions.

A rule is either a string expression such as ``"max:255"`` or ``"in:a,b,c"``,
or any callable that raises ``django.core.exceptions.ValidationError``
(Django's own validators included). String expressions are compiled into
Django validators once, when the field descriptor is built.
"""

import re
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Iterable

from django.core.exceptions import ValidationError
from django.core.validators import (
    EmailValidator,
    MaxLengthValidator,
    MaxValueValidator,
    MinLengthValidator,
    MinValueValidator,
    RegexValidator,
    URLValidator,
    integer_validator,
)
from django.utils.dateparse import parse_date, parse_datetime
from django.utils.translation import gettext as _
from django.utils.translation import gettext_lazy

from .constants import (
    ERROR_INVALID_RULE_ARGUMENT,
    ERROR_UNKNOWN_RULE,
    VALIDATION_ALPHA,
    VALIDATION_ALPHA_NUM,
    VALIDATION_BOOLEAN,
    VALIDATION_DATE,
    VALIDATION_DIGITS,
    VALIDATION_IN,
    VALIDATION_INTEGER,
    VALIDATION_NOT_IN,
    VALIDATION_NUMERIC,
    VALIDATION_REGEX,
    VALIDATION_REQUIRED,
    VALIDATION_SIZE_LENGTH,
    VALIDATION_SIZE_VALUE,
    VALIDATION_STRING,
)
from .exceptions import ConfigurationError

RULE_REQUIRED = "required"

BOOLEAN_VALUES = {True, False, 0, 1, "0", "1", "true", "false"}


def is_blank(value: Any) -> bool:
    """Return True for None, whitespace-only strings and empty collections."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    return False


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


@dataclass(frozen=True)
class Rule:
    """A compiled validation rule."""

    name: str
    validator: Callable[[Any], Any]
    # Implicit rules also run against blank values
    implicit: bool = False

    def __call__(self, value: Any) -> None:
        self.validator(value)


def _required(value: Any) -> None:
    if is_blank(value):
        raise ValidationError(_(VALIDATION_REQUIRED), code="required")


def _nullable(value: Any) -> None:
    return None


def _string(value: Any) -> None:
    if not isinstance(value, str):
        raise ValidationError(_(VALIDATION_STRING), code="string")


def _integer(value: Any) -> None:
    if isinstance(value, bool):
        raise ValidationError(_(VALIDATION_INTEGER), code="integer")
    if isinstance(value, int):
        return
    if isinstance(value, float) and value.is_integer():
        return
    try:
        integer_validator(str(value).strip())
    except ValidationError:
        raise ValidationError(_(VALIDATION_INTEGER), code="integer")


def _numeric(value: Any) -> None:
    if isinstance(value, bool):
        raise ValidationError(_(VALIDATION_NUMERIC), code="numeric")
    if _is_number(value):
        return
    try:
        Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError(_(VALIDATION_NUMERIC), code="numeric")


def _boolean(value: Any) -> None:
    candidate = value.strip().lower() if isinstance(value, str) else value
    if candidate not in BOOLEAN_VALUES:
        raise ValidationError(_(VALIDATION_BOOLEAN), code="boolean")


def _date(value: Any) -> None:
    if isinstance(value, date):
        return
    text = str(value).strip()
    try:
        parsed = parse_date(text) or parse_datetime(text)
    except ValueError:
        parsed = None
    if parsed is None:
        raise ValidationError(_(VALIDATION_DATE), code="date")


def _number_argument(rule: str, argument: str) -> Decimal:
    try:
        return Decimal(argument)
    except InvalidOperation:
        raise ConfigurationError(_(ERROR_INVALID_RULE_ARGUMENT).format(rule=rule, argument=argument))


def _int_argument(rule: str, argument: str) -> int:
    try:
        return int(argument)
    except ValueError:
        raise ConfigurationError(_(ERROR_INVALID_RULE_ARGUMENT).format(rule=rule, argument=argument))


def _min(rule: str, args: list[str]) -> Callable:
    limit = _number_argument(rule, args[0])
    by_value = MinValueValidator(limit)
    by_length = MinLengthValidator(int(limit))

    def validate(value):
        if _is_number(value):
            by_value(value)
        else:
            by_length(str(value))

    return validate


def _max(rule: str, args: list[str]) -> Callable:
    limit = _number_argument(rule, args[0])
    by_value = MaxValueValidator(limit)
    by_length = MaxLengthValidator(int(limit))

    def validate(value):
        if _is_number(value):
            by_value(value)
        else:
            by_length(str(value))

    return validate


def _between(rule: str, args: list[str]) -> Callable:
    if len(args) != 2:
        raise ConfigurationError(_(ERROR_INVALID_RULE_ARGUMENT).format(rule=rule, argument=",".join(args)))
    lower = _min(rule, args[:1])
    upper = _max(rule, args[1:])

    def validate(value):
        lower(value)
        upper(value)

    return validate


def _size(rule: str, args: list[str]) -> Callable:
    size = _number_argument(rule, args[0])

    def validate(value):
        if _is_number(value):
            if Decimal(str(value)) != size:
                raise ValidationError(_(VALIDATION_SIZE_VALUE).format(size=args[0]), code="size")
        elif len(str(value)) != int(size):
            raise ValidationError(
                _(VALIDATION_SIZE_LENGTH).format(size=args[0], length=len(str(value))),
                code="size",
            )

    return validate


def _digits(rule: str, args: list[str]) -> Callable:
    count = _int_argument(rule, args[0])

    def validate(value):
        text = str(value).strip()
        if isinstance(value, bool) or not text.isdigit() or len(text) != count:
            raise ValidationError(_(VALIDATION_DIGITS).format(digits=count), code="digits")

    return validate


def _in(rule: str, args: list[str]) -> Callable:
    choices = set(args)

    def validate(value):
        if str(value).strip() not in choices:
            raise ValidationError(_(VALIDATION_IN).format(value=value), code="in")

    return validate


def _not_in(rule: str, args: list[str]) -> Callable:
    choices = set(args)

    def validate(value):
        if str(value).strip() in choices:
            raise ValidationError(_(VALIDATION_NOT_IN).format(value=value), code="not_in")

    return validate


def _regex(rule: str, args: list[str]) -> Callable:
    pattern = ",".join(args)
    # Accept delimited patterns such as /^[A-Z]+$/
    if len(pattern) > 1 and pattern.startswith("/") and pattern.endswith("/"):
        pattern = pattern[1:-1]
    try:
        validator = RegexValidator(re.compile(pattern), message=gettext_lazy(VALIDATION_REGEX), code="regex")
    except re.error:
        raise ConfigurationError(_(ERROR_INVALID_RULE_ARGUMENT).format(rule=rule, argument=pattern))
    return lambda value: validator(str(value))


def _wrap_str(validator: Callable) -> Callable:
    return lambda value: validator(str(value).strip())


SIMPLE_RULES: dict[str, Callable[[Any], Any]] = {
    "required": _required,
    "nullable": _nullable,
    "string": _string,
    "integer": _integer,
    "numeric": _numeric,
    "boolean": _boolean,
    "date": _date,
    "email": _wrap_str(EmailValidator()),
    "url": _wrap_str(URLValidator()),
    "alpha": _wrap_str(RegexValidator(r"^[^\W\d_]+\Z", message=gettext_lazy(VALIDATION_ALPHA), code="alpha")),
    "alpha_num": _wrap_str(RegexValidator(r"^[^\W_]+\Z", message=gettext_lazy(VALIDATION_ALPHA_NUM), code="alpha_num")),
}

PARAMETRIZED_RULES: dict[str, Callable[[str, list[str]], Callable[[Any], Any]]] = {
    "min": _min,
    "max": _max,
    "between": _between,
    "size": _size,
    "digits": _digits,
    "in": _in,
    "not_in": _not_in,
    "regex": _regex,
}


def parse_rule(expression: str | Callable) -> Rule:
    """
    Compile one rule expression.

    Args:
        expression: ``"name"``, ``"name:arg1,arg2"`` or a validator callable

    Returns:
        Rule: Compiled rule

    Raises:
        ConfigurationError: If the rule is unknown or its arguments are invalid
    """
    if callable(expression):
        name = getattr(expression, "code", None) or getattr(expression, "__name__", type(expression).__name__)
        return Rule(name=name, validator=expression)

    name, _sep, argument = str(expression).strip().partition(":")
    name = name.strip()

    if name in SIMPLE_RULES and not argument:
        return Rule(name=name, validator=SIMPLE_RULES[name], implicit=name == RULE_REQUIRED)

    if name in PARAMETRIZED_RULES and argument:
        args = [argument] if name == "regex" else [arg.strip() for arg in argument.split(",")]
        return Rule(name=name, validator=PARAMETRIZED_RULES[name](name, args))

    raise ConfigurationError(_(ERROR_UNKNOWN_RULE).format(rule=expression))


def compile_rules(expressions: Iterable[str | Callable], required: bool = False) -> tuple[Rule, ...]:
    """Compile a rule list, prepending an implicit ``required`` rule for required fields."""
    rules = [parse_rule(expression) for expression in expressions]
    if required and not any(rule.name == RULE_REQUIRED for rule in rules):
        rules.insert(0, parse_rule(RULE_REQUIRED))
    return tuple(rules)
