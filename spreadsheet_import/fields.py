"""
Field descriptors and the per-row field pipeline.

``ImportField`` describes how one mapped column becomes one attribute:
whether it is required, which rules validate it, and an optional mutator
applied to the raw cell before validation. ``FieldPipeline`` runs every
configured field against one row.
"""

from dataclasses import dataclass, field, replace
from functools import cached_property
from typing import Any, Callable, Sequence

from .rules import Rule, compile_rules, is_blank

# Returned by ImportField.apply() when an optional field is blank
SKIP = object()

# (raw_value, full_row) -> transformed value
BeforeCreateMutator = Callable[[Any, Sequence[Any]], Any]


@dataclass(frozen=True)
class ImportField:
    """
    Immutable, fluent descriptor for one imported field.

    Example usage:
        ImportField.make("email").label("E-mail").required().rules(
            ["email", "max:255"],
            messages={"email": "Please provide a valid e-mail address"},
        )
    """

    id: str
    label_text: str | None = None
    is_required: bool = False
    rule_expressions: tuple = ()
    messages: dict = field(default_factory=dict)
    mutator: BeforeCreateMutator | None = None

    @classmethod
    def make(cls, id: str) -> "ImportField":
        return cls(id=id)

    def label(self, label: str) -> "ImportField":
        return replace(self, label_text=label)

    def required(self, required: bool = True) -> "ImportField":
        return replace(self, is_required=required)

    def rules(self, rules: str | Sequence[str | Callable], messages: dict | None = None) -> "ImportField":
        """Set validation rules, either as a list or as a ``"required|email"`` pipe string."""
        if isinstance(rules, str):
            rules = [rule for rule in rules.split("|") if rule]
        updated = replace(self, rule_expressions=tuple(rules))
        if messages is not None:
            updated = updated.validation_messages(messages)
        return updated

    def validation_messages(self, messages: dict) -> "ImportField":
        return replace(self, messages=dict(messages))

    def mutate_before_create(self, mutator: BeforeCreateMutator | None) -> "ImportField":
        return replace(self, mutator=mutator)

    def get_label(self) -> str:
        return self.label_text or self.id

    @cached_property
    def compiled_rules(self) -> tuple[Rule, ...]:
        return compile_rules(self.rule_expressions, required=self.is_required)

    def get_validation_rules(self) -> tuple[Rule, ...]:
        return self.compiled_rules

    def get_custom_validation_messages(self) -> dict:
        return dict(self.messages)

    def do_mutate_before_create(self, value: Any, row: Sequence[Any]) -> Any:
        """Run the mutator; a blank result means no mutation was requested and keeps the raw value."""
        if self.mutator is None:
            return value
        mutated = self.mutator(value, row)
        return value if is_blank(mutated) else mutated

    def apply(self, raw_value: Any, row: Sequence[Any]) -> Any:
        """Return the value to import, or ``SKIP`` for a blank optional field."""
        if not self.is_required and is_blank(raw_value):
            return SKIP
        return self.do_mutate_before_create(raw_value, row)


@dataclass
class PreparedRow:
    """Field values of one row together with the rules that validate them."""

    attributes: dict = field(default_factory=dict)
    rules: dict = field(default_factory=dict)
    messages: dict = field(default_factory=dict)
    labels: dict = field(default_factory=dict)


def read_cell(row: Sequence[Any], column: int) -> Any:
    """Read a cell by 0-based index; cells beyond the row's end read as blank."""
    if column < len(row):
        return row[column]
    return None


class FieldPipeline:
    """
    Apply every configured field to a row.

    Args:
        fields: Flat mapping of dot-path id to column index (or literal value)
        form_schemas: Mapping of dot-path id to ImportField or any other schema object

    Fields whose schema is an ``ImportField`` read their column from the row.
    Any other schema entry contributes the mapping value itself, unvalidated.
    """

    def __init__(self, fields: dict, form_schemas: dict):
        self.fields = fields
        self.form_schemas = form_schemas

    def prepare(self, row: Sequence[Any]) -> PreparedRow:
        prepared = PreparedRow()

        for key, value in self.fields.items():
            schema = self.form_schemas[key]

            if not isinstance(schema, ImportField):
                prepared.attributes[key] = value
                continue

            field_value = schema.apply(read_cell(row, value), row)
            if field_value is SKIP:
                continue

            prepared.attributes[key] = field_value
            prepared.rules[key] = schema.get_validation_rules()
            prepared.labels[key] = schema.get_label()
            messages = schema.get_custom_validation_messages()
            if messages:
                prepared.messages[key] = messages

        return prepared
