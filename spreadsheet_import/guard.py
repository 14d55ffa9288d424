"""Duplicate detection on a designated unique field."""

from typing import Any

from .paths import get_path
from .stores import RecordStore


class DuplicationGuard:
    """
    Check whether a row's unique value already exists in the store.

    Lookups run inside the import transaction, so rows created earlier in the
    same run are seen as duplicates too.
    """

    def __init__(self, store: RecordStore, unique_field: str):
        self.store = store
        self.unique_field = unique_field

    def resolve(self, attributes: dict) -> Any:
        return get_path(attributes, self.unique_field)

    def has_value(self, attributes: dict) -> bool:
        return self.resolve(attributes) is not None

    def is_duplicate(self, attributes: dict) -> bool:
        return self.store.find_where(self.unique_field, self.resolve(attributes)) is not None
