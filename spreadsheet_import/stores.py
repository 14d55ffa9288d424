"""
Record stores: where imported rows are persisted.

The executor only talks to the ``RecordStore`` protocol, so any persistence
layer that can join its transaction can be plugged in. ``DjangoRecordStore``
is the default and works with any Django model.
"""

from typing import Any, ContextManager, Protocol

from django.db import transaction
from django.db.models import Model

from .paths import to_lookup


class RecordStore(Protocol):
    def atomic(self) -> ContextManager: ...

    def mark_rollback(self) -> None: ...

    def create(self, attributes: dict) -> Any: ...

    def fill_and_save(self, attributes: dict) -> Any: ...

    def find_where(self, field: str, value: Any) -> Any | None: ...


class DjangoRecordStore:
    """
    Persist records of one Django model.

    Args:
        model: Django model class
        using: Optional database alias; the router decides when omitted
    """

    def __init__(self, model: type[Model], using: str | None = None):
        self.model = model
        self.using = using

    def atomic(self) -> ContextManager:
        return transaction.atomic(using=self.using)

    def mark_rollback(self) -> None:
        """Roll back the enclosing atomic block when it exits."""
        transaction.set_rollback(True, using=self.using)

    def create(self, attributes: dict) -> Model:
        return self.model._default_manager.using(self.using).create(**attributes)

    def fill_and_save(self, attributes: dict) -> Model:
        """Instantiate, assign attributes, then save the instance explicitly."""
        instance = self.model()
        for name, value in attributes.items():
            setattr(instance, name, value)
        instance.save(using=self.using)
        return instance

    def find_where(self, field: str, value: Any) -> Model | None:
        return self.model._default_manager.using(self.using).filter(**{to_lookup(field): value}).first()
