"""Exceptions raised by the task store."""

from __future__ import annotations


class StoreError(Exception):
    """A persistence-layer failure (connectivity, constraint violation, ...)."""


class NotFoundError(LookupError):
    """The referenced record does not exist."""

    def __init__(self, entity: str, entity_id: int) -> None:
        super().__init__(f"{entity} with id {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id
