"""
Repository-layer exceptions for seed writes.
"""

from __future__ import annotations


class EntityRepositoryError(Exception):
    """Base exception for store failures."""


class StoreUnavailableError(EntityRepositoryError):
    """Raised when the store cannot be reached before a run starts."""


class UnknownEntityModelError(EntityRepositoryError):
    """Raised when no model is registered for an entity type."""


class EntityUpsertError(EntityRepositoryError):
    """Raised when the store rejects one upsert (constraint, connectivity, ...)."""

    def __init__(self, *, entity_type: str, key: str, message: str) -> None:
        super().__init__(f"Upsert into {entity_type!r} failed for key {key!r}: {message}")
        self.entity_type = entity_type
        self.key = key
        self.reason = message
