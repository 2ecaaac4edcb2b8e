"""
Repository layer exports.
"""

from db.repositories.entity_repository import (
    ENTITY_MODELS,
    EntityRepository,
    build_upsert_statement,
)
from db.repositories.errors import (
    EntityRepositoryError,
    EntityUpsertError,
    StoreUnavailableError,
    UnknownEntityModelError,
)

__all__ = [
    "ENTITY_MODELS",
    "EntityRepository",
    "EntityRepositoryError",
    "build_upsert_statement",
    "EntityUpsertError",
    "StoreUnavailableError",
    "UnknownEntityModelError",
]
