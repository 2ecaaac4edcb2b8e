"""
seeder/services package marker.
"""

from seeder.services.entity_reconciler import EntityReconciler, EntityStore
from seeder.services.migration_orchestrator import (
    EntityOrderingError,
    MigrationAbortedError,
    MigrationOrchestrator,
    order_entity_specs,
)

__all__ = [
    "EntityOrderingError",
    "EntityReconciler",
    "EntityStore",
    "MigrationAbortedError",
    "MigrationOrchestrator",
    "order_entity_specs",
]
