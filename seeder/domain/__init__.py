"""
seeder/domain package marker.
"""

from seeder.domain.entity_spec import EntitySpec, FieldKind, FieldSpec, Record, Row
from seeder.domain.load_result import LoadResult, MigrationSummary, RowFailure, RunStatus

__all__ = [
    "EntitySpec",
    "FieldKind",
    "FieldSpec",
    "LoadResult",
    "MigrationSummary",
    "Record",
    "Row",
    "RowFailure",
    "RunStatus",
]
