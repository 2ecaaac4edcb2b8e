"""
seeder/schemas package marker.
"""

from seeder.schemas.seed_summary import EntityLoadResponse, RowFailureResponse, SeedSummaryResponse

__all__ = [
    "EntityLoadResponse",
    "RowFailureResponse",
    "SeedSummaryResponse",
]
