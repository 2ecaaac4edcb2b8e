"""
seeder/schemas/seed_summary.py

Serializable summary schemas for seed runs.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from seeder.domain.load_result import LoadResult, MigrationSummary


class RowFailureResponse(BaseModel):
    """
    One row the store rejected.
    """

    key: str
    message: str


class EntityLoadResponse(BaseModel):
    """
    Counts for one entity type.
    """

    entity_type: str
    label: str = ""
    rows_attempted: int = Field(..., ge=0)
    rows_upserted: int = Field(..., ge=0)
    rows_skipped: int = Field(..., ge=0)
    rows_failed: int = Field(..., ge=0)
    failures: list[RowFailureResponse] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: LoadResult) -> "EntityLoadResponse":
        return cls(
            entity_type=result.entity_type,
            label=result.label,
            rows_attempted=result.rows_attempted,
            rows_upserted=result.rows_upserted,
            rows_skipped=result.rows_skipped,
            rows_failed=result.rows_failed,
            failures=[
                RowFailureResponse(key=failure.key, message=failure.message)
                for failure in result.failures
            ],
        )


class SeedSummaryResponse(BaseModel):
    """
    End-of-run summary printed by the seed CLI.
    """

    status: str
    started_at: datetime
    finished_at: datetime
    error: str | None = None
    entities: list[EntityLoadResponse] = Field(default_factory=list)

    @classmethod
    def from_summary(cls, summary: MigrationSummary) -> "SeedSummaryResponse":
        return cls(
            status=summary.status,
            started_at=summary.started_at,
            finished_at=summary.finished_at,
            error=summary.error,
            entities=[EntityLoadResponse.from_result(result) for result in summary.results],
        )
