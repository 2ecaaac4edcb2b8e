"""
seeder/domain/load_result.py

Per-entity and per-run outcomes of a seed run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


class RunStatus:
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class RowFailure:
    """
    One row the store rejected.
    """

    key: str
    message: str


@dataclass
class LoadResult:
    """
    Counts for one entity type.

    ``rows_attempted`` counts every parsed row, including skipped and failed
    ones; it is the number the legacy "Seeded N <label>" line reports.
    """

    entity_type: str
    label: str = ""
    rows_attempted: int = 0
    rows_upserted: int = 0
    rows_skipped: int = 0
    rows_failed: int = 0
    failures: list[RowFailure] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return self.rows_failed > 0


@dataclass(frozen=True)
class MigrationSummary:
    """
    End-of-run summary retained by the orchestrator.
    """

    status: str
    results: tuple[LoadResult, ...]
    started_at: datetime
    finished_at: datetime
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status == RunStatus.SUCCEEDED

    @property
    def rows_failed(self) -> int:
        return sum(result.rows_failed for result in self.results)

    def result_for(self, entity_type: str) -> LoadResult | None:
        return next((result for result in self.results if result.entity_type == entity_type), None)
