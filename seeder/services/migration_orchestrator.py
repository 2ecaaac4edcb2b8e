"""
seeder/services/migration_orchestrator.py

Runs entity reconciliation for a set of EntitySpecs in foreign-key order.

Run contract:
    - entity types are processed one at a time, referenced types first,
    - an empty, missing, or partially failing entity type never stops the run,
    - the store handle is acquired once and released on every exit path,
    - a structural failure is reported, the store is released, and
      ``MigrationAbortedError`` carrying the partial summary is raised.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from contextlib import AbstractContextManager
from datetime import datetime, timezone
from pathlib import Path

from seeder.connectors.csv_row_source import CSVRowSource
from seeder.domain.entity_spec import EntitySpec
from seeder.domain.load_result import LoadResult, MigrationSummary, RunStatus
from seeder.reporting import Reporter, default_reporter
from seeder.services.entity_reconciler import EntityReconciler, EntityStore

StoreScope = Callable[[], AbstractContextManager[EntityStore]]


class EntityOrderingError(ValueError):
    """
    Raised when entity specs cannot be ordered (duplicate type or FK cycle).
    """


class MigrationAbortedError(RuntimeError):
    """
    Raised when a structural error ends a run early.

    ``summary`` holds the LoadResults of the entity types that completed.
    """

    def __init__(self, message: str, *, summary: MigrationSummary) -> None:
        super().__init__(message)
        self.summary = summary


def order_entity_specs(specs: Sequence[EntitySpec]) -> list[EntitySpec]:
    """
    Order specs so every referenced entity type comes before its dependents.

    Stable: among specs whose dependencies are satisfied, declaration order
    wins. References to entity types outside ``specs`` are treated as already
    loaded; a self-reference never blocks.
    """

    seen: set[str] = set()
    for spec in specs:
        if spec.entity_type in seen:
            raise EntityOrderingError(f"Entity type {spec.entity_type!r} is declared twice.")
        seen.add(spec.entity_type)

    remaining = list(specs)
    ordered: list[EntitySpec] = []
    done: set[str] = set()

    while remaining:
        for spec in remaining:
            pending = (spec.dependencies & seen) - done - {spec.entity_type}
            if not pending:
                ordered.append(spec)
                done.add(spec.entity_type)
                remaining.remove(spec)
                break
        else:
            blocked = ", ".join(spec.entity_type for spec in remaining)
            raise EntityOrderingError(f"Foreign-key cycle between entity types: {blocked}.")

    return ordered


def _utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


class MigrationOrchestrator:
    """
    Coordinates Row Source, Entity Reconciler, and the scoped store handle.
    """

    def __init__(
        self,
        *,
        store_scope: StoreScope,
        row_source: CSVRowSource | None = None,
        reporter: Reporter | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._store_scope = store_scope
        self._reporter = reporter or default_reporter
        self._row_source = row_source or CSVRowSource(reporter=self._reporter)
        self._clock = clock

    def run(self, specs: Sequence[EntitySpec], *, csv_dir: str | Path) -> MigrationSummary:
        """
        Seed every entity type in ``specs`` from ``csv_dir``.

        Returns a succeeded summary once all entity types have been processed,
        regardless of per-row skips or failures.
        """
        started_at = self._clock()
        results: list[LoadResult] = []
        source_dir = Path(csv_dir)

        self._reporter.info(
            "seed_started",
            csv_dir=str(source_dir),
            entities=[spec.entity_type for spec in specs],
        )

        try:
            ordered = order_entity_specs(specs)
            with self._store_scope() as store:
                reconciler = EntityReconciler(store, reporter=self._reporter, clock=self._clock)
                for spec in ordered:
                    results.append(self._seed_entity(spec, reconciler, source_dir))
        except Exception as exc:  # noqa: BLE001
            summary = MigrationSummary(
                status=RunStatus.FAILED,
                results=tuple(results),
                started_at=started_at,
                finished_at=self._clock(),
                error=f"{type(exc).__name__}: {exc}",
            )
            self._reporter.error(
                "seed_failed",
                error=summary.error,
                completed=[result.entity_type for result in results],
            )
            raise MigrationAbortedError(str(exc), summary=summary) from exc

        summary = MigrationSummary(
            status=RunStatus.SUCCEEDED,
            results=tuple(results),
            started_at=started_at,
            finished_at=self._clock(),
        )
        self._reporter.info(
            "seed_completed",
            entities=len(results),
            rows_failed=summary.rows_failed,
        )
        return summary

    def _seed_entity(
        self,
        spec: EntitySpec,
        reconciler: EntityReconciler,
        source_dir: Path,
    ) -> LoadResult:
        self._reporter.info("entity_started", entity_type=spec.entity_type, source_file=spec.source_file)

        rows = self._row_source.read(source_dir / spec.source_file)
        if not rows:
            self._reporter.warning("entity_no_rows", entity_type=spec.entity_type)
            return LoadResult(entity_type=spec.entity_type, label=spec.label)

        result = reconciler.reconcile(spec, rows)
        self._reporter.info(
            "entity_seeded",
            entity_type=spec.entity_type,
            rows_attempted=result.rows_attempted,
            rows_upserted=result.rows_upserted,
            rows_skipped=result.rows_skipped,
            rows_failed=result.rows_failed,
        )
        return result
