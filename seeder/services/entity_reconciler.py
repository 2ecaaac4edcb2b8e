"""
seeder/services/entity_reconciler.py

Generic per-entity reconciliation: Rows in, key-based upserts out.

One algorithm serves every entity type; the EntitySpec supplies the field
schema, the natural key, and the required identifiers. Failures are isolated
per row:

    - a blank required identifier skips the row silently (no upsert),
    - an unparseable field degrades to its fallback inside Field Coercion,
    - a rejected upsert is reported with the row key and the next row runs.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from datetime import datetime, timezone
from typing import Any, Protocol

from db.repositories.errors import EntityUpsertError
from seeder.domain.entity_spec import EntitySpec, Record, Row
from seeder.domain.load_result import LoadResult, RowFailure
from seeder.reporting import Reporter, default_reporter
from seeder.validators.field_coercion import coerce_field


class EntityStore(Protocol):
    def upsert(self, entity_type: str, key: str, fields: Mapping[str, Any]) -> None:
        ...


def _utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


class EntityReconciler:
    """
    Converts a Row sequence into store upserts for one entity type.
    """

    def __init__(
        self,
        store: EntityStore,
        *,
        reporter: Reporter | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._store = store
        self._reporter = reporter or default_reporter
        self._clock = clock

    def reconcile(self, spec: EntitySpec, rows: Iterable[Row]) -> LoadResult:
        """
        Upsert every row of ``rows`` in order and return the entity's counts.

        Only ``EntityUpsertError`` is recovered here; anything else is
        structural and propagates to the orchestrator.
        """
        result = LoadResult(entity_type=spec.entity_type, label=spec.label)

        for row_index, row in enumerate(rows, start=1):
            result.rows_attempted += 1

            missing = self._missing_identifiers(spec, row)
            if missing:
                result.rows_skipped += 1
                self._reporter.debug(
                    "row_skipped",
                    entity_type=spec.entity_type,
                    row_index=row_index,
                    missing=missing,
                )
                continue

            record = self.build_record(spec, row)
            key = str(record.get(spec.key_spec.attribute, ""))

            try:
                self._store.upsert(spec.entity_type, key, record)
            except EntityUpsertError as exc:
                result.rows_failed += 1
                result.failures.append(RowFailure(key=key, message=exc.reason))
                self._reporter.error(
                    "row_upsert_failed",
                    entity_type=spec.entity_type,
                    key=key,
                    row_index=row_index,
                    error=exc.reason,
                )
                continue

            result.rows_upserted += 1

        return result

    def build_record(self, spec: EntitySpec, row: Row) -> Record:
        """
        Coerce ``row`` into a Record keyed by store column name.
        """
        now = self._clock()
        record: Record = {}
        for field_spec in spec.fields:
            present, value = coerce_field(
                field_spec,
                row.get(field_spec.column),
                now=now,
                reporter=self._reporter,
            )
            if present:
                record[field_spec.attribute] = value
        return record

    @staticmethod
    def _missing_identifiers(spec: EntitySpec, row: Row) -> list[str]:
        return [
            field_spec.column
            for field_spec in spec.required_identifiers
            if not (row.get(field_spec.column) or "").strip()
        ]
