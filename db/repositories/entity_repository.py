"""
db/repositories/entity_repository.py

Key-based upsert writes for seeded entities.

Each call is its own unit of work: the statement is committed on success and
rolled back on failure, so one rejected row never poisons the session for the
rows after it. The caller never commits.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from db.base import Base
from db.models import Cart, CartItem, Favorite, Order, Product, Review
from db.repositories.errors import EntityUpsertError, UnknownEntityModelError

ENTITY_MODELS: dict[str, type[Base]] = {
    "products": Product,
    "carts": Cart,
    "cart_items": CartItem,
    "favorites": Favorite,
    "orders": Order,
    "reviews": Review,
}

_INSERT_BY_DIALECT = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def key_attribute_name(model: type[Base]) -> str:
    mapper = sa_inspect(model)
    return mapper.get_property_by_column(mapper.primary_key[0]).key


def build_upsert_statement(
    model: type[Base],
    payload: Mapping[str, Any],
    *,
    dialect_name: str = "postgresql",
) -> Any:
    """
    Build ``INSERT ... ON CONFLICT (<primary key>) DO UPDATE`` for one row.

    ``payload`` is keyed by mapped attribute name (``clerk_id``); the statement
    is written against the table's own column names (``"clerkId"``). Every
    non-key column in ``payload`` is overwritten from the incoming row; a
    payload holding only the key becomes ``DO NOTHING``.

    An attribute the model does not map raises ``KeyError``.
    """

    mapper = sa_inspect(model)
    key_column = mapper.primary_key[0].key
    values = {mapper.columns[attribute].key: value for attribute, value in payload.items()}

    insert = _INSERT_BY_DIALECT.get(dialect_name, postgresql.insert)
    stmt = insert(model.__table__).values(values)
    update_set = {column: stmt.excluded[column] for column in values if column != key_column}
    if not update_set:
        return stmt.on_conflict_do_nothing(index_elements=[key_column])
    return stmt.on_conflict_do_update(index_elements=[key_column], set_=update_set)


class EntityRepository:
    """
    Store capability used by the reconciler: ``upsert(entity_type, key, fields)``.

    Running the same upsert twice leaves the table unchanged after the first
    call.
    """

    def __init__(
        self,
        session: Session,
        *,
        models: Mapping[str, type[Base]] | None = None,
    ) -> None:
        self._session = session
        self._models = dict(models or ENTITY_MODELS)

    @property
    def session(self) -> Session:
        return self._session

    def upsert(self, entity_type: str, key: str, fields: Mapping[str, Any]) -> None:
        """
        Insert the row identified by ``key`` or update it in place.

        Raises
        ------
        UnknownEntityModelError
            ``entity_type`` has no registered model.
        EntityUpsertError
            The database or its driver rejected the row; the session is
            rolled back.
        """
        model = self._resolve_model(entity_type)

        payload = dict(fields)
        payload[key_attribute_name(model)] = key
        stmt = build_upsert_statement(
            model,
            payload,
            dialect_name=self._session.get_bind().dialect.name,
        )

        # sqlite3 raises OverflowError for integers beyond 64 bits while
        # binding, outside the DBAPI error hierarchy SQLAlchemy wraps.
        try:
            self._session.execute(stmt)
            self._session.commit()
        except (SQLAlchemyError, OverflowError) as exc:
            self._session.rollback()
            detail = str(getattr(exc, "orig", None) or exc).strip()
            raise EntityUpsertError(
                entity_type=entity_type,
                key=key,
                message=detail.splitlines()[0] if detail else type(exc).__name__,
            ) from exc

    def _resolve_model(self, entity_type: str) -> type[Base]:
        try:
            return self._models[entity_type]
        except KeyError:
            raise UnknownEntityModelError(
                f"No model registered for entity type {entity_type!r}."
            ) from None
