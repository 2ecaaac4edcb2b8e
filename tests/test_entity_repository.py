"""
tests/test_entity_repository.py

Tests for key-based upserts against an in-memory SQLite store.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest
from sqlalchemy import create_engine, func, select
from sqlalchemy.dialects import postgresql
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from db.models import CartItem, Product
from db.repositories.entity_repository import EntityRepository, build_upsert_statement
from db.repositories.errors import EntityUpsertError, StoreUnavailableError, UnknownEntityModelError
from db.session import store_scope


def _product_fields(**overrides: object) -> dict[str, object]:
    fields: dict[str, object] = {
        "name": "Lamp",
        "company": "Acme",
        "description": "Desk lamp",
        "featured": True,
        "image": "/img/lamp.png",
        "price": 19,
        "clerk_id": "user_1",
        "created_at": datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc),
        "updated_at": datetime(2024, 1, 2, 10, 0, tzinfo=timezone.utc),
    }
    fields.update(overrides)
    return fields


def _count(engine: Engine, model: type) -> int:
    with Session(engine) as session:
        return session.scalar(select(func.count()).select_from(model))


class TestBuildUpsertStatement:
    def test_postgres_statement_updates_on_key_conflict(self) -> None:
        stmt = build_upsert_statement(Product, {"id": "P1", **_product_fields()})

        sql = str(stmt.compile(dialect=postgresql.dialect()))

        assert 'INSERT INTO "Product"' in sql
        assert "ON CONFLICT (id) DO UPDATE SET" in sql
        assert "price = excluded.price" in sql
        assert '"clerkId" = excluded."clerkId"' in sql
        assert "id = excluded.id" not in sql

    def test_key_only_payload_does_nothing_on_conflict(self) -> None:
        sql = str(build_upsert_statement(Product, {"id": "P1"}).compile(dialect=postgresql.dialect()))
        assert "ON CONFLICT (id) DO NOTHING" in sql

    def test_unmapped_attribute_is_rejected(self) -> None:
        with pytest.raises(KeyError):
            build_upsert_statement(Product, {"id": "P1", "clerkId": "user_1"})


class TestEntityRepository:
    def test_insert_then_update_in_place(self, sqlite_engine: Engine) -> None:
        with Session(sqlite_engine) as session:
            repository = EntityRepository(session)
            repository.upsert("products", "P1", _product_fields())
            repository.upsert("products", "P1", _product_fields(price=25, name="Lamp XL"))

        assert _count(sqlite_engine, Product) == 1
        with Session(sqlite_engine) as session:
            product = session.get(Product, "P1")
            assert (product.name, product.price) == ("Lamp XL", 25)

    def test_repeating_an_upsert_leaves_the_row_unchanged(self, sqlite_engine: Engine) -> None:
        with Session(sqlite_engine) as session:
            repository = EntityRepository(session)
            repository.upsert("products", "P1", _product_fields())
            repository.upsert("products", "P1", _product_fields())

        with Session(sqlite_engine) as session:
            product = session.get(Product, "P1")
            assert product.price == 19
            assert product.created_at.replace(tzinfo=None) == datetime(2024, 1, 1, 10, 0)

    def test_key_argument_wins_over_the_record(self, sqlite_engine: Engine) -> None:
        with Session(sqlite_engine) as session:
            EntityRepository(session).upsert("products", "P7", {"id": "ignored", **_product_fields()})

        with Session(sqlite_engine) as session:
            assert session.get(Product, "P7") is not None

    def test_omitted_timestamps_fall_back_to_server_default(self, sqlite_engine: Engine) -> None:
        fields = _product_fields()
        del fields["created_at"]

        with Session(sqlite_engine) as session:
            EntityRepository(session).upsert("products", "P1", fields)

        with Session(sqlite_engine) as session:
            assert session.get(Product, "P1").created_at is not None

    def test_foreign_key_violation_raises_and_session_stays_usable(self, sqlite_engine: Engine) -> None:
        item = {"product_id": "P404", "cart_id": "C404", "amount": 1}

        with Session(sqlite_engine) as session:
            repository = EntityRepository(session)
            with pytest.raises(EntityUpsertError) as excinfo:
                repository.upsert("cart_items", "CI1", item)
            repository.upsert("products", "P1", _product_fields())

        error = excinfo.value
        assert (error.entity_type, error.key) == ("cart_items", "CI1")
        assert "FOREIGN KEY" in error.reason
        assert _count(sqlite_engine, CartItem) == 0
        assert _count(sqlite_engine, Product) == 1

    def test_oversized_integer_raises_and_session_stays_usable(self, sqlite_engine: Engine) -> None:
        with Session(sqlite_engine) as session:
            repository = EntityRepository(session)
            with pytest.raises(EntityUpsertError) as excinfo:
                repository.upsert("products", "P1", _product_fields(price=10**25))
            repository.upsert("products", "P2", _product_fields())

        assert (excinfo.value.entity_type, excinfo.value.key) == ("products", "P1")
        with Session(sqlite_engine) as session:
            assert session.get(Product, "P1") is None
            assert session.get(Product, "P2") is not None

    def test_unknown_entity_type(self, sqlite_engine: Engine) -> None:
        with Session(sqlite_engine) as session:
            with pytest.raises(UnknownEntityModelError):
                EntityRepository(session).upsert("wishlists", "W1", {})


class TestStoreScope:
    def test_yields_a_repository_and_keeps_a_borrowed_engine(self, sqlite_engine: Engine) -> None:
        with store_scope(sqlite_engine) as store:
            assert isinstance(store, EntityRepository)
            store.upsert("products", "P1", _product_fields())

        assert _count(sqlite_engine, Product) == 1

    def test_session_is_closed_when_the_run_fails(self, sqlite_engine: Engine) -> None:
        with pytest.raises(RuntimeError):
            with store_scope(sqlite_engine) as store:
                session = store.session
                raise RuntimeError("boom")

        assert not session.in_transaction()

    def test_unreachable_database_is_reported(self, tmp_path: Path) -> None:
        engine = create_engine(f"sqlite:///{tmp_path / 'missing' / 'seed.db'}")

        with pytest.raises(StoreUnavailableError):
            with store_scope(engine):
                pass
