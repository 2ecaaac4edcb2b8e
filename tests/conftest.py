"""Pytest configuration and shared fakes for seed tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

import db.models  # noqa: F401  (registers tables on Base.metadata)
from db.base import Base
from seeder.config import get_seed_settings
from tests.helpers import (
    CART_HEADER,
    CART_ITEM_HEADER,
    FAVORITE_HEADER,
    ORDER_HEADER,
    PRODUCT_HEADER,
    REVIEW_HEADER,
    FakeStore,
    RecordingReporter,
    csv_text,
)


@pytest.fixture()
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture()
def fake_store() -> FakeStore:
    return FakeStore()


@pytest.fixture()
def sqlite_engine() -> Iterator[Engine]:
    """In-memory SQLite with foreign keys enforced and the seed tables created."""
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection: Any, _: Any) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def seed_csv_dir(tmp_path: Path) -> Path:
    """A CSV directory with one row per entity plus a few malformed rows."""
    files = {
        "Product.csv": csv_text(
            PRODUCT_HEADER,
            "P1,Lamp,Acme,Desk lamp,true,/img/lamp.png,19,user_1,2024-01-01T10:00:00.000Z,2024-01-02T10:00:00.000Z",
            "P2,Chair,Acme,Office chair,false,/img/chair.png,abc,user_1,2024-01-01T10:00:00.000Z,2024-01-02T10:00:00.000Z",
        ),
        "Cart.csv": csv_text(
            CART_HEADER,
            "C1,user_1,2,3800,5,380,0.1,4185,2024-02-01T09:00:00Z,2024-02-01T09:30:00Z",
        ),
        "CartItem.csv": csv_text(
            CART_ITEM_HEADER,
            "CI1,P1,C1,2,2024-02-01T09:05:00Z,2024-02-01T09:05:00Z",
            "CI2,P404,C1,1,2024-02-01T09:06:00Z,2024-02-01T09:06:00Z",
            "CI3,P2,C1,1,2024-02-01T09:07:00Z,2024-02-01T09:07:00Z",
        ),
        "Favorite.csv": csv_text(
            FAVORITE_HEADER,
            "F1,user_1,P1,2024-03-01T08:00:00Z,2024-03-01T08:00:00Z",
            "F2,,P1,,",
            "F3,user_2,P2,,",
        ),
        "Order.csv": csv_text(
            ORDER_HEADER,
            "O1,user_1,3,4185,380,5,buyer@example.com,t,2024-02-02T10:00:00Z,2024-02-02T10:00:00Z",
        ),
        "Review.csv": csv_text(
            REVIEW_HEADER,
            "R1,user_1,5,Great lamp,Ada,/img/ada.png,2024-03-05T10:00:00Z,2024-03-05T10:00:00Z,P1",
        ),
    }
    for name, content in files.items():
        (tmp_path / name).write_text(content, encoding="utf-8")
    return tmp_path


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Iterator[None]:
    get_seed_settings.cache_clear()
    yield
    get_seed_settings.cache_clear()
