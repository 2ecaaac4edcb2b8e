"""Shared fakes, fixed clock, and CSV headers for the seed tests."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from db.repositories.errors import EntityUpsertError

FIXED_NOW = datetime(2025, 12, 21, 12, 0, tzinfo=timezone.utc)

PRODUCT_HEADER = "id,name,company,description,featured,image,price,clerkId,createdAt,updatedAt"
CART_HEADER = "id,clerkId,numItemsInCart,cartTotal,shipping,tax,taxRate,orderTotal,createdAt,updatedAt"
CART_ITEM_HEADER = "id,productId,cartId,amount,createdAt,updatedAt"
FAVORITE_HEADER = "id,clerkId,productId,createdAt,updatedAt"
ORDER_HEADER = "id,clerkId,products,orderTotal,tax,shipping,email,isPaid,createdAt,updatedAt"
REVIEW_HEADER = "id,clerkId,rating,comment,authorName,authorImageUrl,createdAt,updatedAt,productId"


class RecordingReporter:
    """Reporter that keeps every event for assertions."""

    def __init__(self) -> None:
        self.events: list[tuple[str, str, dict[str, Any]]] = []

    def debug(self, event: str, **fields: Any) -> None:
        self.events.append(("debug", event, fields))

    def info(self, event: str, **fields: Any) -> None:
        self.events.append(("info", event, fields))

    def warning(self, event: str, **fields: Any) -> None:
        self.events.append(("warning", event, fields))

    def error(self, event: str, **fields: Any) -> None:
        self.events.append(("error", event, fields))

    def named(self, event: str, level: str | None = None) -> list[dict[str, Any]]:
        return [
            fields
            for event_level, name, fields in self.events
            if name == event and (level is None or event_level == level)
        ]

    def levels(self, level: str) -> list[str]:
        return [name for event_level, name, _ in self.events if event_level == level]


class FakeStore:
    """In-memory store; keys listed in ``reject`` raise like a FK violation."""

    def __init__(self, reject: Mapping[str, str] | None = None) -> None:
        self.calls: list[tuple[str, str, dict[str, Any]]] = []
        self.rows: dict[tuple[str, str], dict[str, Any]] = {}
        self._reject = dict(reject or {})

    def upsert(self, entity_type: str, key: str, fields: Mapping[str, Any]) -> None:
        self.calls.append((entity_type, key, dict(fields)))
        if key in self._reject:
            raise EntityUpsertError(entity_type=entity_type, key=key, message=self._reject[key])
        self.rows[(entity_type, key)] = dict(fields)

    def entity_order(self) -> list[str]:
        order: list[str] = []
        for entity_type, _, _ in self.calls:
            if not order or order[-1] != entity_type:
                order.append(entity_type)
        return order


class FakeStoreScope:
    """Context-manager factory over a FakeStore that records acquire/release."""

    def __init__(self, store: FakeStore, *, fail_on_enter: Exception | None = None) -> None:
        self.store = store
        self.opened = 0
        self.closed = 0
        self._fail_on_enter = fail_on_enter

    @contextmanager
    def __call__(self) -> Iterator[FakeStore]:
        if self._fail_on_enter is not None:
            raise self._fail_on_enter
        self.opened += 1
        try:
            yield self.store
        finally:
            self.closed += 1


class InMemoryFileSystem:
    """Filesystem capability over a dict of path -> content (or exception to raise)."""

    def __init__(self, files: Mapping[str, str | Exception] | None = None) -> None:
        self.files = {str(Path(path)): content for path, content in (files or {}).items()}
        self.reads: list[str] = []

    def exists(self, path: str | Path) -> bool:
        return str(Path(path)) in self.files

    def read_all(self, path: str | Path) -> str:
        self.reads.append(str(Path(path)))
        content = self.files[str(Path(path))]
        if isinstance(content, Exception):
            raise content
        return content


def csv_text(header: str, *lines: str) -> str:
    return "\n".join((header, *lines)) + "\n"
