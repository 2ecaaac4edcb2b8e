"""
seeder/connectors/csv_row_source.py

Reads one delimited source file into Rows.

A missing, empty, or unreadable file is not an error: it is reported as a
warning and yields no rows, so the run continues with the next entity type.
"""

from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Protocol

from seeder.domain.entity_spec import Row
from seeder.reporting import Reporter, default_reporter

_BOM = "\ufeff"


class FileSystem(Protocol):
    def exists(self, path: str | Path) -> bool:
        ...

    def read_all(self, path: str | Path) -> str:
        ...


class RowParser(Protocol):
    def parse_rows(self, content: str) -> list[Row]:
        ...


class LocalFileSystem:
    """
    Filesystem capability over local paths; text is decoded as UTF-8 with an optional BOM.
    """

    def __init__(self, encoding: str = "utf-8-sig") -> None:
        self._encoding = encoding

    def exists(self, path: str | Path) -> bool:
        return Path(path).is_file()

    def read_all(self, path: str | Path) -> str:
        return Path(path).read_text(encoding=self._encoding)


class CSVRowParser:
    """
    Header-keyed CSV parsing with trimmed values.

    Short rows are padded with empty strings so every header column is a key;
    cells beyond the header are dropped. Rows whose cells are all blank are
    skipped.
    """

    def __init__(self, *, delimiter: str = ",") -> None:
        self._delimiter = delimiter

    def parse_rows(self, content: str) -> list[Row]:
        if content.startswith(_BOM):
            content = content[len(_BOM):]

        reader = csv.DictReader(
            io.StringIO(content, newline=""),
            delimiter=self._delimiter,
            restval="",
        )
        source_headers = reader.fieldnames or []
        headers = [header.strip() for header in source_headers]

        rows: list[Row] = []
        for raw_row in reader:
            row = {
                header: (raw_row.get(source_header) or "").strip()
                for header, source_header in zip(headers, source_headers)
            }
            if all(value == "" for value in row.values()):
                continue
            rows.append(row)
        return rows


class CSVRowSource:
    """
    Row Source: ``read(path) -> list[Row]``. Re-reading the same path is safe.
    """

    def __init__(
        self,
        *,
        filesystem: FileSystem | None = None,
        parser: RowParser | None = None,
        reporter: Reporter | None = None,
    ) -> None:
        self._filesystem = filesystem or LocalFileSystem()
        self._parser = parser or CSVRowParser()
        self._reporter = reporter or default_reporter

    def read(self, path: str | Path) -> list[Row]:
        if not self._filesystem.exists(path):
            self._reporter.warning("source_missing", path=str(path))
            return []

        try:
            content = self._filesystem.read_all(path)
        except (OSError, UnicodeDecodeError) as exc:
            self._reporter.warning("source_unreadable", path=str(path), error=str(exc))
            return []

        trimmed = content.strip()
        if not trimmed or len(trimmed.splitlines()) <= 1:
            self._reporter.warning("source_empty", path=str(path))
            return []

        try:
            rows = self._parser.parse_rows(content)
        except csv.Error as exc:
            self._reporter.warning("source_unreadable", path=str(path), error=str(exc))
            return []

        if not rows:
            self._reporter.warning("source_empty", path=str(path))
            return []

        self._reporter.info("source_read", path=str(path), rows=len(rows))
        return rows
