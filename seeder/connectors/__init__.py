from seeder.connectors.csv_row_source import (
    CSVRowParser,
    CSVRowSource,
    FileSystem,
    LocalFileSystem,
    RowParser,
)

__all__ = [
    "CSVRowParser",
    "CSVRowSource",
    "FileSystem",
    "LocalFileSystem",
    "RowParser",
]
