"""
db/base.py

Declarative base and the source-timestamp mixin for the seeded store models.

Table and column names follow the Prisma-managed store the seed targets:
PascalCase model tables and camelCase columns. Python attributes stay
snake_case and map onto those names explicitly.
"""

from datetime import datetime

from sqlalchemy import DateTime, MetaData, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# Prisma's default constraint names.
NAMING_CONVENTION = {
    "ix": "%(table_name)s_%(column_0_name)s_idx",
    "uq": "%(table_name)s_%(column_0_name)s_key",
    "fk": "%(table_name)s_%(column_0_name)s_fkey",
    "pk": "%(table_name)s_pkey",
}


class Base(DeclarativeBase):
    """
    Declarative base shared by every seeded table.
    """

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


class SourceTimestampMixin:
    """
    createdAt / updatedAt columns whose values come from the source files.

    The server default only applies when a row omits them; there is no
    onupdate hook, so re-seeding an unchanged row leaves both columns as-is.
    """

    created_at: Mapped[datetime] = mapped_column(
        "createdAt",
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    updated_at: Mapped[datetime] = mapped_column(
        "updatedAt",
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
