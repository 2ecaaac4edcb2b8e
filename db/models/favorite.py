"""
db/models/favorite.py

Favorite model: A user's bookmark of a product.
"""

from sqlalchemy import ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, SourceTimestampMixin


class Favorite(Base, SourceTimestampMixin):
    __tablename__ = "Favorite"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    clerk_id: Mapped[str] = mapped_column("clerkId", Text, nullable=False)
    product_id: Mapped[str] = mapped_column(
        "productId",
        Text,
        ForeignKey("Product.id"),
        nullable=False,
    )
