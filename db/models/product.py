"""
db/models/product.py

Product model: Catalog item referenced by cart items, favorites, and reviews.
"""

from sqlalchemy import Boolean, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, SourceTimestampMixin


class Product(Base, SourceTimestampMixin):
    __tablename__ = "Product"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    company: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    image: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[int] = mapped_column(Integer, nullable=False)
    clerk_id: Mapped[str] = mapped_column("clerkId", Text, nullable=False)

    def __repr__(self) -> str:
        return f"<Product id={self.id!r} name={self.name!r} price={self.price}>"
