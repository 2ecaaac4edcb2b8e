"""
db/models/review.py

Review model: A rated comment left on a product.
"""

from sqlalchemy import ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, SourceTimestampMixin


class Review(Base, SourceTimestampMixin):
    __tablename__ = "Review"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    clerk_id: Mapped[str] = mapped_column("clerkId", Text, nullable=False)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[str] = mapped_column(Text, nullable=False)
    author_name: Mapped[str] = mapped_column("authorName", Text, nullable=False)
    author_image_url: Mapped[str] = mapped_column("authorImageUrl", Text, nullable=False)
    product_id: Mapped[str] = mapped_column(
        "productId",
        Text,
        ForeignKey("Product.id"),
        nullable=False,
    )
