"""
db/models/cart_item.py

CartItem model: Line item joining a cart to a product.
"""

from sqlalchemy import ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, SourceTimestampMixin


class CartItem(Base, SourceTimestampMixin):
    __tablename__ = "CartItem"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    product_id: Mapped[str] = mapped_column(
        "productId",
        Text,
        ForeignKey("Product.id"),
        nullable=False,
    )
    cart_id: Mapped[str] = mapped_column(
        "cartId",
        Text,
        ForeignKey("Cart.id"),
        nullable=False,
    )
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
