"""
db/models/cart.py

Cart model: One shopping cart per user; amounts are stored in cents.
"""

from sqlalchemy import Float, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, SourceTimestampMixin


class Cart(Base, SourceTimestampMixin):
    __tablename__ = "Cart"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    clerk_id: Mapped[str] = mapped_column("clerkId", Text, nullable=False)
    num_items_in_cart: Mapped[int] = mapped_column("numItemsInCart", Integer, nullable=False, default=0)
    cart_total: Mapped[int] = mapped_column("cartTotal", Integer, nullable=False, default=0)
    shipping: Mapped[int] = mapped_column(Integer, nullable=False, default=5)
    tax: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    tax_rate: Mapped[float] = mapped_column("taxRate", Float, nullable=False, default=0.1)
    order_total: Mapped[int] = mapped_column("orderTotal", Integer, nullable=False, default=0)
