"""
db/models/order.py

Order model: A checked-out cart snapshot. It has no foreign keys.
"""

from sqlalchemy import Boolean, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, SourceTimestampMixin


class Order(Base, SourceTimestampMixin):
    __tablename__ = "Order"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    clerk_id: Mapped[str] = mapped_column("clerkId", Text, nullable=False)
    products: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Number of items in the order",
    )
    order_total: Mapped[int] = mapped_column("orderTotal", Integer, nullable=False, default=0)
    tax: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    shipping: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    email: Mapped[str] = mapped_column(Text, nullable=False)
    is_paid: Mapped[bool] = mapped_column("isPaid", Boolean, nullable=False, default=False)
