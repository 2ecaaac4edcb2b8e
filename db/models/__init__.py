"""
Model package exports.

Import all SQLAlchemy models here so metadata registration works without
extra imports.
"""

from db.models.cart import Cart
from db.models.cart_item import CartItem
from db.models.favorite import Favorite
from db.models.order import Order
from db.models.product import Product
from db.models.review import Review

__all__ = [
    "Product",
    "Cart",
    "CartItem",
    "Favorite",
    "Order",
    "Review",
]
