"""SQLAlchemy models backing the registered list collections."""

from listpager.models.product import Product
from listpager.models.order import Order

__all__ = ["Product", "Order"]
