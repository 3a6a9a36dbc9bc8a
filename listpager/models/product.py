"""Product catalogue model."""

from datetime import datetime
from decimal import Decimal
from sqlalchemy import String, Boolean, Integer, Numeric, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from listpager.database import Base


class Product(Base):
    """Model representing a product listed in the store."""

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    category: Mapped[str | None] = mapped_column(String(100), index=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    stock_quantity: Mapped[int] = mapped_column(Integer, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    def __repr__(self) -> str:
        return f"<Product {self.name}>"
