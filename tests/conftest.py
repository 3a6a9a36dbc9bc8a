"""Shared fixtures: in-memory SQLite database and API test client."""

from datetime import datetime, timedelta
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from listpager.database import Base, get_session_factory
from listpager.main import app
from listpager.models import Order, Product

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0)


@pytest.fixture
def session_factory():
    """Session factory bound to a fresh in-memory database."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db_session(session_factory):
    """Database session for arranging test data."""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    """API test client using the in-memory database."""
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_products(count: int) -> list[Product]:
    """Products p001..pNNN; newer products have higher numbers."""
    return [
        Product(
            name=f"Product {i:03d}",
            category="phones" if i % 2 == 0 else "accessories",
            price=Decimal("10.00") + i,
            stock_quantity=i % 7,
            is_active=i % 5 != 0,
            created_at=BASE_TIME + timedelta(hours=i),
        )
        for i in range(1, count + 1)
    ]


@pytest.fixture
def sample_products(db_session):
    """237 products, enough for ten pages of 25."""
    products = make_products(237)
    db_session.add_all(products)
    db_session.commit()
    return products


@pytest.fixture
def sample_orders(db_session):
    """A handful of orders in different states."""
    statuses = ["pending", "paid", "paid", "shipped", "cancelled", "paid"]
    orders = [
        Order(
            order_number=f"ORD-{i:04d}",
            customer_email=f"customer{i}@example.com",
            status=status,
            total_amount=Decimal("25.50") * (i + 1),
            created_at=BASE_TIME + timedelta(days=i),
        )
        for i, status in enumerate(statuses)
    ]
    db_session.add_all(orders)
    db_session.commit()
    return orders


@pytest.fixture
def memory_rows():
    """Plain rows for the in-memory store: ids 1..100, ``created_at`` ascending with id."""
    return [
        {
            "id": i,
            "name": f"Item {i:03d}",
            "status": ["active", "archived", "draft"][i % 3],
            "price": i * 2,
            "created_at": BASE_TIME + timedelta(minutes=i),
        }
        for i in range(1, 101)
    ]
