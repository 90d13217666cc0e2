"""Shared pytest fixtures for the storefront backend tests."""

import os

# Settings are read at import time by app.database / app.core.auth.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SUPABASE_JWT_SECRET"] = "test-jwt-secret"
os.environ["EMAIL_API_KEY"] = ""

import uuid

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from app.core.cart_session import get_cart_store
from app.core.local_storage import MemoryStorage
from app.database import get_session
from app.main import app
from app.models.delivery import GovernorateDeliveryPrice
from app.models.product import Category, Product
from app.models.user import User
from app.schemas.cart import ProductSnapshot
from app.services.cart_store import CartStore
from app.services.notification_service import OrderNotifier, get_order_notifier

JWT_SECRET = "test-jwt-secret"


class RecordingNotifier(OrderNotifier):
    """Keeps every notification; can be told to fail or blow up."""

    def __init__(self, result: bool = True, error: Exception | None = None):
        self.result = result
        self.error = error
        self.sent = []

    def notify_order_placed(self, notification):
        self.sent.append(notification)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def store():
    return CartStore(MemoryStorage())


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def category(session):
    category = Category(name="Men", slug="men")
    session.add(category)
    session.commit()
    session.refresh(category)
    return category


@pytest.fixture
def make_product(session):
    """Factory inserting a product; keyword arguments override defaults."""
    counter = {"n": 0}

    def _make(**overrides) -> Product:
        counter["n"] += 1
        values = {
            "name": f"Product {counter['n']}",
            "slug": f"product-{counter['n']}",
            "price": 100.0,
            "stock_quantity": 20,
            "sizes": [],
            "colors": [],
        }
        values.update(overrides)
        product = Product(**values)
        session.add(product)
        session.commit()
        session.refresh(product)
        return product

    return _make


@pytest.fixture
def governorates(session):
    rows = [
        GovernorateDeliveryPrice(governorate="Cairo", delivery_price=30.0),
        GovernorateDeliveryPrice(governorate="Giza", delivery_price=35.0),
        GovernorateDeliveryPrice(governorate="Aswan", delivery_price=90.0, is_active=False),
    ]
    session.add_all(rows)
    session.commit()
    return rows


def snapshot(product: Product) -> ProductSnapshot:
    return ProductSnapshot.model_validate(product, from_attributes=True)


def make_snapshot(price: float = 100.0, **overrides) -> ProductSnapshot:
    values = {
        "id": uuid.uuid4(),
        "name": "Linen Shirt",
        "slug": "linen-shirt",
        "price": price,
        "sizes": ["M", "L"],
        "colors": ["white"],
        "stock_quantity": 20,
    }
    values.update(overrides)
    return ProductSnapshot(**values)


@pytest.fixture
def client(engine, store, notifier):
    def _get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _get_session
    app.dependency_overrides[get_cart_store] = lambda: store
    app.dependency_overrides[get_order_notifier] = lambda: notifier
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def user(session):
    user = User(id=uuid.uuid4(), email="buyer@example.com", full_name="Mona Adel")
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def auth_headers(user_id: uuid.UUID, email: str = "buyer@example.com") -> dict[str, str]:
    token = jwt.encode({"sub": str(user_id), "email": email}, JWT_SECRET, algorithm="HS256")
    return {"Authorization": f"Bearer {token}"}
