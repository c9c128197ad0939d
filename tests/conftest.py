import os
import uuid
from datetime import datetime, timedelta, timezone

import pytest

os.environ.setdefault("JWT_SECRET", "test-secret")

from fastapi.testclient import TestClient  # noqa: E402
from jose import jwt  # noqa: E402

from storefront.core.config import Settings  # noqa: E402
from storefront.main import create_app  # noqa: E402
from storefront.models.product import Product  # noqa: E402

JWT_SECRET = "test-secret"
API = "/api"


@pytest.fixture()
def settings():
    return Settings(
        _env_file=None,
        DATABASE_URL="sqlite://",
        JWT_SECRET=JWT_SECRET,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture()
def app(settings):
    return create_app(settings)


@pytest.fixture()
def client(app):
    # Entering the context runs the lifespan, which creates the tables
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def database(app, client):
    return app.state.database


@pytest.fixture()
def make_product(database):
    """Factory: insert a product directly and return it."""
    counter = {"n": 0}
    base_time = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def _make(**overrides):
        counter["n"] += 1
        fields = {
            "name": f"Product {counter['n']}",
            "description": "A product",
            "price": 10.0,
            "image_url": "https://img.example.com/p.png",
            "category": "Men",
            "sizes": ["S", "M", "L", "XL"],
            "stock": 10,
            # Later products are newer unless overridden
            "created_at": base_time + timedelta(minutes=counter["n"]),
        }
        fields.update(overrides)
        with database.session() as session:
            product = Product(**fields)
            session.add(product)
            session.commit()
            session.refresh(product)
            return product

    return _make


@pytest.fixture()
def get_product(database):
    def _get(product_id):
        with database.session() as session:
            return session.get(Product, product_id)

    return _get


def make_token(user_id: uuid.UUID, email: str = "shopper@example.com") -> str:
    return jwt.encode(
        {"sub": str(user_id), "email": email},
        JWT_SECRET,
        algorithm="HS256",
    )


def auth_headers(user_id: uuid.UUID, email: str = "shopper@example.com") -> dict:
    return {"Authorization": f"Bearer {make_token(user_id, email)}"}


@pytest.fixture()
def user_id():
    return uuid.uuid4()


@pytest.fixture()
def user_headers(user_id):
    return auth_headers(user_id)


def add_to_cart(client, product_id, size="S", quantity=None, headers=None):
    """Helper: POST /cart/add and return the response."""
    body = {"productId": str(product_id), "size": size}
    if quantity is not None:
        body["quantity"] = quantity
    return client.post(f"{API}/cart/add", json=body, headers=headers or {})
