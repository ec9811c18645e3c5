"""
Shared fixtures.

Every test runs against a fresh in-memory SQLite database and an in-memory
Redis double, wired into the app through dependency overrides.
"""
import os

# must be set before shopcart.utils.settings is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["REDIS_RETRY_ATTEMPTS"] = "1"
os.environ["STOCK_LOCK_ENABLED"] = "false"
os.environ["STOCK_LEDGER_BACKEND"] = "sql"
os.environ["PASSWORD_HASH_ITERATIONS"] = "1000"

import uuid
from decimal import Decimal
from unittest.mock import Mock

import pytest
import redis
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from shopcart.api import create_app
from shopcart.api.deps import get_notification_service, get_redis
from shopcart.data.database import Base, get_db, init_db
from shopcart.data.models import ProductModel
from shopcart.domain.principal import Principal
from shopcart.services.cart_cache import CartCache


class InMemoryRedis:
    """
    Minimal stand-in for redis.Redis covering the calls the service makes.

    Set ``down = True`` to make every call raise ConnectionError, or put
    command names in ``failing`` to break only those.
    """

    def __init__(self):
        self.data = {}
        self.ttls = {}
        self.down = False
        self.failing = set()
        self.calls = []

    def _call(self, name):
        self.calls.append(name)
        if self.down or name in self.failing:
            raise redis.ConnectionError("Connection refused")

    def get(self, key):
        self._call("get")
        return self.data.get(key)

    def set(self, key, value, ex=None, nx=False):
        self._call("set")
        if nx and key in self.data:
            return None
        self.data[key] = value
        self.ttls[key] = ex
        return True

    def delete(self, *keys):
        self._call("delete")
        removed = 0
        for key in keys:
            if self.data.pop(key, None) is not None:
                self.ttls.pop(key, None)
                removed += 1
        return removed

    def eval(self, script, numkeys, key, token):
        self._call("eval")
        if self.data.get(key) == token:
            del self.data[key]
            return 1
        return 0

    def ping(self):
        self._call("ping")
        return True


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def fake_redis():
    return InMemoryRedis()


@pytest.fixture
def cache(fake_redis):
    return CartCache(fake_redis, retry_attempts=1)


@pytest.fixture
def make_product(db):
    def _make(stock=5, price="10.00", name="Keyboard"):
        product = ProductModel(name=name, description="", price=Decimal(price), number_of_stock=stock)
        db.add(product)
        db.commit()
        db.refresh(product)
        return product

    return _make


@pytest.fixture
def principal():
    return Principal(user_id=uuid.uuid4())


@pytest.fixture
def notifier():
    return Mock()


@pytest.fixture
def app(session_factory, fake_redis, notifier):
    app = create_app()

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_redis] = lambda: fake_redis
    app.dependency_overrides[get_notification_service] = lambda: notifier
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    return TestClient(app)


def _auth_headers(user_id, *roles):
    headers = {"X-User-Id": str(user_id)}
    if roles:
        headers["X-User-Roles"] = ",".join(roles)
    return headers


@pytest.fixture
def headers_for():
    return _auth_headers


@pytest.fixture
def user_headers(principal):
    return _auth_headers(principal.user_id)


@pytest.fixture
def admin_headers():
    return _auth_headers(uuid.uuid4(), "user", "admin")
