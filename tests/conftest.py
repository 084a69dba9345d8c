import os

os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test_restaurant_orders.db")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from restaurant_orders.api.deps import get_current_user, get_order_store
from restaurant_orders.db.base import Base
from restaurant_orders.db.session import get_async_session
from restaurant_orders.main import app
from restaurant_orders.models import RoleEnum
from restaurant_orders.schemas.basket import Basket, Item
from restaurant_orders.schemas.user import CurrentUser
from restaurant_orders.storage.order_store import JsonFileOrderStore


BURGER = Item(name="Burger", price="5.00", link="burger")
FRIES = Item(name="Fries", price="2.50", link="fries")


@pytest.fixture
def store(tmp_path):
    return JsonFileOrderStore(tmp_path / "orders")


@pytest.fixture
def basket():
    return Basket(restaurant_link="joes-diner", user_name="alice")


@pytest.fixture
def client(store):
    app.dependency_overrides[get_order_store] = lambda: store
    with TestClient(app, follow_redirects=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def login_as():
    def _login(username, restaurant_link=None):
        role = RoleEnum.staff if restaurant_link else RoleEnum.customer
        user = CurrentUser(username=username, role=role, restaurant_link=restaurant_link)
        app.dependency_overrides[get_current_user] = lambda: user
        return user

    return _login


@pytest.fixture
def db_client(client, tmp_path):
    path = tmp_path / "users.db"
    sync_engine = create_engine(f"sqlite:///{path}")
    Base.metadata.create_all(sync_engine)
    sync_engine.dispose()

    engine = create_async_engine(f"sqlite+aiosqlite:///{path}", poolclass=NullPool)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)

    async def override_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_async_session] = override_session
    yield client
