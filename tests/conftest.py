import os

# db.py refuses to import without a URL; tests swap the engine below
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import truck_pos.db as db
from truck_pos.dependencies import get_backend_gateway
from truck_pos.main import app
from truck_pos.models import Base
from truck_pos.routes.pos import limiter
from truck_pos.services.terminals import TERMINAL_CARTS
from tests.test_helpers import FakeGateway, seed_menu


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = factory()
    seed_menu(session)
    session.close()
    yield factory
    engine.dispose()


@pytest.fixture
def db_session(session_factory):
    """A session on a freshly seeded in-memory database."""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def fake_gateway():
    return FakeGateway()


@pytest.fixture
def client(session_factory, fake_gateway):
    """Shared FastAPI TestClient on the seeded in-memory database.

    The backend gateway is replaced by a FakeGateway and every terminal
    cart is emptied before and after the test.
    """
    def override_get_db():
        db_sess = session_factory()
        try:
            yield db_sess
        finally:
            db_sess.close()

    app.dependency_overrides[db.get_db] = override_get_db
    app.dependency_overrides[get_backend_gateway] = lambda: fake_gateway

    TERMINAL_CARTS.clear()
    limiter.reset()

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    TERMINAL_CARTS.clear()
