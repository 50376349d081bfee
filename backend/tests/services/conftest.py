"""Service test fixtures — SQLite DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB session manager
    - db_manager patched so readiness probes see the test database

Design Decisions:
    - SQLite in-memory with StaticPool: routes run in FastAPI's threadpool, so
      every thread must share the single in-memory connection
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from alias_registry.db.base import Base
from alias_registry.infrastructure.database import get_db, DatabaseSessionManager
import alias_registry.infrastructure.database as db_module
import alias_registry.models  # noqa: F401
from alias_registry.main import app


@pytest.fixture
def test_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def test_manager(test_engine) -> DatabaseSessionManager:
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = sessionmaker(
        test_engine, class_=Session, expire_on_commit=False,
    )
    return manager


@pytest.fixture
async def client(test_manager):
    """FastAPI test client with DB dependency overridden."""
    def override_get_db():
        with test_manager.session() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    original_manager = db_module.db_manager
    db_module.db_manager = test_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
