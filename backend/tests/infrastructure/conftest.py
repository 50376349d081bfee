"""Infrastructure fixtures — in-memory SQLite engine shared across threads.

Invariants:
    - Every test gets a fresh schema
    - StaticPool keeps one connection so the in-memory database survives across sessions
"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from alias_registry.db.base import Base
from alias_registry.infrastructure.database import DatabaseSessionManager
import alias_registry.models  # noqa: F401


@pytest.fixture
def sql_engine():
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
def db_manager(sql_engine) -> DatabaseSessionManager:
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = sql_engine
    manager._session_factory = sessionmaker(
        sql_engine, class_=Session, expire_on_commit=False,
    )
    return manager
