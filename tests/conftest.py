"""Root conftest — shared test configuration and database fixtures.

Invariants:
    - Every test that touches the database gets its own SQLite file under tmp_path
    - Tables are created from Base.metadata before the test and the engine is disposed after

Design Decisions:
    - File-backed SQLite over :memory:: concurrent bookings need several pooled
      connections to see the same database
"""

import os

import pytest

# Never reach a real database from the test suite
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")

from launchpad.db.base import Base  # noqa: E402
from launchpad import models  # noqa: E402,F401
from launchpad.infrastructure.database import DatabaseSessionManager  # noqa: E402
from launchpad.infrastructure.store import Store  # noqa: E402
from launchpad.services.user_api import UserAPI  # noqa: E402


@pytest.fixture
async def db_manager(tmp_path):
    manager = DatabaseSessionManager(
        f"sqlite+aiosqlite:///{tmp_path / 'launchpad.db'}",
    )
    async with manager.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield manager
    await manager.dispose()


@pytest.fixture
def store(db_manager):
    return Store(db_manager)


@pytest.fixture
def user_api(store):
    return UserAPI(store)
