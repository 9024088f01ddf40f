"""API test fixtures — FastAPI app wired to the per-test SQLite store.

Design Decisions:
    - app.state populated directly: ASGITransport does not run the lifespan,
      so the test owns the session manager and UserAPI instances
"""

import pytest
from httpx import ASGITransport, AsyncClient

from launchpad.api.dependencies import encode_token
from launchpad.main import create_app


@pytest.fixture
async def client(db_manager, user_api):
    app = create_app()
    app.state.db_manager = db_manager
    app.state.user_api = user_api
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
def auth_headers():
    return {"Authorization": encode_token("a@a.a")}
