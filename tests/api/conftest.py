"""API test fixtures - FastAPI test client with pinned clock and settings.

Invariants:
    - utc_today overridden to a fixed date so scheduling is deterministic
    - get_settings overridden per test via the `settings` fixture
    - dependency_overrides cleared after every test
"""

from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient

from payinstruct.config import Settings, get_settings
from payinstruct.infrastructure.clock import utc_today
from payinstruct.main import app


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
async def client(settings):
    """FastAPI test client with clock and settings dependencies overridden."""
    app.dependency_overrides[utc_today] = lambda: date(2025, 6, 1)
    app.dependency_overrides[get_settings] = lambda: settings

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
