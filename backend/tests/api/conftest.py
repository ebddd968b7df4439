"""API test fixtures — FastAPI test client over in-memory stores.

Invariants:
    - Store dependencies overridden with the per-test fixtures; the lifespan never runs
    - Overrides cleared after each test
"""

import pytest
from httpx import ASGITransport, AsyncClient

from hiresphere.api.dependencies import (
    get_identity_store, get_record_store, get_storage,
)
from hiresphere.main import app


@pytest.fixture
async def client(storage, identity, records):
    """FastAPI test client with store dependencies overridden."""
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_identity_store] = lambda: identity
    app.dependency_overrides[get_record_store] = lambda: records

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()

