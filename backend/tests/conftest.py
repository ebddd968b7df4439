"""Root conftest — shared store fixtures over in-memory storage.

Invariants:
    - Every test gets a fresh InMemoryKeyValueStorage and freshly opened stores
    - RecordStore uses a fixed clock and never seeds sample jobs unless a test asks
    - Password hashing uses few iterations so the suite stays fast
"""

import os

import pytest

# Keep module-level settings (hiresphere.main) away from a real database file
os.environ.setdefault("STORAGE_URL", "memory://")
os.environ.setdefault("SEED_SAMPLE_JOBS", "false")

from hiresphere.infrastructure.memory_storage import InMemoryKeyValueStorage  # noqa: E402

from factories import make_identity, make_records  # noqa: E402


@pytest.fixture
def storage():
    return InMemoryKeyValueStorage()


@pytest.fixture
def identity(storage):
    store = make_identity(storage)
    yield store
    store.close()


@pytest.fixture
def records(storage, identity):
    store = make_records(storage, identity)
    yield store
    store.close()
