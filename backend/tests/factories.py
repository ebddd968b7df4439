"""Test factories — store builders and canned inputs shared across test packages."""

from datetime import datetime, timezone

from hiresphere.core.domain_types import Role
from hiresphere.core.errors import StorageError
from hiresphere.infrastructure.memory_storage import InMemoryKeyValueStorage
from hiresphere.services.identity_store import IdentityStore
from hiresphere.services.record_store import RecordStore

FIXED_NOW = datetime(2026, 1, 15, 9, 30, tzinfo=timezone.utc)
TEST_ITERATIONS = 1_000


def make_identity(storage) -> IdentityStore:
    store = IdentityStore(storage, password_iterations=TEST_ITERATIONS)
    store.open()
    return store


def make_records(storage, identity, seed: bool = False) -> RecordStore:
    store = RecordStore(
        storage, identity, seed_sample_jobs=seed, clock=lambda: FIXED_NOW,
    )
    store.open()
    return store


def employer_profile(email: str = "e@x.com", name: str = "Erin Employer") -> dict:
    return {"name": name, "email": email, "role": Role.EMPLOYER, "company": "Acme"}


def jobseeker_profile(email: str = "s@x.com", name: str = "Sam Seeker") -> dict:
    return {
        "name": name, "email": email, "role": Role.JOBSEEKER,
        "title": "Developer", "skills": ["python", "sql"],
    }


def job_fields(**overrides) -> dict:
    fields = {
        "title": "Dev",
        "company": "Acme",
        "location": "Remote",
        "description": "Build things.",
        "requirements": ["Python", "Testing"],
        "salary": "$100k",
        "type": "full-time",
    }
    fields.update(overrides)
    return fields


class FailingStorage(InMemoryKeyValueStorage):
    """In-memory storage whose writes can be switched off."""
    fail_writes = False

    def write(self, key, value):
        if self.fail_writes:
            raise StorageError("disk full", "write")
        super().write(key, value)

    def write_many(self, values):
        if self.fail_writes:
            raise StorageError("disk full", "write")
        super().write_many(values)
