"""Store Dependencies — FastAPI accessors for the stores built in the lifespan.

Invariants:
    - Stores live on app.state; routes obtain them only through these functions
    - Tests override these dependencies instead of running the lifespan
"""

from fastapi import Request

from hiresphere.core.repository_protocols import KeyValueStorage
from hiresphere.services.identity_store import IdentityStore
from hiresphere.services.record_store import RecordStore


def get_storage(request: Request) -> KeyValueStorage:
    return request.app.state.storage


def get_identity_store(request: Request) -> IdentityStore:
    return request.app.state.identity


def get_record_store(request: Request) -> RecordStore:
    return request.app.state.records
