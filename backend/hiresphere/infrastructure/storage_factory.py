"""Storage Factory — picks the KeyValueStorage implementation from a URL."""

from hiresphere.core.repository_protocols import KeyValueStorage
from hiresphere.infrastructure.memory_storage import InMemoryKeyValueStorage
from hiresphere.infrastructure.sql_storage import SqlKeyValueStorage

MEMORY_URL = "memory://"


def create_storage(url: str) -> KeyValueStorage:
    if url == MEMORY_URL:
        return InMemoryKeyValueStorage()
    return SqlKeyValueStorage(url)
