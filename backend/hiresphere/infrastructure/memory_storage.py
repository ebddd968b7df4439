"""In-Memory Storage — dict-backed KeyValueStorage for tests and throwaway sessions.

Invariants:
    - write_many applies every key or none (single dict.update)
    - Contents survive close()/open() on the same instance, like a browser profile
      surviving a page reload
"""


class InMemoryKeyValueStorage:
    def __init__(self, initial: dict[str, str] | None = None):
        self.data: dict[str, str] = dict(initial or {})

    def open(self) -> None:
        pass

    def close(self) -> None:
        pass

    def read(self, key: str) -> str | None:
        return self.data.get(key)

    def write(self, key: str, value: str) -> None:
        self.data[key] = value

    def write_many(self, values: dict[str, str]) -> None:
        self.data.update(values)

    def delete(self, key: str) -> None:
        self.data.pop(key, None)

    def health_check(self) -> bool:
        return True
