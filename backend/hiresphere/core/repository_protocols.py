"""Boundary Protocols — contracts between the stores and their collaborators.

Invariants:
    - Stores NEVER import a concrete storage implementation — only these Protocols
    - KeyValueStorage is synchronous: a write has completed (or raised) when it returns
    - write_many is all-or-nothing across the keys it is given

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - SessionLike instead of the pydantic Account: RecordStore only needs id, name, role,
      so it stays decoupled from identity schemas
"""

from typing import Protocol

from hiresphere.core.domain_types import AccountId, Role


class SessionLike(Protocol):
    """Structural contract for the session snapshot RecordStore consults."""
    id: AccountId
    name: str
    role: Role


class SessionProvider(Protocol):
    """Who is asking — implemented by IdentityStore."""
    def current_session(self) -> SessionLike | None: ...


class KeyValueStorage(Protocol):
    """Durable key-value surface — implemented by infrastructure."""
    def open(self) -> None: ...
    def close(self) -> None: ...
    def read(self, key: str) -> str | None: ...
    def write(self, key: str, value: str) -> None: ...
    def write_many(self, values: dict[str, str]) -> None: ...
    def delete(self, key: str) -> None: ...
    def health_check(self) -> bool: ...
