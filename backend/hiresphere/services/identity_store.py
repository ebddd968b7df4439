"""Identity Store — account ledger, credential checks, and the current session.

Invariants:
    - Email is unique across the ledger (exact, case-sensitive compare)
    - Role and email never change after registration
    - The credential never leaves the store: every returned account is an AccountProfile
    - Every mutation is durable before it returns; in-memory state is swapped in only
      after the write succeeded, so a failed write leaves the store unchanged
    - Register writes ledger and session in one write_many (no half-registered account)

Design Decisions:
    - Explicit object with injected KeyValueStorage and open/close lifecycle instead of a
      module-level singleton; whatever composes the UI holds the reference
    - Single session per store: one store instance models one browser profile
    - Cross-process edits are last-write-wins on the whole slot; no merge is attempted
"""

import logging
from typing import Any, Callable, Mapping

from pydantic import ValidationError

from hiresphere.core.credentials import (
    DEFAULT_ITERATIONS, hash_password, verify_password,
)
from hiresphere.core.domain_types import AccountId, StorageSlot, new_account_id
from hiresphere.core.errors import (
    DuplicateEmailError, ErrorContext, HireSphereError, InputValidationError,
    InvalidCredentialsError, NotAuthenticatedError, ResourceNotFoundError,
)
from hiresphere.core.repository_protocols import KeyValueStorage
from hiresphere.schemas.account import (
    AccountCreate, AccountProfile, AccountRecord, ProfileUpdate,
)
from hiresphere.schemas.snapshot import (
    dump_items, dump_session, load_accounts, load_session,
)
from hiresphere.schemas.validation import parse_input, validation_failure

logger = logging.getLogger(__name__)

DEFAULT_KEY_PREFIX = "hiresphere_"


class IdentityStore:
    """Owns accounts and the session. Leaf component: depends only on storage."""

    def __init__(
        self,
        storage: KeyValueStorage,
        key_prefix: str = DEFAULT_KEY_PREFIX,
        password_iterations: int = DEFAULT_ITERATIONS,
        id_factory: Callable[[], AccountId] = new_account_id,
    ):
        self._storage = storage
        self._ledger_key = StorageSlot.ACCOUNTS.key(key_prefix)
        self._session_key = StorageSlot.SESSION.key(key_prefix)
        self._iterations = password_iterations
        self._new_id = id_factory
        self._accounts: list[AccountRecord] = []
        self._session: AccountProfile | None = None
        self._is_open = False

    # ─── Lifecycle ───────────────────────────────────────────────

    @property
    def is_open(self) -> bool:
        return self._is_open

    def open(self) -> None:
        """Hydrate ledger and session from storage. Raises SnapshotCorruptError."""
        accounts: list[AccountRecord] = []
        raw = self._storage.read(self._ledger_key)
        if raw is not None:
            accounts, migrated = load_accounts(
                self._ledger_key, raw, self._hash,
            )
            if migrated:
                self._storage.write(self._ledger_key, dump_items(accounts))
                logger.info(
                    "Migrated legacy account ledger",
                    extra={"slot": self._ledger_key},
                )

        session = self._hydrate_session(accounts)
        self._accounts = accounts
        self._session = session
        self._is_open = True
        logger.info(
            f"IdentityStore opened: {len(accounts)} account(s), "
            f"session={'yes' if session else 'no'}",
            extra={"account_id": session.id if session else None},
        )

    def close(self) -> None:
        self._is_open = False
        self._accounts = []
        self._session = None

    def __enter__(self) -> "IdentityStore":
        self.open()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ─── Reads ───────────────────────────────────────────────────

    def current_session(self) -> AccountProfile | None:
        self._ensure_open()
        return self._session.model_copy(deep=True) if self._session else None

    def get_account(self, account_id: str) -> AccountProfile:
        """Public profile lookup, e.g. an employer viewing an applicant."""
        self._ensure_open()
        record = self._find_by_id(account_id)
        if record is None:
            raise _rejected(
                ResourceNotFoundError("Account", account_id), "get_account",
            )
        return record.to_profile()

    # ─── Mutations ───────────────────────────────────────────────

    def register(
        self, profile: AccountCreate | Mapping[str, Any], password: str,
    ) -> AccountProfile:
        """Create an account and log it in."""
        self._ensure_open()
        data = parse_input(AccountCreate, profile)
        if not password:
            raise InputValidationError(
                "Invalid AccountCreate",
                errors=[{
                    "field": "password", "message": "password is required",
                    "type": "missing",
                }],
            )
        if any(a.email == data.email for a in self._accounts):
            logger.warning(
                "Registration rejected: email taken",
                extra={"error_code": "DUPLICATE_EMAIL", "operation": "register"},
            )
            raise DuplicateEmailError(data.email)

        record = AccountRecord(
            **data.model_dump(), id=self._new_id(),
            password_hash=self._hash(password),
        )
        session = record.to_profile()
        accounts = [*self._accounts, record]
        self._storage.write_many({
            self._ledger_key: dump_items(accounts),
            self._session_key: dump_session(session),
        })
        self._accounts = accounts
        self._session = session
        logger.info(
            f"Account registered as {record.role.value}",
            extra={"account_id": record.id, "operation": "register"},
        )
        return session.model_copy(deep=True)

    def login(self, email: str, password: str) -> AccountProfile:
        """Start a session. Email is stripped the same way registration strips it."""
        self._ensure_open()
        email = email.strip()
        record = next((a for a in self._accounts if a.email == email), None)
        if record is None or not verify_password(password, record.password_hash):
            logger.warning(
                "Login rejected",
                extra={"error_code": "INVALID_CREDENTIALS", "operation": "login"},
            )
            raise InvalidCredentialsError()

        session = record.to_profile()
        self._storage.write(self._session_key, dump_session(session))
        self._session = session
        logger.info("Logged in", extra={"account_id": record.id, "operation": "login"})
        return session.model_copy(deep=True)

    def logout(self) -> None:
        """Clear the session. Always succeeds, even with no session."""
        self._ensure_open()
        account_id = self._session.id if self._session else None
        self._storage.delete(self._session_key)
        self._session = None
        logger.info("Logged out", extra={"account_id": account_id, "operation": "logout"})

    def update_profile(
        self, changes: ProfileUpdate | Mapping[str, Any],
    ) -> AccountProfile:
        """Merge explicitly-set fields into the current account."""
        self._ensure_open()
        if self._session is None:
            raise _rejected(NotAuthenticatedError("update_profile"), "update_profile")
        update = parse_input(ProfileUpdate, changes)
        index, record = self._index_of(self._session.id)
        if record is None:
            raise _rejected(
                ResourceNotFoundError(
                    "Account", self._session.id,
                    ErrorContext(account_id=self._session.id, operation="update_profile"),
                ),
                "update_profile",
            )

        try:
            merged = AccountRecord.model_validate({
                **record.model_dump(), **update.model_dump(exclude_unset=True),
            })
        except ValidationError as e:
            raise validation_failure("ProfileUpdate", e) from e

        session = merged.to_profile()
        accounts = list(self._accounts)
        accounts[index] = merged
        self._storage.write_many({
            self._ledger_key: dump_items(accounts),
            self._session_key: dump_session(session),
        })
        self._accounts = accounts
        self._session = session
        logger.info(
            "Profile updated",
            extra={"account_id": merged.id, "operation": "update_profile"},
        )
        return session.model_copy(deep=True)

    # ─── Internals ───────────────────────────────────────────────

    def _hydrate_session(
        self, accounts: list[AccountRecord],
    ) -> AccountProfile | None:
        raw = self._storage.read(self._session_key)
        if raw is None:
            return None
        session, migrated = load_session(self._session_key, raw)
        if not any(a.id == session.id for a in accounts):
            logger.warning(
                "Dropping persisted session for unknown account",
                extra={"account_id": session.id, "slot": self._session_key},
            )
            self._storage.delete(self._session_key)
            return None
        if migrated:
            self._storage.write(self._session_key, dump_session(session))
        return session

    def _find_by_id(self, account_id: str) -> AccountRecord | None:
        return self._index_of(account_id)[1]

    def _index_of(self, account_id: str) -> tuple[int, AccountRecord | None]:
        for i, account in enumerate(self._accounts):
            if account.id == account_id:
                return i, account
        return -1, None

    def _hash(self, password: str) -> str:
        return hash_password(password, self._iterations)

    def _ensure_open(self) -> None:
        if not self._is_open:
            raise RuntimeError("IdentityStore is not open")


def _rejected(error: HireSphereError, operation: str) -> HireSphereError:
    logger.warning(
        f"{operation} rejected: {error.message}",
        extra={
            "account_id": error.context.account_id, "error_code": error.code,
            "operation": operation,
        },
    )
    return error
