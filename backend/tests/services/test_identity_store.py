"""Identity Store — registration, login/logout, profile updates, and hydration.

Invariants:
    - Duplicate emails rejected (case-sensitive, as stored)
    - Credential never exposed through current_session() or the session slot
    - Every successful mutation is in storage when the call returns
    - A persisted session is restored on open() only if its account still exists
"""

import json
import logging

import pytest

from hiresphere.core.domain_types import Role
from hiresphere.core.errors import (
    DuplicateEmailError, InputValidationError, InvalidCredentialsError,
    NotAuthenticatedError, ResourceNotFoundError, SnapshotCorruptError, StorageError,
)
from hiresphere.services.identity_store import IdentityStore

from factories import (
    FailingStorage, employer_profile, jobseeker_profile, make_identity,
)

USERS = "hiresphere_users"
SESSION = "hiresphere_user"


# -- Register ------------------------------------------------------------------

def test_register_creates_account_and_session(identity, storage):
    profile = identity.register(employer_profile(), "pw")

    assert profile.id.startswith("user_")
    assert profile.role == Role.EMPLOYER
    assert identity.current_session() == profile
    assert len(json.loads(storage.data[USERS])["items"]) == 1
    assert json.loads(storage.data[SESSION])["account"]["id"] == profile.id


def test_register_duplicate_email_fails(identity, storage):
    identity.register(employer_profile("e@x.com"), "pw")
    ledger_before = storage.data[USERS]

    with pytest.raises(DuplicateEmailError):
        identity.register(jobseeker_profile("e@x.com"), "other")
    assert storage.data[USERS] == ledger_before


def test_register_email_compare_is_case_sensitive(identity):
    identity.register(employer_profile("e@x.com"), "pw")
    second = identity.register(employer_profile("E@x.com"), "pw")
    assert second.email == "E@x.com"


def test_register_requires_password(identity):
    with pytest.raises(InputValidationError):
        identity.register(employer_profile(), "")


def test_register_rejects_role_mismatched_fields(identity, storage):
    with pytest.raises(InputValidationError):
        identity.register({**jobseeker_profile(), "company": "Acme"}, "pw")
    assert USERS not in storage.data


def test_credential_never_exposed(identity, storage):
    profile = identity.register(employer_profile(), "hunter2")

    assert "password_hash" not in profile.model_dump()
    assert "password_hash" not in storage.data[SESSION]
    assert "hunter2" not in storage.data[USERS]


# -- Login / logout ------------------------------------------------------------

def test_login_with_correct_password(identity):
    registered = identity.register(employer_profile(), "pw")
    identity.logout()

    profile = identity.login("e@x.com", "pw")
    assert profile == registered
    assert identity.current_session() == registered


@pytest.mark.parametrize("email, password", [
    ("e@x.com", "wrong"),
    ("nobody@x.com", "pw"),
    ("E@X.COM", "pw"),
])
def test_login_failures_are_invalid_credentials(identity, email, password):
    identity.register(employer_profile("e@x.com"), "pw")
    identity.logout()

    with pytest.raises(InvalidCredentialsError):
        identity.login(email, password)
    assert identity.current_session() is None


def test_logout_clears_session_and_slot(identity, storage):
    identity.register(employer_profile(), "pw")
    identity.logout()

    assert identity.current_session() is None
    assert SESSION not in storage.data


def test_logout_without_session_succeeds(identity):
    identity.logout()
    assert identity.current_session() is None


# -- Update profile ------------------------------------------------------------

def test_update_profile_requires_session(identity):
    with pytest.raises(NotAuthenticatedError):
        identity.update_profile({"name": "X"})


def test_update_profile_rejection_is_logged(identity, caplog):
    with caplog.at_level(logging.WARNING), pytest.raises(NotAuthenticatedError):
        identity.update_profile({"name": "X"})

    record = next(r for r in caplog.records if r.levelno == logging.WARNING)
    assert record.error_code == "NOT_AUTHENTICATED"
    assert record.operation == "update_profile"


def test_get_missing_account_is_logged(identity, caplog):
    with caplog.at_level(logging.WARNING), pytest.raises(ResourceNotFoundError):
        identity.get_account("user_missing")
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert [r.error_code for r in warnings] == ["RESOURCE_NOT_FOUND"]


def test_update_profile_merges_and_persists(identity, storage):
    profile = identity.register(jobseeker_profile(), "pw")

    updated = identity.update_profile({"bio": "Hello", "skills": ["rust"]})

    assert updated.bio == "Hello"
    assert updated.skills == ["rust"]
    assert updated.title == "Developer"
    assert identity.current_session() == updated
    ledger = json.loads(storage.data[USERS])["items"][0]
    assert ledger["bio"] == "Hello"
    assert ledger["password_hash"]
    assert json.loads(storage.data[SESSION])["account"]["skills"] == ["rust"]
    assert updated.id == profile.id


def test_update_profile_cannot_change_email_or_role(identity):
    identity.register(jobseeker_profile("s@x.com"), "pw")

    updated = identity.update_profile(
        {"email": "new@x.com", "role": "employer", "name": "Renamed"},
    )

    assert updated.email == "s@x.com"
    assert updated.role == Role.JOBSEEKER
    assert updated.name == "Renamed"


def test_update_profile_rejects_role_mismatched_field(identity):
    identity.register(jobseeker_profile(), "pw")
    with pytest.raises(InputValidationError):
        identity.update_profile({"company": "Acme"})
    assert identity.current_session().company is None


def test_login_strips_email_like_registration(identity):
    registered = identity.register(employer_profile(" e@x.com "), "pw")
    identity.logout()

    assert registered.email == "e@x.com"
    assert identity.login(" e@x.com ", "pw") == registered
    identity.logout()
    assert identity.login("e@x.com\t", "pw") == registered


def test_login_works_after_profile_change(identity):
    identity.register(employer_profile(), "pw")
    identity.update_profile({"name": "New Name"})
    identity.logout()
    assert identity.login("e@x.com", "pw").name == "New Name"


# -- Reads ---------------------------------------------------------------------

def test_current_session_returns_copy(identity):
    identity.register(jobseeker_profile(), "pw")
    identity.current_session().skills.append("mutated")
    assert "mutated" not in identity.current_session().skills


def test_get_account(identity):
    registered = identity.register(employer_profile(), "pw")
    assert identity.get_account(registered.id) == registered
    with pytest.raises(ResourceNotFoundError):
        identity.get_account("user_missing")


# -- Lifecycle & hydration -----------------------------------------------------

def test_operations_require_open_store(storage):
    store = IdentityStore(storage)
    with pytest.raises(RuntimeError, match="not open"):
        store.current_session()


def test_session_restored_on_reopen(identity, storage):
    profile = identity.register(employer_profile(), "pw")
    identity.close()

    reopened = make_identity(storage)
    assert reopened.current_session() == profile
    reopened.logout()
    assert reopened.login("e@x.com", "pw") == profile


def test_stale_session_is_dropped(storage):
    storage.data[SESSION] = json.dumps({
        "schema_version": 1,
        "account": {
            "id": "user_gone", "name": "Ghost", "email": "g@x.com",
            "role": "employer",
        },
    })
    store = make_identity(storage)
    assert store.current_session() is None
    assert SESSION not in storage.data


def test_legacy_ledger_migrated_on_open(storage):
    storage.data[USERS] = json.dumps([{
        "id": "user_1", "name": "Ann", "email": "a@x.com",
        "role": "employer", "company": "Acme", "password": "legacy-pw",
    }])
    storage.data[SESSION] = json.dumps({
        "id": "user_1", "name": "Ann", "email": "a@x.com",
        "role": "employer", "company": "Acme",
    })

    store = make_identity(storage)

    assert store.current_session().id == "user_1"
    assert json.loads(storage.data[USERS])["schema_version"] == 1
    assert json.loads(storage.data[SESSION])["schema_version"] == 1
    assert "legacy-pw" not in storage.data[USERS]
    store.logout()
    assert store.login("a@x.com", "legacy-pw").company == "Acme"


def test_ledger_with_repeated_email_refuses_to_open(storage):
    account = {
        "name": "Ann", "email": "e@x.com", "role": "employer",
        "password_hash": "pbkdf2_sha256$1000$00$00",
    }
    storage.data[USERS] = json.dumps({
        "schema_version": 1,
        "items": [{**account, "id": "user_1"}, {**account, "id": "user_2"}],
    })

    store = IdentityStore(storage)
    with pytest.raises(SnapshotCorruptError, match="duplicate email"):
        store.open()
    assert not store.is_open


def test_context_manager_opens_and_closes(storage):
    with IdentityStore(storage, password_iterations=1_000) as store:
        assert store.is_open
        store.register(employer_profile(), "pw")
    assert not store.is_open


# -- Failed writes -------------------------------------------------------------

def test_failed_write_leaves_state_unchanged():
    storage = FailingStorage()
    store = make_identity(storage)
    storage.fail_writes = True

    with pytest.raises(StorageError):
        store.register(employer_profile(), "pw")

    assert store.current_session() is None
    storage.fail_writes = False
    store.register(employer_profile(), "pw")
    assert store.current_session().email == "e@x.com"
