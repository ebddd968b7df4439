"""Snapshot Codec — versioned, deterministic encoding of the four durable slots.

Invariants:
    - Current envelope: {"schema_version": 1, "items": [...]} ({"schema_version": 1,
      "account": {...}} for the session slot)
    - Version 0 (bare camelCase list/object, plaintext password) is migrated on load
    - Anything else raises SnapshotCorruptError — hydration never guesses a shape
    - dump(load(x)) == x byte-for-byte for every current-version slot
    - Loaded collections keep their uniqueness rules: ids, ledger emails, and one
      application per (job_id, applicant_id); a repeat is SnapshotCorruptError

Design Decisions:
    - Key renames for version 0 kept in per-entity tables (DRY over per-field code)
    - Compact separators, model field order, ensure_ascii=False: deterministic bytes
    - Loaders report `migrated` so the store can rewrite the slot in the current format
"""

import json
from typing import Any, Callable

from pydantic import BaseModel, TypeAdapter, ValidationError

from hiresphere.core.credentials import is_password_hash
from hiresphere.core.errors import SnapshotCorruptError
from hiresphere.schemas.account import AccountProfile, AccountRecord
from hiresphere.schemas.application import Application
from hiresphere.schemas.job import Job

SCHEMA_VERSION = 1
LEGACY_VERSION = 0

_ACCOUNT_KEYS: dict[str, str] = {"about": "bio"}
_JOB_KEYS: dict[str, str] = {
    "postedBy": "owner_id", "postedDate": "created_at", "isActive": "is_active",
}
_APPLICATION_KEYS: dict[str, str] = {
    "jobId": "job_id", "applicantId": "applicant_id",
    "applicantName": "applicant_name", "coverLetter": "cover_letter",
    "appliedDate": "applied_at",
}

_ACCOUNTS = TypeAdapter(list[AccountRecord])
_JOBS = TypeAdapter(list[Job])
_APPLICATIONS = TypeAdapter(list[Application])


# ─── Dump ────────────────────────────────────────────────────────

def dump_items(items: list[BaseModel]) -> str:
    return _encode({
        "schema_version": SCHEMA_VERSION,
        "items": [item.model_dump(mode="json") for item in items],
    })


def dump_session(account: AccountProfile) -> str:
    return _encode({
        "schema_version": SCHEMA_VERSION,
        "account": account.model_dump(mode="json"),
    })


def _encode(payload: dict) -> str:
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))


# ─── Load ────────────────────────────────────────────────────────

def load_accounts(
    slot: str, raw: str, hash_password: Callable[[str], str],
) -> tuple[list[AccountRecord], bool]:
    """Decode the account ledger. Legacy plaintext passwords are hashed."""
    def migrate(item: dict) -> dict:
        item = _rename(item, _ACCOUNT_KEYS)
        password = item.pop("password", None)
        if "password_hash" not in item and isinstance(password, str):
            item["password_hash"] = (
                password if is_password_hash(password) else hash_password(password)
            )
        return item

    version, payload = _unwrap(slot, raw, "items")
    if version == LEGACY_VERSION:
        payload = [migrate(item) for item in _legacy_list(slot, payload)]
    accounts = _validate(slot, _ACCOUNTS, payload)
    _reject_duplicates(slot, "account id", [a.id for a in accounts])
    _reject_duplicates(slot, "email", [a.email for a in accounts])
    return accounts, version == LEGACY_VERSION


def load_jobs(slot: str, raw: str) -> tuple[list[Job], bool]:
    version, payload = _unwrap(slot, raw, "items")
    if version == LEGACY_VERSION:
        payload = [_rename(i, _JOB_KEYS) for i in _legacy_list(slot, payload)]
    jobs = _validate(slot, _JOBS, payload)
    _reject_duplicates(slot, "job id", [j.id for j in jobs])
    return jobs, version == LEGACY_VERSION


def load_applications(slot: str, raw: str) -> tuple[list[Application], bool]:
    version, payload = _unwrap(slot, raw, "items")
    if version == LEGACY_VERSION:
        payload = [
            _rename(i, _APPLICATION_KEYS) for i in _legacy_list(slot, payload)
        ]
    applications = _validate(slot, _APPLICATIONS, payload)
    _reject_duplicates(slot, "application id", [a.id for a in applications])
    _reject_duplicates(
        slot, "application",
        [f"{a.job_id}/{a.applicant_id}" for a in applications],
    )
    return applications, version == LEGACY_VERSION


def load_session(slot: str, raw: str) -> tuple[AccountProfile, bool]:
    version, payload = _unwrap(slot, raw, "account")
    if version == LEGACY_VERSION:
        if not isinstance(payload, dict):
            raise SnapshotCorruptError(slot, "expected an account object")
        payload = _rename(payload, _ACCOUNT_KEYS)
        payload.pop("password", None)
    return _validate(slot, AccountProfile, payload), version == LEGACY_VERSION


# ─── Helpers ─────────────────────────────────────────────────────

def _unwrap(slot: str, raw: str, payload_key: str) -> tuple[int, Any]:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise SnapshotCorruptError(slot, f"invalid JSON ({e.msg})") from e

    if not isinstance(data, dict) or "schema_version" not in data:
        return LEGACY_VERSION, data
    version = data["schema_version"]
    if version != SCHEMA_VERSION:
        raise SnapshotCorruptError(slot, f"unsupported schema_version {version!r}")
    if payload_key not in data:
        raise SnapshotCorruptError(slot, f"missing '{payload_key}'")
    return version, data[payload_key]


def _legacy_list(slot: str, payload: Any) -> list[dict]:
    if not isinstance(payload, list) or not all(isinstance(i, dict) for i in payload):
        raise SnapshotCorruptError(slot, "expected a list of objects")
    return payload


def _reject_duplicates(slot: str, what: str, values: list[str]) -> None:
    """Ledger uniqueness survives a reload: a repeated value is corruption, not data."""
    seen: set[str] = set()
    for value in values:
        if value in seen:
            raise SnapshotCorruptError(slot, f"duplicate {what} {value!r}")
        seen.add(value)


def _rename(item: dict, keys: dict[str, str]) -> dict:
    return {keys.get(k, k): v for k, v in item.items()}


def _validate(slot: str, adapter: Any, payload: Any) -> Any:
    try:
        if isinstance(adapter, TypeAdapter):
            return adapter.validate_python(payload)
        return adapter.model_validate(payload)
    except ValidationError as e:
        first = e.errors()[0]
        where = ".".join(str(loc) for loc in first["loc"]) or "<root>"
        raise SnapshotCorruptError(
            slot, f"{e.error_count()} invalid field(s), first at {where}: {first['msg']}",
        ) from e
