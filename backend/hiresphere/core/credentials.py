"""Credential Hashing — PBKDF2 password hashes for the account ledger.

Invariants:
    - Plaintext passwords never leave this module's callers' stack frames
    - Encoded form: pbkdf2_sha256$<iterations>$<salt hex>$<hash hex>
    - verify_password uses a constant-time compare

Design Decisions:
    - hashlib.pbkdf2_hmac: stdlib, no native build dependency
    - Iterations stored in the hash so the default can be raised without breaking old accounts
"""

import hashlib
import hmac
import secrets

ALGORITHM = "pbkdf2_sha256"
DEFAULT_ITERATIONS = 260_000
_SALT_BYTES = 16


def hash_password(password: str, iterations: int = DEFAULT_ITERATIONS) -> str:
    salt = secrets.token_hex(_SALT_BYTES)
    digest = _derive(password, salt, iterations)
    return f"{ALGORITHM}${iterations}${salt}${digest}"


def verify_password(password: str, encoded: str) -> bool:
    """True if password matches the encoded hash. Malformed hashes never match."""
    try:
        algorithm, iterations, salt, expected = encoded.split("$")
        if algorithm != ALGORITHM:
            return False
        actual = _derive(password, salt, int(iterations))
    except ValueError:
        return False
    return hmac.compare_digest(actual, expected)


def is_password_hash(value: str) -> bool:
    return value.startswith(f"{ALGORITHM}$") and value.count("$") == 3


def _derive(password: str, salt: str, iterations: int) -> str:
    return hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), bytes.fromhex(salt), iterations,
    ).hex()
