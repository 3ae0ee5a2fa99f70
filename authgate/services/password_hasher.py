"""PBKDF2 password hashing helpers."""

import base64
import binascii
import functools
import hashlib
import hmac
import secrets
from typing import Optional, Tuple

ALGORITHM = "pbkdf2_sha256"
DEFAULT_ITERATIONS = 480_000
SALT_BYTES = 16


def hash_password(password: str, iterations: Optional[int] = None, salt: Optional[bytes] = None) -> str:
    """Return ``pbkdf2_sha256$<iterations>$<salt>$<hash>`` for the password."""

    iterations = iterations or DEFAULT_ITERATIONS
    if iterations < 0:
        raise ValueError("iterations must be a positive integer")
    salt = salt if salt is not None else secrets.token_bytes(SALT_BYTES)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return "$".join(
        (
            ALGORITHM,
            str(iterations),
            base64.b64encode(salt).decode("ascii"),
            base64.b64encode(digest).decode("ascii"),
        )
    )


@functools.lru_cache(maxsize=8)
def dummy_hash(iterations: int = DEFAULT_ITERATIONS) -> str:
    """Return a fixed hash to check against when no account matched."""

    return hash_password("", iterations=iterations, salt=bytes(SALT_BYTES))


def verify_password(password: str, encoded: Optional[str]) -> bool:
    """Check ``password`` against an encoded hash in constant time.

    Malformed or empty hashes never match.
    """

    parsed = _parse(encoded)
    if parsed is None:
        return False
    iterations, salt, stored_hash = parsed
    computed_hash = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return hmac.compare_digest(stored_hash, computed_hash)


def _parse(encoded: Optional[str]) -> Optional[Tuple[int, bytes, bytes]]:
    if not encoded:
        return None
    parts = encoded.split("$")
    if len(parts) != 4 or parts[0] != ALGORITHM:
        return None
    try:
        iterations = int(parts[1])
        salt = base64.b64decode(parts[2], validate=True)
        stored_hash = base64.b64decode(parts[3], validate=True)
    except (ValueError, binascii.Error):
        return None
    if iterations <= 0 or not stored_hash:
        return None
    return iterations, salt, stored_hash
