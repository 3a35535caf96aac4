"""
Password hashing.

bcrypt salts every hash and compares in constant time. Inputs are cut to
72 bytes because bcrypt ignores everything past that.
"""

import bcrypt

from shared.config import get_settings

_BCRYPT_MAX_BYTES = 72


def hash_password(password: str, rounds: int | None = None) -> str:
    """Hash a plaintext password for storage."""
    if rounds is None:
        rounds = get_settings().bcrypt_rounds
    password_bytes = password.encode("utf-8")[:_BCRYPT_MAX_BYTES]
    hashed = bcrypt.hashpw(password_bytes, bcrypt.gensalt(rounds=rounds))
    return hashed.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plaintext password against a stored hash."""
    if not password or not password_hash:
        return False
    password_bytes = password.encode("utf-8")[:_BCRYPT_MAX_BYTES]
    try:
        return bcrypt.checkpw(password_bytes, password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False
