"""
Password hashing and session token helpers.
"""

import hashlib
import hmac
import secrets

from app.core.config import settings

SALT_BYTES = 16
HASH_BYTES = 64
SESSION_TOKEN_BYTES = 32


def generate_salt() -> str:
    """Generate a random per-user salt (hex encoded)."""
    return secrets.token_hex(SALT_BYTES)


def get_password_hash(password: str, salt: str) -> str:
    """Derive a PBKDF2-HMAC-SHA512 hash of the password with the given salt."""
    digest = hashlib.pbkdf2_hmac(
        "sha512",
        password.encode("utf-8"),
        salt.encode("utf-8"),
        settings.PASSWORD_HASH_ITERATIONS,
        dklen=HASH_BYTES,
    )
    return digest.hex()


def verify_password(password: str, salt: str, hashed_password: str) -> bool:
    """Check a plain password against a stored hash in constant time."""
    return hmac.compare_digest(get_password_hash(password, salt), hashed_password)


def generate_session_token() -> str:
    """Mint an opaque session token."""
    return secrets.token_hex(SESSION_TOKEN_BYTES)
