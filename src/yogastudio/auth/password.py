"""Password hashing utilities.

bcrypt salts automatically and produces hashes starting with "$2b$".
The work factor comes from settings (12 by default, lower in tests).
Passwords are truncated to 72 bytes, bcrypt's input limit.
"""

import bcrypt

from yogastudio.config import settings


def hash_password(password: str) -> str:
    """Hash a password with bcrypt."""
    pw_bytes = password.encode("utf-8")[:72]
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(pw_bytes, salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plaintext password against a stored bcrypt hash."""
    try:
        pw_bytes = password.encode("utf-8")[:72]
        return bcrypt.checkpw(pw_bytes, password_hash.encode("utf-8"))
    except (ValueError, TypeError):
        return False
