"""Password hashing utilities.

Learn: Uses bcrypt for secure password hashing. bcrypt automatically
handles salting and is resistant to rainbow table attacks.
The work factor (BLOGAPI_BCRYPT_ROUNDS, default 12) takes ~100ms per
hash on modern hardware, which is why callers in async code run these
functions through asyncio.to_thread.

Hashing is an explicit step of registration (AuthService.register),
not a side effect of saving a User row.
"""

from typing import Optional

import bcrypt

from blogapi.config import settings


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """Hash a password with bcrypt.

    Learn: bcrypt includes a random salt automatically and produces
    hashes starting with "$2b$". Passwords are truncated to 72 bytes
    (bcrypt's limit).
    """
    pw_bytes = password.encode("utf-8")[:72]
    salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
    return bcrypt.hashpw(pw_bytes, salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a candidate password against a stored bcrypt hash.

    A corrupt or non-bcrypt hash is a mismatch, not an error.
    """
    try:
        pw_bytes = password.encode("utf-8")[:72]
        hash_bytes = password_hash.encode("utf-8")
        return bcrypt.checkpw(pw_bytes, hash_bytes)
    except (ValueError, TypeError):
        return False
