"""
Password hashing with bcrypt.

bcrypt only looks at the first 72 bytes of its input, so longer passwords are
pre-hashed with SHA-256 and base64-encoded before hashing.
"""

import base64
import hashlib
import logging
from typing import Optional

import bcrypt

from cinerank.api.config import get_bcrypt_rounds

logger = logging.getLogger(__name__)

BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    password_bytes = password.encode('utf-8')
    if len(password_bytes) > BCRYPT_MAX_BYTES:
        # always 44 bytes
        return base64.b64encode(hashlib.sha256(password_bytes).digest())
    return password_bytes


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password
        rounds: bcrypt work factor (default: BCRYPT_ROUNDS from config)

    Returns:
        The bcrypt hash as text
    """
    salt = bcrypt.gensalt(rounds=rounds or get_bcrypt_rounds())
    return bcrypt.hashpw(_password_bytes(password), salt).decode('utf-8')


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Check a password against a stored bcrypt hash.

    The comparison inside bcrypt is constant-time. A malformed stored hash
    never matches.
    """
    try:
        return bcrypt.checkpw(
            _password_bytes(plain_password),
            hashed_password.encode('utf-8'),
        )
    except ValueError:
        logger.warning("Stored password hash is not a valid bcrypt hash")
        return False
