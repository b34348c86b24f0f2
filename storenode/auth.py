"""Authentication and security utilities."""

import uuid
from typing import Optional

import bcrypt
from fastapi import Header

from storenode import config
from storenode.exceptions import InvalidAPIKeyError
from storenode.repositories.user_repository import UserRepository


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password to hash

    Returns:
        Bcrypt hash of the password
    """
    password_bytes = password.encode('utf-8')
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(password_bytes, salt)
    return hashed.decode('utf-8')


def verify_password(password: str, password_hash: str) -> bool:
    """
    Verify a password against a bcrypt hash.

    Args:
        password: Plain text password to verify
        password_hash: Bcrypt hash to verify against

    Returns:
        True if password matches hash, False otherwise
    """
    password_bytes = password.encode('utf-8')
    hash_bytes = password_hash.encode('utf-8')
    return bcrypt.checkpw(password_bytes, hash_bytes)


def generate_api_key() -> str:
    """
    Generate a new API Key with the configured prefix.

    Returns:
        API Key string in format: {prefix}{uuid4}
    """
    return f"{config.API_KEY_PREFIX}{uuid.uuid4()}"


async def get_current_user(authorization: Optional[str] = Header(None)) -> Optional[str]:
    """
    FastAPI dependency resolving the caller from a Bearer API Key.

    Anonymous access is allowed unless STORE_AUTH_REQUIRED is set. A header
    that is present is always validated.

    Returns:
        user_id of the authenticated user, or None for anonymous callers

    Raises:
        InvalidAPIKeyError: If the key is malformed or unknown, or missing while required
    """
    if authorization is None:
        if config.AUTH_REQUIRED:
            raise InvalidAPIKeyError("Authentication required")
        return None

    if not authorization.startswith("Bearer "):
        raise InvalidAPIKeyError("Invalid authorization header format")

    api_key = authorization[len("Bearer "):]
    user_id = UserRepository.user_id_for_api_key(api_key)
    if user_id is None:
        raise InvalidAPIKeyError("Invalid API key")
    return user_id
