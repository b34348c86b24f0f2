"""Authentication service for business logic."""

import sqlite3
import uuid

from common.logging_config import get_logger
from storenode.auth import generate_api_key, hash_password, verify_password
from storenode.exceptions import InvalidCredentialsError
from storenode.repositories.user_repository import StoreUser, UserRepository

logger = get_logger(__name__)


class AuthService:
    def __init__(self):
        self.user_repo = UserRepository()

    def create_user(self, username: str, password: str) -> StoreUser:
        logger.info(f"Creating store user: {username}")
        return self.user_repo.add_user(str(uuid.uuid4()), username, hash_password(password))

    def ensure_user(self, username: str, password: str) -> None:
        """
        Create the bootstrap user if it does not exist yet.
        """
        if self.user_repo.find_credentials(username) is not None:
            return
        try:
            self.create_user(username, password)
        except sqlite3.IntegrityError:
            logger.info(f"Bootstrap user already created concurrently: {username}")

    def login_user(self, username: str, password: str) -> str:
        logger.info(f"Login attempt for user: {username}")
        user = self.user_repo.find_credentials(username)
        if user is None:
            logger.warning(f"Login failed: username '{username}' not found")
            raise InvalidCredentialsError("Invalid username or password")

        if not verify_password(password, user.password_hash):
            logger.warning(f"Login failed: invalid password for username '{username}'")
            raise InvalidCredentialsError("Invalid username or password")

        api_key = generate_api_key()
        self.user_repo.issue_api_key(user.user_id, api_key)
        logger.info(f"Login successful for user: {username}")
        return api_key
