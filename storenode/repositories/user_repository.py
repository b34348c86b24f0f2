"""Store user credentials and session keys."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from common.logging_config import get_logger
from storenode.database import get_db_connection

logger = get_logger(__name__)


@dataclass(frozen=True)
class StoreUser:
    """Credentials checked at login."""
    user_id: str
    username: str
    password_hash: str


class UserRepository:
    """
    Only what the login flow needs: add a user, look up its password hash,
    issue a session key and resolve a presented key to its user.
    """

    @staticmethod
    def add_user(user_id: str, username: str, password_hash: str) -> StoreUser:
        logger.debug(f"Adding store user: {username} [user_id={user_id}]")
        with get_db_connection() as conn:
            conn.execute(
                "INSERT INTO users (user_id, username, password_hash, created_at) VALUES (?, ?, ?, ?)",
                (user_id, username, password_hash, datetime.utcnow().isoformat())
            )
            conn.commit()
        return StoreUser(user_id=user_id, username=username, password_hash=password_hash)

    @staticmethod
    def find_credentials(username: str) -> Optional[StoreUser]:
        with get_db_connection() as conn:
            row = conn.execute(
                "SELECT user_id, username, password_hash FROM users WHERE username = ?",
                (username,)
            ).fetchone()
        if row is None:
            return None
        return StoreUser(user_id=row["user_id"], username=row["username"], password_hash=row["password_hash"])

    @staticmethod
    def issue_api_key(user_id: str, api_key: str) -> None:
        """Replace the user's session key; the previous key stops resolving."""
        with get_db_connection() as conn:
            conn.execute("UPDATE users SET api_key = ? WHERE user_id = ?", (api_key, user_id))
            conn.commit()
        logger.debug(f"Session key issued [user_id={user_id}]")

    @staticmethod
    def user_id_for_api_key(api_key: str) -> Optional[str]:
        with get_db_connection() as conn:
            row = conn.execute("SELECT user_id FROM users WHERE api_key = ?", (api_key,)).fetchone()
        return None if row is None else row["user_id"]
