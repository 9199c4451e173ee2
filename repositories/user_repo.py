"""
repositories/user_repo.py
--------------------------
Data access layer for user records.
"""

from uuid import UUID

from db.errors import NotFoundError
from models.user import User
from repositories.base import BaseRepository
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = """
    user_uuid, hashed_password, active, first_name, last_name,
    email_address, created_at, updated_at
"""


class UserRepository(BaseRepository):
    """Repository for CRUD operations on the users table."""

    # ── CREATE ────────────────────────────────────────────

    def create_user(self, user: User) -> User:
        """
        Insert a new user.

        Args:
            user: The User to persist. `id` and timestamps are ignored.

        Returns:
            The persisted User with its generated `id` and timestamps.
        """
        sql = f"""
            INSERT INTO wdiet.users (hashed_password, active, first_name, last_name, email_address)
            VALUES (%s, %s, %s, %s, %s)
            RETURNING {_COLUMNS};
        """
        with self._transaction("create user") as tx:
            tx.execute(sql, (
                user.hashed_password, user.active, user.first_name,
                user.last_name, user.email_address,
            ))
            created = self._row_to_user(tx.fetchone())
        logger.info(f"Created user {created.id}")
        return created

    # ── READ ──────────────────────────────────────────────

    def get_user(self, user_id: UUID) -> User:
        """
        Fetch a user by ID.

        Raises:
            NotFoundError: No user has this ID.
        """
        sql = f"SELECT {_COLUMNS} FROM wdiet.users WHERE user_uuid = %s LIMIT 1;"
        with self._transaction("get user") as tx:
            row = tx.execute(sql, (user_id,)).fetchone()
            if row is None:
                raise NotFoundError("get user")
            return self._row_to_user(row)

    def get_user_by_email(self, email_address: str) -> User:
        """
        Fetch a user by login address.

        Raises:
            NotFoundError: No user has this address.
        """
        sql = f"SELECT {_COLUMNS} FROM wdiet.users WHERE email_address = %s LIMIT 1;"
        with self._transaction("get user by email") as tx:
            row = tx.execute(sql, (email_address,)).fetchone()
            if row is None:
                raise NotFoundError("get user by email")
            return self._row_to_user(row)

    # ── UPDATE ────────────────────────────────────────────

    def update_user(self, user: User) -> User:
        """
        Update a user's profile fields. The credential hash is left untouched.

        Raises:
            NotFoundError: No user has `user.id`.
        """
        sql = f"""
            UPDATE wdiet.users
            SET active = %s, first_name = %s, last_name = %s, email_address = %s
            WHERE user_uuid = %s
            RETURNING {_COLUMNS};
        """
        with self._transaction("update user") as tx:
            tx.execute(sql, (
                user.active, user.first_name, user.last_name,
                user.email_address, user.id,
            ))
            tx.expect_rowcount(1)
            return self._row_to_user(tx.fetchone())

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_user(row: tuple) -> User:
        """Convert a database row tuple to a User domain object."""
        return User(
            id=row[0],
            hashed_password=row[1],
            active=row[2],
            first_name=row[3],
            last_name=row[4],
            email_address=row[5],
            created_at=row[6],
            updated_at=row[7],
        )
