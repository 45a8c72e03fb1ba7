"""User repository for database operations."""

from datetime import UTC, datetime

from app.models.user import UserDB
from app.repositories.base import BaseRepository


class UserRepository(BaseRepository[UserDB]):
    """Repository for User database operations."""

    model = UserDB
    id_field = "uuid"

    async def create(self, email: str, username: str, password_hash: str) -> UserDB:
        """
        Create a new user in the database.

        Args:
            email: Email address
            username: Username
            password_hash: Hash of the user's password

        Returns:
            UserDB: Created user database model

        Raises:
            DuplicateEntryError: If username or email already exists
        """
        return await self._add_and_refresh(
            UserDB(email=email, username=username, password_hash=password_hash),
        )

    async def get_by_username(self, username: str) -> UserDB | None:
        return await self.get_by_field("username", username)

    async def get_by_email(self, email: str) -> UserDB | None:
        return await self.get_by_field("email", email)

    async def update_password_hash(self, user: UserDB, password_hash: str) -> UserDB:
        """Store an upgraded hash produced on login."""
        user.password_hash = password_hash
        user.updated_at = datetime.now(tz=UTC)
        return await self._add_and_refresh(user)
