"""
User repository - encapsulates all user data access (SOLID: Single Responsibility).
Challenge: Keep queries in one place so the storage engine stays swappable.
"""

from userapi.db.models.user import User
from userapi.db.repositories.base_repository import BaseRepository


class UserRepository(BaseRepository[User]):
    """User-specific writes on top of the base live-row CRUD."""

    def __init__(self, session):
        super().__init__(session, User)

    async def update(self, id: int, name: str, email: str) -> User:
        """Overwrite name and email only. Password and id never change here."""
        user = await self.get_by_id(id)
        user.name = name
        user.email = email
        await self._commit()
        return user
