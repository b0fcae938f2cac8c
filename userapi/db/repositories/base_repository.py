"""
Base repository - generic soft-delete aware CRUD (SOLID: Interface Segregation, Dependency Inversion).
Challenge: Consistent data access, testability, one place that hides deleted rows.
"""

from datetime import datetime, timezone
from typing import Generic, TypeVar

from sqlalchemy import Select, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from userapi.core.errors import ConflictError, NotFoundError
from userapi.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Generic async repository. Every read excludes soft-deleted rows; every write commits."""

    def __init__(self, session: AsyncSession, model: type[ModelType]):
        self.session = session
        self.model = model

    def _live(self) -> Select:
        return select(self.model).where(self.model.deleted_at.is_(None))

    async def list_all(self) -> list[ModelType]:
        """All live rows in datastore order (no ORDER BY)."""
        result = await self.session.execute(self._live())
        return list(result.scalars().all())

    async def get_by_id(self, id: int) -> ModelType:
        """Fetch single live entity by primary key. Raises NotFoundError."""
        result = await self.session.execute(self._live().where(self.model.id == id))
        entity = result.scalar_one_or_none()
        if entity is None:
            raise NotFoundError(f"{self.model.__name__} not found")
        return entity

    async def add(self, entity: ModelType) -> ModelType:
        """Persist new entity; the datastore assigns the id."""
        self.session.add(entity)
        await self._commit()
        return entity

    async def soft_delete(self, id: int) -> None:
        """Mark the row deleted. Later reads no longer see it."""
        entity = await self.get_by_id(id)
        entity.deleted_at = datetime.now(timezone.utc)
        await self._commit()

    async def _commit(self) -> None:
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError(f"{self.model.__name__} already exists") from e
