"""
Base Repository.

Common CRUD operations for user-owned models. Every query is scoped to
the user the repository was created for; rows of other users behave as
if they did not exist.
"""

from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from cloudnotes.backend.core.exceptions import NotFoundError
from cloudnotes.backend.core.logging import get_logger
from cloudnotes.backend.models.base import Base

logger = get_logger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository with user-scoped CRUD operations.

    Subclasses set the model class:

        class FolderRepository(BaseRepository[Folder]):
            model = Folder
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession, user_id: str) -> None:
        self.session = session
        self.user_id = user_id

    def _select(self) -> Select:
        """SELECT of the model restricted to the current user."""
        return select(self.model).where(self.model.user_id == self.user_id)

    async def get_by_id(self, id: str | UUID) -> ModelType:
        """
        Get a single record by ID.

        Raises:
            NotFoundError: If record not found or owned by another user
        """
        instance = await self.get_by_id_or_none(id)
        if instance is None:
            raise NotFoundError(f"{self.model.__name__} not found")
        return instance

    async def get_by_id_or_none(self, id: str | UUID) -> ModelType | None:
        """Get a single record by ID, returning None if not found."""
        result = await self.session.execute(
            self._select().where(self.model.id == str(id))
        )
        return result.scalar_one_or_none()

    async def get_many(self, ids: list[str]) -> list[ModelType]:
        """Get the records among ids that exist for this user."""
        if not ids:
            return []
        result = await self.session.execute(
            self._select().where(self.model.id.in_(ids))
        )
        return list(result.scalars().all())

    async def get_all(self, limit: int = 50, offset: int = 0) -> list[ModelType]:
        """Get all records with pagination."""
        result = await self.session.execute(
            self._select().limit(limit).offset(offset)
        )
        return list(result.scalars().all())

    async def count(self) -> int:
        """Count the user's records."""
        result = await self.session.execute(
            select(func.count())
            .select_from(self.model)
            .where(self.model.user_id == self.user_id)
        )
        return result.scalar_one()

    async def create(self, **kwargs: Any) -> ModelType:
        """Create a new record owned by the current user."""
        instance = self.model(user_id=self.user_id, **kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def update(self, id: str | UUID, **kwargs: Any) -> ModelType:
        """
        Update an existing record.

        Raises:
            NotFoundError: If record not found
        """
        instance = await self.get_by_id(id)

        for key, value in kwargs.items():
            if hasattr(instance, key) and key not in ("id", "user_id"):
                setattr(instance, key, value)

        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def delete(self, id: str | UUID) -> None:
        """
        Delete a record by ID.

        Raises:
            NotFoundError: If record not found
        """
        instance = await self.get_by_id(id)
        await self.session.delete(instance)
        await self.session.flush()

    async def exists(self, id: str | UUID) -> bool:
        """Check if a record exists by ID."""
        result = await self.session.execute(
            select(self.model.id)
            .where(self.model.id == str(id))
            .where(self.model.user_id == self.user_id)
        )
        return result.scalar_one_or_none() is not None
