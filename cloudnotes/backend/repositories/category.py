"""
Category Repository.

Data access layer for categories.
"""

from sqlalchemy import and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from cloudnotes.backend.models.category import Category
from cloudnotes.backend.models.note import Note
from cloudnotes.backend.repositories.base import BaseRepository


class CategoryRepository(BaseRepository[Category]):
    """Repository for Category model."""

    model = Category

    def __init__(self, session: AsyncSession, user_id: str) -> None:
        super().__init__(session, user_id)

    async def list_with_note_counts(self) -> list[tuple[Category, int]]:
        """
        Categories in display order with the number of notes using each.

        Notes in the trash are not counted.
        """
        result = await self.session.execute(
            select(Category, func.count(Note.id))
            .outerjoin(
                Note,
                and_(
                    Note.category_id == Category.id,
                    Note.is_deleted == False,  # noqa: E712
                ),
            )
            .where(Category.user_id == self.user_id)
            .group_by(Category.id)
            .order_by(Category.sequence, Category.name)
        )
        return [(category, count) for category, count in result.all()]

    async def count_notes(self, category_id: str) -> int:
        """Number of notes (outside the trash) in a category."""
        result = await self.session.execute(
            select(func.count())
            .select_from(Note)
            .where(Note.user_id == self.user_id)
            .where(Note.category_id == category_id)
            .where(Note.is_deleted == False)  # noqa: E712
        )
        return result.scalar_one()

    async def colors(self) -> list[str]:
        """Colors currently used by the user's categories."""
        result = await self.session.execute(
            select(Category.color).where(Category.user_id == self.user_id)
        )
        return list(result.scalars().all())

    async def get_by_name(self, name: str) -> Category | None:
        """Find a category by name, ignoring case."""
        result = await self.session.execute(
            self._select().where(func.lower(Category.name) == name.lower())
        )
        return result.scalars().first()

    async def max_sequence(self) -> int | None:
        """Highest sequence in use, or None when the user has no categories."""
        result = await self.session.execute(
            select(func.max(Category.sequence)).where(Category.user_id == self.user_id)
        )
        return result.scalar_one_or_none()
