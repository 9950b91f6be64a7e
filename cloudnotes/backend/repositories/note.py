"""
Note Repository.

Data access layer for notes. Handles all database operations
for the Note model.
"""

from datetime import datetime

from sqlalchemy import Select, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from cloudnotes.backend.models.note import Note
from cloudnotes.backend.repositories.base import BaseRepository


class NoteRepository(BaseRepository[Note]):
    """
    Repository for Note model.

    Inherits user-scoped CRUD from BaseRepository. Every listing except
    the trash excludes soft-deleted notes.
    """

    model = Note

    def __init__(self, session: AsyncSession, user_id: str) -> None:
        super().__init__(session, user_id)

    def _filtered(
        self,
        folder_id: str | None = None,
        root_only: bool = False,
        category_id: str | None = None,
        include_archived: bool = False,
    ) -> Select:
        stmt = self._select().where(Note.is_deleted == False)  # noqa: E712
        if not include_archived:
            stmt = stmt.where(Note.is_archived == False)  # noqa: E712
        if root_only:
            stmt = stmt.where(Note.folder_id.is_(None))
        elif folder_id is not None:
            stmt = stmt.where(Note.folder_id == folder_id)
        if category_id is not None:
            stmt = stmt.where(Note.category_id == category_id)
        return stmt

    async def list_filtered(
        self,
        folder_id: str | None = None,
        root_only: bool = False,
        category_id: str | None = None,
        include_archived: bool = False,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Note]:
        """
        Get notes matching the filters, most recently updated first.

        Args:
            folder_id: Only notes directly in this folder
            root_only: Only notes outside any folder (overrides folder_id)
            category_id: Only notes in this category
            include_archived: Include archived notes
            limit: Maximum number of notes to return
            offset: Number of notes to skip
        """
        stmt = self._filtered(folder_id, root_only, category_id, include_archived)
        result = await self.session.execute(
            stmt.order_by(Note.updated_at.desc(), Note.id).limit(limit).offset(offset)
        )
        return list(result.scalars().all())

    async def count_filtered(
        self,
        folder_id: str | None = None,
        root_only: bool = False,
        category_id: str | None = None,
        include_archived: bool = False,
    ) -> int:
        """Count notes matching the same filters as list_filtered."""
        stmt = self._filtered(folder_id, root_only, category_id, include_archived)
        result = await self.session.execute(
            select(func.count()).select_from(stmt.subquery())
        )
        return result.scalar_one()

    async def search(self, query: str, limit: int = 50) -> list[Note]:
        """
        Search notes by title or content (case-insensitive).

        Archived and deleted notes are never returned.
        """
        escaped = query.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        pattern = f"%{escaped}%"
        result = await self.session.execute(
            self._select()
            .where(Note.is_deleted == False)  # noqa: E712
            .where(Note.is_archived == False)  # noqa: E712
            .where(
                or_(
                    func.lower(Note.title).like(pattern, escape="\\"),
                    func.lower(Note.content).like(pattern, escape="\\"),
                )
            )
            .order_by(Note.updated_at.desc(), Note.id)
            .limit(limit)
        )
        return list(result.scalars().all())

    async def list_deleted(self, limit: int = 20, offset: int = 0) -> list[Note]:
        """Notes in the trash, most recently updated first."""
        result = await self.session.execute(
            self._select()
            .where(Note.is_deleted == True)  # noqa: E712
            .order_by(Note.updated_at.desc(), Note.id)
            .limit(limit)
            .offset(offset)
        )
        return list(result.scalars().all())

    async def count_deleted(self) -> int:
        """Number of notes in the trash."""
        result = await self.session.execute(
            select(func.count())
            .select_from(Note)
            .where(Note.user_id == self.user_id)
            .where(Note.is_deleted == True)  # noqa: E712
        )
        return result.scalar_one()

    async def created_between(self, start: datetime, end: datetime) -> list[Note]:
        """Notes outside the trash created in [start, end], both bounds inclusive."""
        result = await self.session.execute(
            self._select()
            .where(Note.is_deleted == False)  # noqa: E712
            .where(Note.created_at >= start)
            .where(Note.created_at <= end)
            .order_by(Note.created_at)
        )
        return list(result.scalars().all())

    async def archive(self, id: str) -> Note:
        """
        Archive a note.

        Raises:
            NotFoundError: If note not found
        """
        return await self.update(id, is_archived=True)

    async def unarchive(self, id: str) -> Note:
        """
        Unarchive a note.

        Raises:
            NotFoundError: If note not found
        """
        return await self.update(id, is_archived=False)

    async def soft_delete(self, id: str) -> Note:
        """Move a note to the trash."""
        return await self.update(id, is_deleted=True)

    async def restore(self, id: str) -> Note:
        """Take a note back out of the trash."""
        return await self.update(id, is_deleted=False)

    async def detach_category(self, category_id: str) -> None:
        """Clear category_id on every note of the user in the category."""
        await self.session.execute(
            update(Note)
            .where(Note.user_id == self.user_id)
            .where(Note.category_id == category_id)
            .values(category_id=None)
            .execution_options(synchronize_session="fetch")
        )

    async def move_folder_contents(self, folder_id: str, new_folder_id: str | None) -> None:
        """Move every note directly in folder_id to new_folder_id."""
        await self.session.execute(
            update(Note)
            .where(Note.user_id == self.user_id)
            .where(Note.folder_id == folder_id)
            .values(folder_id=new_folder_id)
            .execution_options(synchronize_session="fetch")
        )
