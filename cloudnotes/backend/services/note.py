"""
Note Service.

Business logic layer for notes. Orchestrates repositories,
handles validation, and implements business rules.
"""

from calendar import monthrange
from collections import Counter
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from cloudnotes.backend.core.exceptions import ValidationError
from cloudnotes.backend.core.utils import normalize_tags
from cloudnotes.backend.models.note import Note
from cloudnotes.backend.repositories.category import CategoryRepository
from cloudnotes.backend.repositories.folder import FolderRepository
from cloudnotes.backend.repositories.note import NoteRepository
from cloudnotes.backend.schemas.note import (
    CalendarCategoryCount,
    CalendarDay,
    CalendarResponse,
    NoteCreate,
    NoteUpdate,
)
from cloudnotes.backend.services.base import BaseService

# Columns that cannot be cleared with an explicit null
NON_NULLABLE_FIELDS = ("title", "content", "tags", "is_archived")


class NoteService(BaseService):
    """
    Service for note business logic.

    Handles note creation, updates, the trash and the calendar view.
    Folder and category references must point at the user's own rows.
    """

    def __init__(self, session: AsyncSession, user_id: str) -> None:
        super().__init__(session, user_id)
        self.repo = NoteRepository(session, user_id)
        self.folder_repo = FolderRepository(session, user_id)
        self.category_repo = CategoryRepository(session, user_id)

    async def _check_references(
        self,
        folder_id: str | None = None,
        category_id: str | None = None,
    ) -> None:
        if folder_id is not None and not await self.folder_repo.exists(folder_id):
            raise ValidationError(
                "Folder does not exist",
                details={"folder_id": folder_id},
            )
        if category_id is not None and not await self.category_repo.exists(category_id):
            raise ValidationError(
                "Category does not exist",
                details={"category_id": category_id},
            )

    async def create_note(self, data: NoteCreate) -> Note:
        """
        Create a new note.

        Raises:
            ValidationError: If folder_id or category_id is not the user's
        """
        await self._check_references(data.folder_id, data.category_id)

        self._log_operation("Creating note", title=data.title)

        note = await self._execute_db_operation(
            "create_note",
            self.repo.create(
                title=data.title,
                content=data.content or "",
                folder_id=data.folder_id,
                category_id=data.category_id,
                tags=normalize_tags(data.tags),
            ),
        )

        self._log_debug("Note created", note_id=note.id)
        return note

    async def get_note(self, note_id: str) -> Note:
        """
        Get a note by ID, including notes in the trash.

        Raises:
            NotFoundError: If note not found
        """
        return await self.repo.get_by_id(note_id)

    async def list_notes_paginated(
        self,
        folder_id: str | None = None,
        root_only: bool = False,
        category_id: str | None = None,
        include_archived: bool = False,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Note], int]:
        """
        List notes with total count for pagination.

        Returns:
            Tuple of (notes list, total count)
        """
        filters = {
            "folder_id": folder_id,
            "root_only": root_only,
            "category_id": category_id,
            "include_archived": include_archived,
        }
        notes = await self.repo.list_filtered(**filters, limit=limit, offset=offset)
        total = await self.repo.count_filtered(**filters)
        return notes, total

    async def list_trash(self, limit: int = 20, offset: int = 0) -> tuple[list[Note], int]:
        """Soft-deleted notes with total count."""
        notes = await self.repo.list_deleted(limit=limit, offset=offset)
        total = await self.repo.count_deleted()
        return notes, total

    async def search_notes(self, query: str, limit: int = 50) -> list[Note]:
        """
        Search notes by title or content.

        A blank query matches nothing.
        """
        query = query.strip()
        if not query:
            return []
        self._log_debug("Searching notes", query=query)
        return await self.repo.search(query, limit=limit)

    async def update_note(self, note_id: str, data: NoteUpdate) -> Note:
        """
        Update an existing note.

        Args:
            note_id: Note ID to update
            data: Update data; only fields sent by the client are applied

        Raises:
            NotFoundError: If note not found
            ValidationError: If a new folder_id or category_id is not the user's
        """
        update_data = data.model_dump(exclude_unset=True)
        for field in NON_NULLABLE_FIELDS:
            if field in update_data and update_data[field] is None:
                del update_data[field]

        if not update_data:
            return await self.repo.get_by_id(note_id)

        await self.repo.get_by_id(note_id)
        await self._check_references(
            update_data.get("folder_id"),
            update_data.get("category_id"),
        )
        if "tags" in update_data:
            update_data["tags"] = normalize_tags(update_data["tags"])

        self._log_operation(
            "Updating note",
            note_id=note_id,
            fields=list(update_data.keys()),
        )

        return await self._execute_db_operation(
            "update_note",
            self.repo.update(note_id, **update_data),
        )

    async def delete_note(self, note_id: str) -> Note:
        """
        Move a note to the trash.

        Raises:
            NotFoundError: If note not found
        """
        self._log_operation("Moving note to trash", note_id=note_id)
        return await self._execute_db_operation(
            "soft_delete_note",
            self.repo.soft_delete(note_id),
        )

    async def restore_note(self, note_id: str) -> Note:
        """
        Restore a note from the trash.

        Raises:
            NotFoundError: If note not found
        """
        self._log_operation("Restoring note", note_id=note_id)
        return await self._execute_db_operation(
            "restore_note",
            self.repo.restore(note_id),
        )

    async def delete_note_permanently(self, note_id: str) -> None:
        """
        Delete a note for good.

        Raises:
            NotFoundError: If note not found
        """
        self._log_operation("Deleting note permanently", note_id=note_id)
        await self._execute_db_operation(
            "delete_note",
            self.repo.delete(note_id),
        )

    async def archive_note(self, note_id: str) -> Note:
        """
        Archive a note.

        Raises:
            NotFoundError: If note not found
        """
        self._log_operation("Archiving note", note_id=note_id)
        return await self.repo.archive(note_id)

    async def unarchive_note(self, note_id: str) -> Note:
        """
        Unarchive a note.

        Raises:
            NotFoundError: If note not found
        """
        self._log_operation("Unarchiving note", note_id=note_id)
        return await self.repo.unarchive(note_id)

    async def calendar(self, year: int, month: int) -> CalendarResponse:
        """
        Per-day counts of notes created in a month, with a per-category breakdown.

        Days without notes are left out; days are in date order and each
        day's categories in order of first appearance.
        """
        if not 1 <= month <= 12:
            raise ValidationError("Month must be between 1 and 12", details={"month": month})

        start = datetime(year, month, 1)
        last_day = monthrange(year, month)[1]
        end = datetime(year, month, last_day, 23, 59, 59, 999999)
        notes = await self.repo.created_between(start, end)

        by_day: dict = {}
        for note in notes:
            by_day.setdefault(note.created_at.date(), Counter())[note.category_id] += 1

        days = [
            CalendarDay(
                day=day,
                count=sum(counts.values()),
                categories=[
                    CalendarCategoryCount(category_id=category_id, count=count)
                    for category_id, count in counts.items()
                ],
            )
            for day, counts in sorted(by_day.items())
        ]
        return CalendarResponse(year=year, month=month, days=days)
