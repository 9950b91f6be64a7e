"""
Folder Repository.

Data access layer for the folder tree.
"""

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from cloudnotes.backend.models.folder import Folder
from cloudnotes.backend.repositories.base import BaseRepository


class FolderRepository(BaseRepository[Folder]):
    """Repository for Folder model."""

    model = Folder

    def __init__(self, session: AsyncSession, user_id: str) -> None:
        super().__init__(session, user_id)

    async def list_ordered(self) -> list[Folder]:
        """All of the user's folders ordered by name."""
        result = await self.session.execute(
            self._select().order_by(Folder.name)
        )
        return list(result.scalars().all())

    async def get_system_by_name(self, name: str) -> Folder | None:
        """Find a seeded system folder by name."""
        result = await self.session.execute(
            self._select()
            .where(Folder.is_system == True)  # noqa: E712
            .where(Folder.name == name)
        )
        return result.scalars().first()

    async def ancestor_ids(self, folder_id: str) -> list[str]:
        """
        IDs on the path from folder_id up to the root, folder_id included.

        Stops if a loop is met so corrupted data cannot hang the walk.
        """
        path: list[str] = []
        current: str | None = folder_id
        while current is not None and current not in path:
            path.append(current)
            folder = await self.get_by_id_or_none(current)
            current = folder.parent_id if folder is not None else None
        return path

    async def reparent_children(self, folder_id: str, new_parent_id: str | None) -> None:
        """Move every direct sub-folder of folder_id under new_parent_id."""
        await self.session.execute(
            update(Folder)
            .where(Folder.user_id == self.user_id)
            .where(Folder.parent_id == folder_id)
            .values(parent_id=new_parent_id)
            .execution_options(synchronize_session="fetch")
        )
