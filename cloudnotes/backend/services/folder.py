"""
Folder Service.

Business logic for the folder tree.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from cloudnotes.backend.core.exceptions import SystemResourceError, ValidationError
from cloudnotes.backend.models.folder import Folder
from cloudnotes.backend.repositories.folder import FolderRepository
from cloudnotes.backend.repositories.note import NoteRepository
from cloudnotes.backend.schemas.folder import FolderCreate, FolderTreeNode, FolderUpdate
from cloudnotes.backend.services.base import BaseService


class FolderService(BaseService):
    """
    Service for folder business logic.

    Keeps the tree acyclic and never loses notes: deleting a folder
    hands its sub-folders and notes to its parent.
    """

    def __init__(self, session: AsyncSession, user_id: str) -> None:
        super().__init__(session, user_id)
        self.repo = FolderRepository(session, user_id)
        self.note_repo = NoteRepository(session, user_id)

    async def list_folders(self) -> list[Folder]:
        return await self.repo.list_ordered()

    async def get_tree(self) -> list[FolderTreeNode]:
        """
        The user's folders as a forest of nested nodes, siblings by name.

        A folder whose parent cannot be found is shown at the root.
        """
        folders = await self.repo.list_ordered()
        nodes = {folder.id: FolderTreeNode.model_validate(folder) for folder in folders}

        roots: list[FolderTreeNode] = []
        for folder in folders:
            node = nodes[folder.id]
            parent = nodes.get(folder.parent_id) if folder.parent_id else None
            if parent is None:
                roots.append(node)
            else:
                parent.children.append(node)
        return roots

    async def get_folder(self, folder_id: str) -> Folder:
        """
        Get a folder by ID.

        Raises:
            NotFoundError: If folder not found
        """
        return await self.repo.get_by_id(folder_id)

    async def _ensure_parent(self, parent_id: str) -> None:
        if not await self.repo.exists(parent_id):
            raise ValidationError(
                "Parent folder does not exist",
                details={"parent_id": parent_id},
            )

    async def create_folder(self, data: FolderCreate) -> Folder:
        """
        Create a folder.

        Raises:
            ValidationError: If the parent is not one of the user's folders
        """
        if data.parent_id is not None:
            await self._ensure_parent(data.parent_id)

        self._log_operation("Creating folder", name=data.name, parent_id=data.parent_id)

        return await self._execute_db_operation(
            "create_folder",
            self.repo.create(name=data.name, parent_id=data.parent_id),
        )

    async def update_folder(self, folder_id: str, data: FolderUpdate) -> Folder:
        """
        Rename and/or move a folder.

        Raises:
            NotFoundError: If folder not found
            SystemResourceError: If the folder is a system folder
            ValidationError: If the move would put the folder inside itself
        """
        folder = await self.repo.get_by_id(folder_id)
        if folder.is_system:
            raise SystemResourceError("System folders cannot be modified")

        update_data = data.model_dump(exclude_unset=True)
        if update_data.get("name") is None:
            update_data.pop("name", None)
        if not update_data:
            return folder

        parent_id = update_data.get("parent_id")
        if parent_id is not None:
            await self._ensure_parent(parent_id)
            if folder.id in await self.repo.ancestor_ids(parent_id):
                raise ValidationError(
                    "A folder cannot be moved into itself or one of its sub-folders",
                    details={"parent_id": parent_id},
                )

        self._log_operation(
            "Updating folder",
            folder_id=folder_id,
            fields=list(update_data.keys()),
        )

        return await self._execute_db_operation(
            "update_folder",
            self.repo.update(folder_id, **update_data),
        )

    async def delete_folder(self, folder_id: str) -> None:
        """
        Delete a folder, moving its sub-folders and notes to its parent.

        Raises:
            NotFoundError: If folder not found
            SystemResourceError: If the folder is a system folder
        """
        folder = await self.repo.get_by_id(folder_id)
        if folder.is_system:
            raise SystemResourceError("System folders cannot be deleted")

        self._log_operation(
            "Deleting folder",
            folder_id=folder_id,
            new_parent_id=folder.parent_id,
        )

        await self._execute_db_operation(
            "reparent_folders",
            self.repo.reparent_children(folder.id, folder.parent_id),
        )
        await self._execute_db_operation(
            "reparent_notes",
            self.note_repo.move_folder_contents(folder.id, folder.parent_id),
        )
        await self._execute_db_operation(
            "delete_folder",
            self.repo.delete(folder.id),
        )
