"""
Workspace Service.

Seeds a user's system folders and categories.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from cloudnotes.backend.core.config_schema import DefaultsSchema
from cloudnotes.backend.models.category import Category
from cloudnotes.backend.models.folder import Folder
from cloudnotes.backend.repositories.category import CategoryRepository
from cloudnotes.backend.repositories.folder import FolderRepository
from cloudnotes.backend.services.base import BaseService


class WorkspaceService(BaseService):
    """
    Service preparing a new user's workspace.

    Bootstrapping is idempotent: a system folder is matched by name, and a
    category whose name is already in use (ignoring case) is left as is.
    """

    def __init__(self, session: AsyncSession, user_id: str) -> None:
        super().__init__(session, user_id)
        self.folder_repo = FolderRepository(session, user_id)
        self.category_repo = CategoryRepository(session, user_id)

    async def bootstrap(
        self,
        defaults: DefaultsSchema,
    ) -> tuple[list[Folder], list[Category], int]:
        """
        Create the missing default system folders and categories.

        Returns:
            Tuple of (folders, categories, number created) where folders and
            categories are the entities matching the defaults after seeding
        """
        created = 0

        folders: list[Folder] = []
        for name in defaults.system_folders:
            folder = await self.folder_repo.get_system_by_name(name)
            if folder is None:
                folder = await self._execute_db_operation(
                    "seed_folder",
                    self.folder_repo.create(name=name, is_system=True),
                )
                created += 1
            folders.append(folder)

        categories: list[Category] = []
        for default in defaults.system_categories:
            category = await self.category_repo.get_by_name(default.name)
            if category is None:
                max_sequence = await self.category_repo.max_sequence()
                category = await self._execute_db_operation(
                    "seed_category",
                    self.category_repo.create(
                        name=default.name,
                        color=default.color.lower(),
                        is_system=True,
                        sequence=0 if max_sequence is None else max_sequence + 1,
                    ),
                )
                created += 1
            categories.append(category)

        self._log_operation(
            "Workspace bootstrapped",
            created=created,
            folders=len(folders),
            categories=len(categories),
        )
        return folders, categories, created
