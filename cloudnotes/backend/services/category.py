"""
Category Service.

Business logic for categories: unique names, generated colors, display
order, and protection of system categories.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from cloudnotes.backend.core.colors import ColorAssigner
from cloudnotes.backend.core.exceptions import (
    ConflictError,
    SystemResourceError,
    ValidationError,
)
from cloudnotes.backend.models.category import Category
from cloudnotes.backend.repositories.category import CategoryRepository
from cloudnotes.backend.repositories.note import NoteRepository
from cloudnotes.backend.schemas.category import CategoryCreate, CategoryUpdate
from cloudnotes.backend.services.base import BaseService


class CategoryService(BaseService):
    """
    Service for category business logic.

    Colors are generated by the given ColorAssigner so that a new
    category stands apart from the user's existing ones.
    """

    def __init__(
        self,
        session: AsyncSession,
        user_id: str,
        color_assigner: ColorAssigner | None = None,
    ) -> None:
        super().__init__(session, user_id)
        self.repo = CategoryRepository(session, user_id)
        self.note_repo = NoteRepository(session, user_id)
        self.color_assigner = color_assigner or ColorAssigner()

    async def list_categories(self) -> list[tuple[Category, int]]:
        """All categories in display order, each with its notes count."""
        return await self.repo.list_with_note_counts()

    async def get_category(self, category_id: str) -> Category:
        """
        Get a category by ID.

        Raises:
            NotFoundError: If category not found
        """
        return await self.repo.get_by_id(category_id)

    async def count_notes(self, category_id: str) -> int:
        return await self.repo.count_notes(category_id)

    async def generate_color(self) -> str:
        """A color distinct from the user's current category colors. Nothing is saved."""
        colors = await self.repo.colors()
        color = self.color_assigner.assign(colors)
        self._log_debug("Generated category color", color=color, existing=len(colors))
        return color

    async def _ensure_name_available(self, name: str, exclude_id: str | None = None) -> None:
        existing = await self.repo.get_by_name(name)
        if existing is not None and existing.id != exclude_id:
            raise ConflictError(f"Category '{name}' already exists")

    async def create_category(self, data: CategoryCreate) -> Category:
        """
        Create a category at the end of the user's list.

        Raises:
            ConflictError: If a category with the same name exists
        """
        name = data.name.strip()
        await self._ensure_name_available(name)

        color = data.color.lower() if data.color else await self.generate_color()
        max_sequence = await self.repo.max_sequence()
        sequence = 0 if max_sequence is None else max_sequence + 1

        self._log_operation("Creating category", name=name, color=color)

        return await self._execute_db_operation(
            "create_category",
            self.repo.create(name=name, color=color, sequence=sequence),
        )

    async def update_category(self, category_id: str, data: CategoryUpdate) -> Category:
        """
        Rename or recolor a category.

        Raises:
            NotFoundError: If category not found
            SystemResourceError: If the category is a system category
            ConflictError: If the new name is taken
        """
        category = await self.repo.get_by_id(category_id)
        if category.is_system:
            raise SystemResourceError("System categories cannot be modified")

        update_data = {
            key: value
            for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None
        }
        if not update_data:
            return category

        if "name" in update_data:
            update_data["name"] = update_data["name"].strip()
            await self._ensure_name_available(update_data["name"], exclude_id=category.id)
        if "color" in update_data:
            update_data["color"] = update_data["color"].lower()

        self._log_operation(
            "Updating category",
            category_id=category_id,
            fields=list(update_data.keys()),
        )

        return await self._execute_db_operation(
            "update_category",
            self.repo.update(category_id, **update_data),
        )

    async def delete_category(self, category_id: str) -> None:
        """
        Delete a category; its notes are kept without a category.

        Raises:
            NotFoundError: If category not found
            SystemResourceError: If the category is a system category
        """
        category = await self.repo.get_by_id(category_id)
        if category.is_system:
            raise SystemResourceError("System categories cannot be deleted")

        self._log_operation("Deleting category", category_id=category_id)

        await self._execute_db_operation(
            "detach_category",
            self.note_repo.detach_category(category.id),
        )
        await self._execute_db_operation(
            "delete_category",
            self.repo.delete(category.id),
        )

    async def reorder_categories(self, category_ids: list[str]) -> list[tuple[Category, int]]:
        """
        Give the listed categories sequence 0..n-1 in the given order.

        Raises:
            ValidationError: If an ID repeats or is not one of the user's categories
        """
        if len(set(category_ids)) != len(category_ids):
            raise ValidationError(
                "Category IDs must be unique",
                details={"category_ids": category_ids},
            )

        found = {category.id: category for category in await self.repo.get_many(category_ids)}
        unknown = [category_id for category_id in category_ids if category_id not in found]
        if unknown:
            raise ValidationError("Unknown categories", details={"unknown_ids": unknown})

        self._log_operation("Reordering categories", count=len(category_ids))

        for sequence, category_id in enumerate(category_ids):
            found[category_id].sequence = sequence
        await self._execute_db_operation("reorder_categories", self.session.flush())

        return await self.repo.list_with_note_counts()
