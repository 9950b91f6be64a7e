"""
Folder Model.

Folders form a per-user tree through parent_id.
"""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from cloudnotes.backend.models.base import Base, OwnedMixin, TimestampMixin, UUIDMixin


class Folder(UUIDMixin, TimestampMixin, OwnedMixin, Base):
    """Folder database model. A NULL parent_id places the folder at the root."""

    __tablename__ = "folders"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    parent_id: Mapped[str | None] = mapped_column(
        ForeignKey("folders.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    is_system: Mapped[bool] = mapped_column(
        default=False,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Folder(id={self.id}, name={self.name!r}, parent_id={self.parent_id})>"
