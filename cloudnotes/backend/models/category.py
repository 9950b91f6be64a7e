"""
Category Model.

A colored label; each note has at most one category.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from cloudnotes.backend.models.base import Base, OwnedMixin, TimestampMixin, UUIDMixin


class Category(UUIDMixin, TimestampMixin, OwnedMixin, Base):
    """
    Category database model.

    color is always "#rrggbb". sequence orders the user's categories;
    values need not be contiguous. System categories are seeded per user
    and cannot be edited or deleted.
    """

    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )
    color: Mapped[str] = mapped_column(
        String(7),
        nullable=False,
    )
    is_system: Mapped[bool] = mapped_column(
        default=False,
        nullable=False,
    )
    sequence: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name={self.name!r}, color={self.color})>"
