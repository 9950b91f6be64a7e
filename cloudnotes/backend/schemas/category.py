"""
Category Schemas.

Pydantic schemas for category API request/response validation.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cloudnotes.backend.schemas.base import strip_name

HEX_COLOR = r"^#[0-9a-fA-F]{6}$"


class CategoryCreate(BaseModel):
    """Schema for creating a category. The color is generated when omitted."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Category name, unique per user ignoring case",
        examples=["Recipes"],
    )
    color: str | None = Field(
        default=None,
        pattern=HEX_COLOR,
        description="Color as #rrggbb",
        examples=["#3b82f6"],
    )

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str | None) -> str | None:
        return strip_name(value)


class CategoryUpdate(BaseModel):
    """Schema for renaming or recoloring a category."""

    name: str | None = Field(
        default=None,
        min_length=1,
        max_length=100,
        description="New name",
    )
    color: str | None = Field(
        default=None,
        pattern=HEX_COLOR,
        description="New color as #rrggbb",
    )

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str | None) -> str | None:
        return strip_name(value)


class CategoryResponse(BaseModel):
    """Schema for category in API responses."""

    id: str = Field(description="Category unique identifier")
    name: str = Field(description="Category name")
    color: str = Field(description="Color as #rrggbb")
    is_system: bool = Field(description="Seeded category that cannot be changed")
    sequence: int = Field(description="Position in the user's category list")
    notes_count: int = Field(default=0, description="Notes in the category, trash excluded")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)


class CategoryOrder(BaseModel):
    """New display order of categories."""

    category_ids: list[str] = Field(
        ...,
        min_length=1,
        description="Category IDs in the desired order",
    )


class ColorResponse(BaseModel):
    """A generated category color."""

    color: str = Field(description="Color as #rrggbb", examples=["#2fd07a"])
