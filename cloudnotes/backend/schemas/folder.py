"""
Folder Schemas.

Pydantic schemas for folder API request/response validation.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cloudnotes.backend.schemas.base import strip_name


class FolderCreate(BaseModel):
    """Schema for creating a folder."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Folder name",
        examples=["Projects"],
    )
    parent_id: str | None = Field(
        default=None,
        description="Parent folder; null for the root",
    )

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        return strip_name(value)


class FolderUpdate(BaseModel):
    """Schema for renaming or moving a folder. An explicit null parent_id moves it to the root."""

    name: str | None = Field(
        default=None,
        min_length=1,
        max_length=255,
        description="New name",
    )
    parent_id: str | None = Field(
        default=None,
        description="New parent folder",
    )

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str | None) -> str | None:
        return strip_name(value)


class FolderResponse(BaseModel):
    """Schema for folder in API responses."""

    id: str = Field(description="Folder unique identifier")
    name: str = Field(description="Folder name")
    parent_id: str | None = Field(description="Parent folder")
    is_system: bool = Field(description="Seeded folder that cannot be changed")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)


class FolderTreeNode(FolderResponse):
    """A folder with its nested sub-folders."""

    children: list["FolderTreeNode"] = Field(default_factory=list)
