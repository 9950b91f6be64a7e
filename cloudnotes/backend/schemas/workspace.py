"""
Workspace Schemas.
"""

from pydantic import BaseModel, Field

from cloudnotes.backend.schemas.category import CategoryResponse
from cloudnotes.backend.schemas.folder import FolderResponse


class WorkspaceBootstrapResponse(BaseModel):
    """System folders and categories present after bootstrapping."""

    folders: list[FolderResponse] = Field(default_factory=list)
    categories: list[CategoryResponse] = Field(default_factory=list)
    created: int = Field(default=0, description="Entities created by this call")
