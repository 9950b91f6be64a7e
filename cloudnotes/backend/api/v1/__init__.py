"""
API Version 1 Router.

Aggregates all v1 endpoint routers.
"""

from fastapi import APIRouter

from cloudnotes.backend.api.v1.endpoints import categories, folders, markdown, notes, workspace

router = APIRouter()

router.include_router(notes.router, prefix="/notes", tags=["notes"])
router.include_router(categories.router, prefix="/categories", tags=["categories"])
router.include_router(folders.router, prefix="/folders", tags=["folders"])
router.include_router(markdown.router, prefix="/markdown", tags=["markdown"])
router.include_router(workspace.router, prefix="/workspace", tags=["workspace"])
