"""
Folders API Endpoints.

REST API endpoints for the folder tree.
"""

from fastapi import APIRouter

from cloudnotes.backend.core.dependencies import CurrentUserId, DbSession, RequestId
from cloudnotes.backend.schemas.base import ApiResponse
from cloudnotes.backend.schemas.folder import (
    FolderCreate,
    FolderResponse,
    FolderTreeNode,
    FolderUpdate,
)
from cloudnotes.backend.services.folder import FolderService

router = APIRouter()


@router.get(
    "",
    response_model=ApiResponse[list[FolderResponse]],
    summary="List folders",
    description="All folders as a flat list ordered by name.",
)
async def list_folders(
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
) -> ApiResponse[list[FolderResponse]]:
    service = FolderService(db, user_id)
    folders = await service.list_folders()
    return ApiResponse(data=[FolderResponse.model_validate(folder) for folder in folders])


@router.get(
    "/tree",
    response_model=ApiResponse[list[FolderTreeNode]],
    summary="Folder tree",
    description="All folders nested under their parents.",
)
async def get_folder_tree(
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
) -> ApiResponse[list[FolderTreeNode]]:
    service = FolderService(db, user_id)
    return ApiResponse(data=await service.get_tree())


@router.post(
    "",
    response_model=ApiResponse[FolderResponse],
    status_code=201,
    summary="Create a folder",
)
async def create_folder(
    data: FolderCreate,
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
) -> ApiResponse[FolderResponse]:
    """Create a new folder."""
    service = FolderService(db, user_id)
    folder = await service.create_folder(data)
    return ApiResponse(data=FolderResponse.model_validate(folder))


@router.get(
    "/{folder_id}",
    response_model=ApiResponse[FolderResponse],
    summary="Get a folder",
)
async def get_folder(
    folder_id: str,
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
) -> ApiResponse[FolderResponse]:
    service = FolderService(db, user_id)
    folder = await service.get_folder(folder_id)
    return ApiResponse(data=FolderResponse.model_validate(folder))


@router.patch(
    "/{folder_id}",
    response_model=ApiResponse[FolderResponse],
    summary="Update a folder",
    description="Rename or move a folder. System folders cannot be changed.",
)
async def update_folder(
    folder_id: str,
    data: FolderUpdate,
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
) -> ApiResponse[FolderResponse]:
    service = FolderService(db, user_id)
    folder = await service.update_folder(folder_id, data)
    return ApiResponse(data=FolderResponse.model_validate(folder))


@router.delete(
    "/{folder_id}",
    status_code=204,
    summary="Delete a folder",
    description="Delete a folder. Its sub-folders and notes move to its parent.",
)
async def delete_folder(
    folder_id: str,
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
) -> None:
    service = FolderService(db, user_id)
    await service.delete_folder(folder_id)
