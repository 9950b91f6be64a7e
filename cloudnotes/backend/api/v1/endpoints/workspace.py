"""
Workspace API Endpoints.
"""

from fastapi import APIRouter

from cloudnotes.backend.core.config import get_app_config
from cloudnotes.backend.core.dependencies import CurrentUserId, DbSession, RequestId
from cloudnotes.backend.core.exceptions import AuthorizationError
from cloudnotes.backend.schemas.base import ApiResponse
from cloudnotes.backend.schemas.category import CategoryResponse
from cloudnotes.backend.schemas.folder import FolderResponse
from cloudnotes.backend.schemas.workspace import WorkspaceBootstrapResponse
from cloudnotes.backend.services.workspace import WorkspaceService

router = APIRouter()


@router.post(
    "/bootstrap",
    response_model=ApiResponse[WorkspaceBootstrapResponse],
    summary="Bootstrap workspace",
    description="Create the default system folders and categories. Safe to call repeatedly.",
)
async def bootstrap_workspace(
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
) -> ApiResponse[WorkspaceBootstrapResponse]:
    app_config = get_app_config()
    if not app_config.features.workspace_bootstrap_enabled:
        raise AuthorizationError("Workspace bootstrap is disabled", code="AUTHZ_FEATURE_DISABLED")

    service = WorkspaceService(db, user_id)
    folders, categories, created = await service.bootstrap(app_config.notes.defaults)
    return ApiResponse(
        data=WorkspaceBootstrapResponse(
            folders=[FolderResponse.model_validate(folder) for folder in folders],
            categories=[CategoryResponse.model_validate(category) for category in categories],
            created=created,
        )
    )
