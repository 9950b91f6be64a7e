"""
Markdown API Endpoints.

Live preview rendering for the note editor.
"""

from fastapi import APIRouter

from cloudnotes.backend.core.dependencies import CurrentUserId, MarkdownRenderer, RequestId
from cloudnotes.backend.schemas.base import ApiResponse
from cloudnotes.backend.schemas.markdown import MarkdownRenderRequest, MarkdownRenderResponse

router = APIRouter()


@router.post(
    "/render",
    response_model=ApiResponse[MarkdownRenderResponse],
    summary="Render Markdown",
    description="Render Markdown as HTML or as a plain-text snippet.",
)
async def render_markdown(
    data: MarkdownRenderRequest,
    user_id: CurrentUserId,
    renderer: MarkdownRenderer,
    request_id: RequestId,
) -> ApiResponse[MarkdownRenderResponse]:
    if data.mode == "html":
        output = renderer.to_html(data.content)
    else:
        output = renderer.to_plain_text(data.content, limit=data.limit)
    return ApiResponse(data=MarkdownRenderResponse(mode=data.mode, output=output))
