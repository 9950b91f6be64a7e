"""
FastAPI Dependencies.

Shared dependencies for request handling.
"""

import uuid
from functools import lru_cache
from typing import Annotated

import structlog
from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from cloudnotes.backend.core.colors import ColorAssigner
from cloudnotes.backend.core.config import get_app_config
from cloudnotes.backend.core.database import get_db_session
from cloudnotes.backend.core.exceptions import AuthenticationError
from cloudnotes.backend.core.logging import get_logger
from cloudnotes.backend.core.markdown import MarkdownPreviewRenderer
from cloudnotes.backend.core.security import user_id_from_token

logger = get_logger(__name__)

DbSession = Annotated[AsyncSession, Depends(get_db_session)]


async def get_request_id(x_request_id: str | None = Header(None)) -> str:
    """Extract or generate request ID from headers."""
    return x_request_id or str(uuid.uuid4())


RequestId = Annotated[str, Depends(get_request_id)]


async def get_current_user_id(
    request: Request,
    authorization: str | None = Header(None),
) -> str:
    """
    Resolve the authenticated user from the Authorization header.

    Raises:
        AuthenticationError: If the header is missing, malformed or the token is invalid
    """
    if not authorization:
        raise AuthenticationError("Authentication required")

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError("Bearer token required")

    user_id = user_id_from_token(token.strip())
    request.state.user_id = user_id
    structlog.contextvars.bind_contextvars(user_id=user_id)
    return user_id


CurrentUserId = Annotated[str, Depends(get_current_user_id)]


@lru_cache
def get_markdown_renderer() -> MarkdownPreviewRenderer:
    """Renderer configured from features.yaml and notes.yaml."""
    app_config = get_app_config()
    preview = app_config.notes.preview
    return MarkdownPreviewRenderer(
        escape_html=app_config.features.markdown_escape_html,
        preview_length=preview.length,
        ellipsis=preview.ellipsis,
    )


MarkdownRenderer = Annotated[MarkdownPreviewRenderer, Depends(get_markdown_renderer)]


@lru_cache
def get_color_assigner() -> ColorAssigner:
    """Color assigner configured from notes.yaml."""
    colors = get_app_config().notes.colors
    return ColorAssigner(
        min_separation=colors.min_separation,
        separation_floor=colors.separation_floor,
        attempts_per_round=colors.attempts_per_round,
        relaxation_rounds=colors.relaxation_rounds,
        saturation_range=colors.saturation_range,
        lightness_range=colors.lightness_range,
    )


ColorAssignerDep = Annotated[ColorAssigner, Depends(get_color_assigner)]
