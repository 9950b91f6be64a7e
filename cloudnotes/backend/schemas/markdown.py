"""
Markdown Schemas.

Request/response schemas for the Markdown preview endpoint.
"""

from typing import Literal

from pydantic import BaseModel, Field


class MarkdownRenderRequest(BaseModel):
    """Markdown to render."""

    content: str | None = Field(
        default="",
        description="Markdown source",
        examples=["# Title\nSome **bold** text"],
    )
    mode: Literal["html", "text"] = Field(
        default="html",
        description="html for the editor preview, text for a list snippet",
    )
    limit: int | None = Field(
        default=None,
        ge=0,
        description="Maximum length of text output; defaults to the preview length",
    )


class MarkdownRenderResponse(BaseModel):
    """Rendered output."""

    mode: Literal["html", "text"]
    output: str
