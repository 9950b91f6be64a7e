"""
Note Schemas.

Pydantic schemas for note API request/response validation.
"""

from datetime import date, datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from cloudnotes.backend.core.markdown import MarkdownPreviewRenderer
    from cloudnotes.backend.models.note import Note


class NoteCreate(BaseModel):
    """Schema for creating a new note."""

    title: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Note title",
        examples=["Shopping list"],
    )
    content: str = Field(
        default="",
        description="Markdown content",
        examples=["# Groceries\n* milk\n* **eggs**"],
    )
    folder_id: str | None = Field(
        default=None,
        description="Folder holding the note; null for the root",
    )
    category_id: str | None = Field(
        default=None,
        description="Category of the note",
    )
    tags: list[str] = Field(
        default_factory=list,
        description="Free-form tags",
        examples=[["home", "weekly"]],
    )


class NoteUpdate(BaseModel):
    """
    Schema for updating an existing note.

    Only fields present in the request are changed; an explicit null
    folder_id or category_id clears it.
    """

    title: str | None = Field(
        default=None,
        min_length=1,
        max_length=255,
        description="Note title",
    )
    content: str | None = Field(
        default=None,
        description="Markdown content",
    )
    folder_id: str | None = Field(
        default=None,
        description="Folder holding the note; null for the root",
    )
    category_id: str | None = Field(
        default=None,
        description="Category of the note",
    )
    tags: list[str] | None = Field(
        default=None,
        description="Replacement tag list",
    )
    is_archived: bool | None = Field(
        default=None,
        description="Archive status",
    )


class NoteResponse(BaseModel):
    """Schema for a single note in API responses."""

    id: str = Field(description="Note unique identifier")
    title: str = Field(description="Note title")
    content: str = Field(description="Markdown content")
    preview: str = Field(default="", description="Plain-text snippet of the content")
    folder_id: str | None = Field(description="Folder holding the note")
    category_id: str | None = Field(description="Category of the note")
    tags: list[str] = Field(description="Tags")
    is_archived: bool = Field(description="Whether the note is archived")
    is_deleted: bool = Field(description="Whether the note is in the trash")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_note(cls, note: "Note", renderer: "MarkdownPreviewRenderer") -> "NoteResponse":
        response = cls.model_validate(note)
        response.preview = renderer.preview(note.content)
        return response


class NoteListResponse(BaseModel):
    """Schema for listing notes; carries the preview instead of the content."""

    id: str
    title: str
    preview: str = ""
    folder_id: str | None
    category_id: str | None
    tags: list[str]
    is_archived: bool
    is_deleted: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_note(cls, note: "Note", renderer: "MarkdownPreviewRenderer") -> "NoteListResponse":
        item = cls.model_validate(note)
        item.preview = renderer.preview(note.content)
        return item


class NoteHtmlResponse(BaseModel):
    """Rendered HTML of a note."""

    id: str
    title: str
    html: str


class CalendarCategoryCount(BaseModel):
    """Notes created on a day within one category (null for none)."""

    category_id: str | None
    count: int


class CalendarDay(BaseModel):
    """Notes created on one day of the month."""

    day: date
    count: int
    categories: list[CalendarCategoryCount] = Field(default_factory=list)


class CalendarResponse(BaseModel):
    """Per-day note creation counts for a month; days without notes are omitted."""

    year: int
    month: int
    days: list[CalendarDay]
