"""
Notes API Endpoints.

REST API endpoints for note management.
"""

from typing import Any

from fastapi import APIRouter, Depends, Query

from cloudnotes.backend.core.dependencies import (
    CurrentUserId,
    DbSession,
    MarkdownRenderer,
    RequestId,
)
from cloudnotes.backend.core.pagination import (
    PaginationParams,
    create_paginated_response,
    get_pagination_params,
)
from cloudnotes.backend.schemas.base import ApiResponse
from cloudnotes.backend.schemas.note import (
    CalendarResponse,
    NoteCreate,
    NoteHtmlResponse,
    NoteListResponse,
    NoteResponse,
    NoteUpdate,
)
from cloudnotes.backend.services.note import NoteService

router = APIRouter()


@router.post(
    "",
    response_model=ApiResponse[NoteResponse],
    status_code=201,
    summary="Create a note",
    description="Create a new note, optionally in a folder and category.",
)
async def create_note(
    data: NoteCreate,
    db: DbSession,
    user_id: CurrentUserId,
    renderer: MarkdownRenderer,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Create a new note."""
    service = NoteService(db, user_id)
    note = await service.create_note(data)
    return ApiResponse(data=NoteResponse.from_note(note, renderer))


@router.get(
    "",
    summary="List notes (paginated)",
    description="Get a paginated list of notes, most recently updated first.",
)
async def list_notes(
    db: DbSession,
    user_id: CurrentUserId,
    renderer: MarkdownRenderer,
    request_id: RequestId,
    pagination: PaginationParams = Depends(get_pagination_params),
    folder_id: str | None = Query(
        default=None,
        description="Only notes directly in this folder",
    ),
    root_only: bool = Query(
        default=False,
        description="Only notes that are not in any folder",
    ),
    category_id: str | None = Query(
        default=None,
        description="Only notes in this category",
    ),
    include_archived: bool = Query(
        default=False,
        description="Include archived notes",
    ),
) -> dict[str, Any]:
    """List notes with full pagination support."""
    service = NoteService(db, user_id)

    notes, total = await service.list_notes_paginated(
        folder_id=folder_id,
        root_only=root_only,
        category_id=category_id,
        include_archived=include_archived,
        limit=pagination.limit,
        offset=pagination.offset,
    )

    return create_paginated_response(
        items=[NoteListResponse.from_note(note, renderer) for note in notes],
        item_schema=NoteListResponse,
        total=total,
        limit=pagination.limit,
        offset=pagination.offset,
        request_id=request_id,
    )


@router.get(
    "/search",
    response_model=ApiResponse[list[NoteListResponse]],
    summary="Search notes",
    description="Search notes by title or content. Archived and deleted notes are excluded.",
)
async def search_notes(
    db: DbSession,
    user_id: CurrentUserId,
    renderer: MarkdownRenderer,
    request_id: RequestId,
    q: str = Query(
        ...,
        min_length=1,
        max_length=100,
        description="Search query",
    ),
    limit: int = Query(
        default=50,
        ge=1,
        le=100,
        description="Maximum number of results",
    ),
) -> ApiResponse[list[NoteListResponse]]:
    """Search notes by title or content."""
    service = NoteService(db, user_id)
    notes = await service.search_notes(q, limit=limit)
    return ApiResponse(
        data=[NoteListResponse.from_note(note, renderer) for note in notes]
    )


@router.get(
    "/trash",
    summary="List deleted notes",
    description="Get a paginated list of the notes in the trash.",
)
async def list_trash(
    db: DbSession,
    user_id: CurrentUserId,
    renderer: MarkdownRenderer,
    request_id: RequestId,
    pagination: PaginationParams = Depends(get_pagination_params),
) -> dict[str, Any]:
    """List notes in the trash."""
    service = NoteService(db, user_id)
    notes, total = await service.list_trash(
        limit=pagination.limit,
        offset=pagination.offset,
    )
    return create_paginated_response(
        items=[NoteListResponse.from_note(note, renderer) for note in notes],
        item_schema=NoteListResponse,
        total=total,
        limit=pagination.limit,
        offset=pagination.offset,
        request_id=request_id,
    )


@router.get(
    "/calendar",
    response_model=ApiResponse[CalendarResponse],
    summary="Notes per day",
    description="Count the notes created on each day of a month, per category.",
)
async def get_calendar(
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
    year: int = Query(..., ge=1, le=9999, description="Calendar year"),
    month: int = Query(..., ge=1, le=12, description="Month (1-12)"),
) -> ApiResponse[CalendarResponse]:
    """Per-day note counts for a month."""
    service = NoteService(db, user_id)
    return ApiResponse(data=await service.calendar(year, month))


@router.get(
    "/{note_id}",
    response_model=ApiResponse[NoteResponse],
    summary="Get a note",
    description="Get a single note by ID.",
)
async def get_note(
    note_id: str,
    db: DbSession,
    user_id: CurrentUserId,
    renderer: MarkdownRenderer,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Get a note by ID."""
    service = NoteService(db, user_id)
    note = await service.get_note(note_id)
    return ApiResponse(data=NoteResponse.from_note(note, renderer))


@router.get(
    "/{note_id}/html",
    response_model=ApiResponse[NoteHtmlResponse],
    summary="Render a note",
    description="Render the note content as HTML for the preview pane.",
)
async def get_note_html(
    note_id: str,
    db: DbSession,
    user_id: CurrentUserId,
    renderer: MarkdownRenderer,
    request_id: RequestId,
) -> ApiResponse[NoteHtmlResponse]:
    """Render a note as HTML."""
    service = NoteService(db, user_id)
    note = await service.get_note(note_id)
    return ApiResponse(
        data=NoteHtmlResponse(id=note.id, title=note.title, html=renderer.to_html(note.content))
    )


@router.patch(
    "/{note_id}",
    response_model=ApiResponse[NoteResponse],
    summary="Update a note",
    description="Update an existing note. Only provided fields are updated.",
)
async def update_note(
    note_id: str,
    data: NoteUpdate,
    db: DbSession,
    user_id: CurrentUserId,
    renderer: MarkdownRenderer,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Update a note."""
    service = NoteService(db, user_id)
    note = await service.update_note(note_id, data)
    return ApiResponse(data=NoteResponse.from_note(note, renderer))


@router.delete(
    "/{note_id}",
    status_code=204,
    summary="Delete a note",
    description="Move a note to the trash.",
)
async def delete_note(
    note_id: str,
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
) -> None:
    """Soft-delete a note."""
    service = NoteService(db, user_id)
    await service.delete_note(note_id)


@router.post(
    "/{note_id}/restore",
    response_model=ApiResponse[NoteResponse],
    summary="Restore a note",
    description="Take a note back out of the trash.",
)
async def restore_note(
    note_id: str,
    db: DbSession,
    user_id: CurrentUserId,
    renderer: MarkdownRenderer,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Restore a deleted note."""
    service = NoteService(db, user_id)
    note = await service.restore_note(note_id)
    return ApiResponse(data=NoteResponse.from_note(note, renderer))


@router.delete(
    "/{note_id}/permanent",
    status_code=204,
    summary="Permanently delete a note",
    description="Delete a note for good. This cannot be undone.",
)
async def delete_note_permanently(
    note_id: str,
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
) -> None:
    """Permanently delete a note."""
    service = NoteService(db, user_id)
    await service.delete_note_permanently(note_id)


@router.post(
    "/{note_id}/archive",
    response_model=ApiResponse[NoteResponse],
    summary="Archive a note",
    description="Hide a note from the default listing.",
)
async def archive_note(
    note_id: str,
    db: DbSession,
    user_id: CurrentUserId,
    renderer: MarkdownRenderer,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Archive a note."""
    service = NoteService(db, user_id)
    note = await service.archive_note(note_id)
    return ApiResponse(data=NoteResponse.from_note(note, renderer))


@router.post(
    "/{note_id}/unarchive",
    response_model=ApiResponse[NoteResponse],
    summary="Unarchive a note",
    description="Restore an archived note.",
)
async def unarchive_note(
    note_id: str,
    db: DbSession,
    user_id: CurrentUserId,
    renderer: MarkdownRenderer,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Unarchive a note."""
    service = NoteService(db, user_id)
    note = await service.unarchive_note(note_id)
    return ApiResponse(data=NoteResponse.from_note(note, renderer))
