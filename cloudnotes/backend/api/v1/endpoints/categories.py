"""
Categories API Endpoints.

REST API endpoints for category management.
"""

from fastapi import APIRouter

from cloudnotes.backend.core.dependencies import (
    ColorAssignerDep,
    CurrentUserId,
    DbSession,
    RequestId,
)
from cloudnotes.backend.models.category import Category
from cloudnotes.backend.schemas.base import ApiResponse
from cloudnotes.backend.schemas.category import (
    CategoryCreate,
    CategoryOrder,
    CategoryResponse,
    CategoryUpdate,
    ColorResponse,
)
from cloudnotes.backend.services.category import CategoryService

router = APIRouter()


def _to_response(category: Category, notes_count: int = 0) -> CategoryResponse:
    response = CategoryResponse.model_validate(category)
    response.notes_count = notes_count
    return response


@router.get(
    "",
    response_model=ApiResponse[list[CategoryResponse]],
    summary="List categories",
    description="All categories in display order with their note counts.",
)
async def list_categories(
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
) -> ApiResponse[list[CategoryResponse]]:
    service = CategoryService(db, user_id)
    rows = await service.list_categories()
    return ApiResponse(data=[_to_response(category, count) for category, count in rows])


@router.post(
    "",
    response_model=ApiResponse[CategoryResponse],
    status_code=201,
    summary="Create a category",
    description="Create a category. A distinct color is generated when none is given.",
)
async def create_category(
    data: CategoryCreate,
    db: DbSession,
    user_id: CurrentUserId,
    color_assigner: ColorAssignerDep,
    request_id: RequestId,
) -> ApiResponse[CategoryResponse]:
    """Create a new category."""
    service = CategoryService(db, user_id, color_assigner)
    category = await service.create_category(data)
    return ApiResponse(data=_to_response(category))


@router.post(
    "/color",
    response_model=ApiResponse[ColorResponse],
    summary="Suggest a category color",
    description="Generate a color distinct from the existing categories without saving anything.",
)
async def suggest_color(
    db: DbSession,
    user_id: CurrentUserId,
    color_assigner: ColorAssignerDep,
    request_id: RequestId,
) -> ApiResponse[ColorResponse]:
    service = CategoryService(db, user_id, color_assigner)
    return ApiResponse(data=ColorResponse(color=await service.generate_color()))


@router.put(
    "/order",
    response_model=ApiResponse[list[CategoryResponse]],
    summary="Reorder categories",
    description="Set the display order; the listed categories get positions 0..n-1.",
)
async def reorder_categories(
    data: CategoryOrder,
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
) -> ApiResponse[list[CategoryResponse]]:
    service = CategoryService(db, user_id)
    rows = await service.reorder_categories(data.category_ids)
    return ApiResponse(data=[_to_response(category, count) for category, count in rows])


@router.get(
    "/{category_id}",
    response_model=ApiResponse[CategoryResponse],
    summary="Get a category",
)
async def get_category(
    category_id: str,
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
) -> ApiResponse[CategoryResponse]:
    service = CategoryService(db, user_id)
    category = await service.get_category(category_id)
    return ApiResponse(data=_to_response(category, await service.count_notes(category.id)))


@router.patch(
    "/{category_id}",
    response_model=ApiResponse[CategoryResponse],
    summary="Update a category",
    description="Rename or recolor a category. System categories cannot be changed.",
)
async def update_category(
    category_id: str,
    data: CategoryUpdate,
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
) -> ApiResponse[CategoryResponse]:
    service = CategoryService(db, user_id)
    category = await service.update_category(category_id, data)
    return ApiResponse(data=_to_response(category, await service.count_notes(category.id)))


@router.delete(
    "/{category_id}",
    status_code=204,
    summary="Delete a category",
    description="Delete a category. Its notes are kept without a category.",
)
async def delete_category(
    category_id: str,
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
) -> None:
    service = CategoryService(db, user_id)
    await service.delete_category(category_id)
