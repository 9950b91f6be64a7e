"""
Unit Tests for Pagination Utilities.
"""

from datetime import datetime

import pytest
from pydantic import BaseModel

from cloudnotes.backend.core.pagination import PaginationParams, create_paginated_response, get_pagination_params


class ItemSchema(BaseModel):
    id: str
    name: str


class TestPaginationParams:
    """Tests for the pagination dependency."""

    def test_returns_params(self):
        params = get_pagination_params(limit=10, offset=30)
        assert params == PaginationParams(limit=10, offset=30)


class TestCreatePaginatedResponse:
    """Tests for create_paginated_response function."""

    def test_creates_valid_response_structure(self):
        items = [{"id": "1", "name": "Item 1"}, {"id": "2", "name": "Item 2"}]

        response = create_paginated_response(
            items=items,
            item_schema=ItemSchema,
            total=10,
            limit=2,
            offset=0,
        )

        assert response["success"] is True
        assert [item["id"] for item in response["data"]] == ["1", "2"]
        assert response["pagination"] == {
            "total": 10,
            "limit": 2,
            "offset": 0,
            "has_more": True,
        }

    @pytest.mark.parametrize(
        ("returned", "total", "offset", "has_more"),
        [
            (1, 1, 0, False),
            (20, 100, 40, True),
            (20, 60, 40, False),
            (0, 0, 0, False),
        ],
    )
    def test_has_more(self, returned, total, offset, has_more):
        items = [{"id": str(i), "name": "n"} for i in range(returned)]

        response = create_paginated_response(
            items=items,
            item_schema=ItemSchema,
            total=total,
            limit=20,
            offset=offset,
        )

        assert response["pagination"]["has_more"] is has_more

    def test_includes_request_id(self):
        response = create_paginated_response(
            items=[],
            item_schema=ItemSchema,
            total=0,
            request_id="test-request-123",
        )

        assert response["metadata"]["request_id"] == "test-request-123"

    def test_items_are_serialized_through_schema(self):
        """Extra attributes are dropped and values become JSON-ready."""

        class Stamped(BaseModel):
            id: str
            created_at: datetime

        items = [{"id": "1", "created_at": datetime(2024, 3, 5, 9, 30), "secret": "x"}]

        response = create_paginated_response(items=items, item_schema=Stamped, total=1)

        assert response["data"] == [{"id": "1", "created_at": "2024-03-05T09:30:00"}]
