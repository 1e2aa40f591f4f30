"""
Unit Tests for Pagination Utilities.
"""

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel

from agencyhub.backend.core.pagination import (
    PaginationParams,
    create_paginated_response,
    get_pagination_params,
)


class ItemSchema(BaseModel):
    id: str
    name: str = ""


@pytest.fixture
def paged_app():
    app = FastAPI()

    @app.get("/items")
    def items(pagination: PaginationParams = Depends(get_pagination_params)):
        return {"limit": pagination.limit, "offset": pagination.offset}

    return TestClient(app)


class TestGetPaginationParams:
    def test_defaults(self, paged_app):
        assert paged_app.get("/items").json() == {"limit": 20, "offset": 0}

    def test_explicit_values(self, paged_app):
        assert paged_app.get("/items?limit=50&offset=100").json() == {"limit": 50, "offset": 100}

    @pytest.mark.parametrize("query", ["limit=0", "limit=101", "offset=-1"])
    def test_out_of_range_rejected(self, paged_app, query):
        assert paged_app.get(f"/items?{query}").status_code == 422


class TestCreatePaginatedResponse:
    def test_envelope_structure(self):
        response = create_paginated_response(
            items=[{"id": "1", "name": "Acme"}, {"id": "2", "name": "Globex"}],
            item_schema=ItemSchema,
            total=10,
            limit=2,
            offset=0,
            request_id="req-9",
        )

        assert response["success"] is True
        assert response["error"] is None
        assert [item["name"] for item in response["data"]] == ["Acme", "Globex"]
        assert response["metadata"]["request_id"] == "req-9"
        assert response["pagination"] == {"total": 10, "limit": 2, "offset": 0, "has_more": True}

    def test_has_more_false_on_last_page(self):
        response = create_paginated_response(
            items=[{"id": "3"}],
            item_schema=ItemSchema,
            total=3,
            limit=2,
            offset=2,
        )

        assert response["pagination"]["has_more"] is False

    def test_has_more_false_without_total(self):
        response = create_paginated_response(items=[{"id": "1"}], item_schema=ItemSchema)

        assert response["pagination"]["total"] is None
        assert response["pagination"]["has_more"] is False

    def test_empty_page(self):
        response = create_paginated_response(items=[], item_schema=ItemSchema, total=0)

        assert response["data"] == []
        assert response["pagination"]["has_more"] is False
