"""Unit tests for exceptions and exception handlers.

Tests cover:
- AppException subclasses and their default messages
- Validation error formatting
- Handler output for app errors, unknown routes, validation and crashes
"""

from __future__ import annotations

import pytest
from fastapi import FastAPI, Query
from fastapi.testclient import TestClient

from foodies.core.exceptions import (
    AppException,
    BadRequestException,
    ConflictException,
    ForbiddenException,
    NotFoundException,
    UnauthorizedException,
    format_validation_errors,
    setup_exception_handlers,
)


pytestmark = pytest.mark.unit


class TestAppExceptions:
    """Tests for the exception hierarchy."""

    @pytest.mark.parametrize(
        ("exc_class", "status_code", "message"),
        [
            (BadRequestException, 400, "Bad request"),
            (UnauthorizedException, 401, "Not authorized"),
            (ForbiddenException, 403, "Forbidden"),
            (NotFoundException, 404, "Not found"),
            (ConflictException, 409, "Conflict"),
        ],
    )
    def test_defaults(
        self, exc_class: type[AppException], status_code: int, message: str
    ) -> None:
        exc = exc_class()

        assert exc.status_code == status_code
        assert exc.message == message
        assert isinstance(exc, AppException)

    def test_custom_message(self) -> None:
        exc = NotFoundException("Recipe not found")

        assert str(exc) == "Recipe not found"


class TestFormatValidationErrors:
    """Tests for format_validation_errors."""

    def test_strips_location_root_and_joins(self) -> None:
        errors = [
            {"loc": ("body", "title"), "msg": "String should have at least 3 characters"},
            {"loc": ("body", "ingredients", 0, "measure"), "msg": "Field required"},
        ]

        assert format_validation_errors(errors) == (
            "title: String should have at least 3 characters, "
            "ingredients.0.measure: Field required"
        )

    def test_error_without_field(self) -> None:
        assert format_validation_errors([{"loc": ("body",), "msg": "Invalid JSON"}]) == (
            "Invalid JSON"
        )

    def test_empty_errors(self) -> None:
        assert format_validation_errors([]) == "Validation failed"


@pytest.fixture
def client() -> TestClient:
    app = FastAPI()
    setup_exception_handlers(app)

    @app.get("/conflict")
    async def conflict() -> None:
        raise ConflictException("Email already in use")

    @app.get("/items")
    async def items(limit: int = Query(...)) -> dict[str, int]:
        return {"limit": limit}

    @app.get("/boom")
    async def boom() -> None:
        msg = "database exploded"
        raise RuntimeError(msg)

    return TestClient(app, raise_server_exceptions=False)


class TestExceptionHandlers:
    """Tests for setup_exception_handlers."""

    def test_app_exception(self, client: TestClient) -> None:
        response = client.get("/conflict")

        assert response.status_code == 409
        assert response.json() == {"message": "Email already in use"}

    def test_unknown_route(self, client: TestClient) -> None:
        response = client.get("/missing")

        assert response.status_code == 404
        assert response.json() == {"message": "Not found"}

    def test_validation_error_is_400(self, client: TestClient) -> None:
        response = client.get("/items", params={"limit": "abc"})

        assert response.status_code == 400
        assert response.json()["message"].startswith("limit: ")

    def test_unhandled_error_hides_details(self, client: TestClient) -> None:
        response = client.get("/boom")

        assert response.status_code == 500
        assert response.json() == {"message": "Internal server error"}
