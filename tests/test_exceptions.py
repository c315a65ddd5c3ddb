"""Test cases for exception handling system."""

import pytest
from fastapi import FastAPI, status
from fastapi.testclient import TestClient
from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError

from community_events.core.exceptions import (
    BadRequestError,
    ConflictError,
    ErrorResponse,
    InternalServerError,
    NotFoundError,
    ValidationError,
    register_exception_handlers,
)


@pytest.fixture
def app() -> FastAPI:
    """Create test FastAPI application."""
    test_app = FastAPI()
    register_exception_handlers(test_app)
    return test_app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create test client.

    Server errors are returned as responses rather than re-raised so the
    generic handler's output can be inspected.
    """
    return TestClient(app, raise_server_exceptions=False)


# =============================================================================
# Test ErrorResponse Model
# =============================================================================


def test_error_response_model():
    """Test ErrorResponse model creation and validation."""
    error = ErrorResponse(
        error_code="EVENT_NOT_FOUND",
        message="Event not found",
        detail={"event_id": "abc"},
        path="/api/events/abc",
    )

    assert error.success is False
    assert error.error_code == "EVENT_NOT_FOUND"
    assert error.detail == {"event_id": "abc"}
    assert error.path == "/api/events/abc"


def test_error_response_model_defaults() -> None:
    error = ErrorResponse(error_code="TEST", message="Test")

    assert error.success is False
    assert error.detail is None
    assert error.path is None


def test_error_response_rejects_non_dict_detail() -> None:
    with pytest.raises(Exception):  # Pydantic ValidationError
        ErrorResponse(error_code="TEST", message="Test", detail="invalid_string")


# =============================================================================
# Status codes per error kind
# =============================================================================


def test_not_found_error_with_params(app: FastAPI, client: TestClient) -> None:
    @app.get("/test-not-found")
    async def route():
        raise NotFoundError(
            message="Event not found", error_code="EVENT_NOT_FOUND", detail={"event_id": "e1"}
        )

    response = client.get("/test-not-found")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    data = response.json()
    assert data["success"] is False
    assert data["error_code"] == "EVENT_NOT_FOUND"
    assert data["message"] == "Event not found"
    assert data["detail"] == {"event_id": "e1"}
    assert data["path"] == "/test-not-found"


def test_bad_request_error(app: FastAPI, client: TestClient) -> None:
    @app.get("/test-bad-request")
    async def route():
        raise BadRequestError(message="Invalid input", detail={"field": "code"})

    response = client.get("/test-bad-request")

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    data = response.json()
    assert data["error_code"] == "BadRequestError"
    assert data["detail"] == {"field": "code"}


def test_validation_error_is_bad_request(app: FastAPI, client: TestClient) -> None:
    @app.get("/test-validation-error")
    async def route():
        raise ValidationError(message="All required fields must be provided")

    response = client.get("/test-validation-error")

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    data = response.json()
    assert data["error_code"] == "ValidationError"
    assert data["message"] == "All required fields must be provided"


def test_validation_error_default_message() -> None:
    assert ValidationError().message == "Validation failed"
    assert isinstance(ValidationError(), BadRequestError)


def test_conflict_error_is_bad_request(app: FastAPI, client: TestClient) -> None:
    @app.get("/test-conflict")
    async def route():
        raise ConflictError(message="Event code already exists", detail={"code": "ABCD1234"})

    response = client.get("/test-conflict")

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    data = response.json()
    assert data["error_code"] == "ConflictError"
    assert data["detail"] == {"code": "ABCD1234"}


def test_internal_server_error(app: FastAPI, client: TestClient) -> None:
    @app.get("/test-server-error")
    async def route():
        raise InternalServerError(message="Database error", detail={"db": "primary"})

    response = client.get("/test-server-error")

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    data = response.json()
    assert data["error_code"] == "InternalServerError"
    assert data["message"] == "Database error"


# =============================================================================
# Test Exception Classes with ErrorResponse Object
# =============================================================================


def test_not_found_error_with_error_response(app: FastAPI, client: TestClient) -> None:
    @app.get("/test-error-response")
    async def route():
        error = ErrorResponse(
            error_code="USER_NOT_FOUND",
            message="User not found",
            detail={"user_id": "U9"},
        )
        raise NotFoundError(error)

    response = client.get("/test-error-response")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    data = response.json()
    assert data["error_code"] == "USER_NOT_FOUND"
    assert data["message"] == "User not found"
    assert data["detail"] == {"user_id": "U9"}


def test_not_found_error_default_message(app: FastAPI, client: TestClient) -> None:
    @app.get("/test-default")
    async def route():
        raise NotFoundError()

    data = client.get("/test-default").json()

    assert data["message"] == "Not found"
    assert data["error_code"] == "NotFoundError"


# =============================================================================
# Framework and database errors
# =============================================================================


def test_request_validation_error_handler(app: FastAPI, client: TestClient) -> None:
    class JoinBody(BaseModel):
        user_id: str
        seats: int

    @app.post("/test-validation")
    async def route(data: JoinBody):
        return data

    response = client.post("/test-validation", json={"user_id": "U1", "seats": "many"})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    data = response.json()
    assert data["error_code"] == "ValidationError"
    assert data["message"] == "Request validation failed"
    assert data["detail"]["errors"][0]["loc"] == ["body", "seats"]


def test_integrity_error_handler(app: FastAPI, client: TestClient) -> None:
    @app.get("/test-integrity")
    async def route():
        raise IntegrityError("INSERT INTO events", {}, Exception("UNIQUE constraint failed"))

    response = client.get("/test-integrity")

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    data = response.json()
    assert data["error_code"] == "ConflictError"
    assert data["message"] == "Database constraint violation"
    assert "UNIQUE constraint failed" in data["detail"]["database_error"]


def test_generic_exception_handler(app: FastAPI, client: TestClient) -> None:
    @app.get("/test-unexpected")
    async def route():
        msg = "Unexpected error"
        raise ValueError(msg)

    response = client.get("/test-unexpected")

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    data = response.json()
    assert data["error_code"] == "InternalServerError"
    assert data["message"] == "An unexpected error occurred"
    assert data["path"] == "/test-unexpected"


# =============================================================================
# Serialization
# =============================================================================


def test_exception_to_error_response_conversion() -> None:
    exc = NotFoundError(message="Event not found", detail={"code": "ZZZZ9999"})

    error_response = exc.to_error_response(path="/api/event/code/ZZZZ9999")

    assert isinstance(error_response, ErrorResponse)
    assert error_response.error_code == "NotFoundError"
    assert error_response.detail == {"code": "ZZZZ9999"}
    assert error_response.path == "/api/event/code/ZZZZ9999"


def test_structured_detail_kept_apart_from_http_detail() -> None:
    exc = ConflictError(message="Event code already exists", detail={"code": "ABCD1234"})

    assert exc.detail == "Event code already exists"
    assert exc.error_detail == {"code": "ABCD1234"}
    assert exc.to_error_response().detail == {"code": "ABCD1234"}


def test_error_without_detail_serializes(app: FastAPI, client: TestClient) -> None:
    @app.get("/test-plain-server-error")
    async def route():
        raise InternalServerError()

    response = client.get("/test-plain-server-error")

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {
        "success": False,
        "error_code": "InternalServerError",
        "message": "Internal server error",
        "path": "/test-plain-server-error",
    }


def test_error_response_excludes_none_values(app: FastAPI, client: TestClient) -> None:
    @app.get("/test-no-detail")
    async def route():
        raise NotFoundError(message="Not found")

    data = client.get("/test-no-detail").json()

    assert "detail" not in data
    assert set(data) == {"success", "error_code", "message", "path"}
