"""Unit tests for error rendering."""

import json

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from starlette.requests import Request

from tourguide.core.config import Settings
from tourguide.core.exceptions import (
    AlreadyReviewedError,
    InternalServerError,
    NotFoundError,
    api_exception_handler,
    generic_exception_handler,
)
from tourguide.main import create_app


def _request(environment: str) -> Request:
    app = FastAPI()
    app.state.settings = Settings(database_url="sqlite+aiosqlite:///:memory:", environment=environment)
    return Request({
        "type": "http",
        "method": "GET",
        "path": "/api/tours",
        "query_string": b"",
        "headers": [],
        "app": app,
    })


def _body(response) -> dict:
    return json.loads(response.body)


@pytest.mark.asyncio
async def test_not_found_rendering():
    response = await api_exception_handler(_request("production"), NotFoundError("tour request", 3))

    assert response.status_code == 404
    assert _body(response) == {"error": "Tour request not found"}


@pytest.mark.asyncio
async def test_already_reviewed_is_a_validation_error():
    exc = AlreadyReviewedError("tour", 1, 2)

    response = await api_exception_handler(_request("production"), exc)

    assert response.status_code == 400
    assert _body(response) == {"error": "You have already reviewed this tour"}
    assert exc.context == {"target_type": "tour", "target_id": 1, "tourist_id": 2}


@pytest.mark.asyncio
async def test_internal_error_detail_depends_on_environment():
    exc = InternalServerError("relation \"tours\" does not exist")

    response = await api_exception_handler(_request("development"), exc)
    assert response.status_code == 500
    assert _body(response) == {"error": "relation \"tours\" does not exist"}

    response = await api_exception_handler(_request("production"), exc)
    assert _body(response) == {"error": "Internal server error"}


@pytest.mark.asyncio
async def test_unhandled_exception_detail_depends_on_environment():
    exc = RuntimeError("connection reset by peer")

    response = await generic_exception_handler(_request("development"), exc)
    assert response.status_code == 500
    assert _body(response) == {"error": "connection reset by peer"}

    response = await generic_exception_handler(_request("production"), exc)
    assert _body(response) == {"error": "Internal server error"}


def _failing_app(environment: str) -> FastAPI:
    app = create_app(Settings(database_url="sqlite+aiosqlite:///:memory:", environment=environment))

    async def explode():
        raise RuntimeError("raw cause")

    app.add_api_route("/api/explode", explode)
    return app


@pytest.mark.asyncio
@pytest.mark.parametrize("environment,error", [
    ("development", "raw cause"),
    ("production", "Internal server error"),
])
async def test_unhandled_route_error_is_rendered_as_json(environment, error):
    """A route raising an unexpected error still answers with the error envelope."""
    transport = ASGITransport(app=_failing_app(environment), raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/explode")

    assert response.status_code == 500
    assert response.headers["content-type"] == "application/json"
    assert response.json() == {"error": error}
