"""Async HTTP client for the Tour Guide API."""

import logging
from datetime import date
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)


class ApiClientError(Exception):
    """Error response returned by the API."""

    def __init__(self, status_code: int, error: str):
        self.status_code = status_code
        self.error = error
        super().__init__(f"{status_code}: {error}")


class TourGuideClient:
    """
    Thin async wrapper over the REST API.

    The bearer token obtained from ``register`` or ``login`` lives on the
    instance only; it is never persisted. Pass an existing ``httpx.AsyncClient``
    (for example one bound to an ``ASGITransport``) or a ``base_url``.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ):
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(base_url=base_url, timeout=timeout)
        self.token: Optional[str] = None
        self.user: Optional[dict[str, Any]] = None

    async def __aenter__(self) -> "TourGuideClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    def logout(self) -> None:
        self.token = None
        self.user = None

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        headers = kwargs.pop("headers", {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        response = await self._http.request(method, path, headers=headers, **kwargs)
        if response.is_error:
            try:
                error = response.json().get("error", response.reason_phrase)
            except ValueError:
                error = response.text or response.reason_phrase
            logger.debug(
                "API call failed",
                extra={"method": method, "path": path, "status_code": response.status_code}
            )
            raise ApiClientError(response.status_code, error)
        return response.json()

    def _store_session(self, body: dict[str, Any]) -> dict[str, Any]:
        self.token = body["token"]
        self.user = body["user"]
        return body["user"]

    # Auth

    async def register(self, name: str, email: str, password: str, user_type: str) -> dict[str, Any]:
        body = await self._request("POST", "/api/auth/register", json={
            "name": name,
            "email": email,
            "password": password,
            "user_type": user_type,
        })
        return self._store_session(body)

    async def login(self, email: str, password: str) -> dict[str, Any]:
        body = await self._request("POST", "/api/auth/login", json={"email": email, "password": password})
        return self._store_session(body)

    # Tours

    async def list_tours(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/api/tours")

    async def get_tour(self, tour_id: int) -> dict[str, Any]:
        return await self._request("GET", f"/api/tours/{tour_id}")

    async def my_tours(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/api/tours/my-tours")

    async def create_tour(self, **fields) -> dict[str, Any]:
        body = await self._request("POST", "/api/tours", json=fields)
        return body["data"]

    # Tour requests

    async def create_tour_request(
        self,
        tour_id: int,
        request_date: date,
        people_count: int,
        total_price: Optional[float] = None,
        special_requests: Optional[str] = None,
    ) -> dict[str, Any]:
        payload = {
            "tour_id": tour_id,
            "request_date": request_date.isoformat(),
            "people_count": people_count,
            "special_requests": special_requests,
        }
        if total_price is not None:
            payload["total_price"] = total_price
        body = await self._request("POST", "/api/tour-requests", json=payload)
        return body["data"]

    async def my_requests(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/api/tour-requests/my-requests")

    async def update_request_status(self, request_id: int, status: str) -> dict[str, Any]:
        body = await self._request("PATCH", f"/api/tour-requests/{request_id}/status", json={"status": status})
        return body["data"]

    async def cancel_request(self, request_id: int) -> dict[str, Any]:
        body = await self._request("PATCH", f"/api/tour-requests/{request_id}/cancel")
        return body["data"]

    # Reviews

    async def review_tour(self, tour_id: int, rating: int, comment: Optional[str] = None) -> dict[str, Any]:
        body = await self._request("POST", "/api/tour-reviews", json={
            "tour_id": tour_id,
            "rating": rating,
            "comment": comment,
        })
        return body["data"]

    async def tour_reviews(self, tour_id: int) -> list[dict[str, Any]]:
        return await self._request("GET", f"/api/tour-reviews/tour/{tour_id}")

    async def review_guide(self, guide_id: int, rating: int, comment: Optional[str] = None) -> dict[str, Any]:
        body = await self._request("POST", "/api/guide-reviews", json={
            "guide_id": guide_id,
            "rating": rating,
            "comment": comment,
        })
        return body["data"]

    # Notifications

    async def notifications(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/api/notifications")

    async def unread_count(self) -> int:
        body = await self._request("GET", "/api/notifications/unread-count")
        return body["unread_count"]

    async def mark_notification_read(self, notification_id: int) -> dict[str, Any]:
        body = await self._request("PATCH", f"/api/notifications/{notification_id}/read")
        return body["data"]

    # Businesses

    async def businesses(self, **filters) -> list[dict[str, Any]]:
        params = {key: value for key, value in filters.items() if value is not None}
        return await self._request("GET", "/api/businesses", params=params)
