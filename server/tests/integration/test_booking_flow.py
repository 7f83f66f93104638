"""End-to-end scenario driven through the API client."""

from datetime import date, timedelta

import pytest
import pytest_asyncio

from tourguide.client import ApiClientError, TourGuideClient


@pytest_asyncio.fixture
async def clients(test_client):
    """Separate API clients for a tourist and a guide sharing one app."""
    tourist = TourGuideClient(http_client=test_client)
    guide = TourGuideClient(http_client=test_client)
    yield tourist, guide
    await tourist.aclose()
    await guide.aclose()


@pytest.mark.asyncio
async def test_request_approval_flow(clients):
    tourist, guide = clients

    tourist_user = await tourist.register("Tom Tourist", "tom@example.com", "secret123", "tourist")
    guide_user = await guide.register("Gina Guide", "gina@example.com", "secret123", "guide")
    assert tourist.token and guide.token

    tour = await guide.create_tour(
        title="Old Town Walking Tour",
        description="Two hours through the historic centre",
        base_price=100,
        max_people=4,
        location="Old Town",
        duration="2 hours",
    )
    assert tour["guide_id"] == guide_user["id"]

    tour_request = await tourist.create_tour_request(
        tour_id=tour["id"],
        request_date=date.today() + timedelta(days=10),
        people_count=2,
    )
    assert tour_request["total_price"] == 100.0

    guide_view = await guide.my_requests()
    assert [(r["id"], r["status"]) for r in guide_view] == [(tour_request["id"], "pending")]
    assert await guide.unread_count() == 1

    approved = await guide.update_request_status(tour_request["id"], "approved")
    assert approved["status"] == "approved"

    tourist_view = await tourist.my_requests()
    assert tourist_view[0]["status"] == "approved"

    notifications = await tourist.notifications()
    assert [n["type"] for n in notifications] == ["tour_request_status"]
    assert notifications[0]["user_id"] == tourist_user["id"]
    assert notifications[0]["related_id"] == tour_request["id"]


@pytest.mark.asyncio
async def test_review_after_tour(clients):
    tourist, guide = clients
    await tourist.register("Tom Tourist", "tom@example.com", "secret123", "tourist")
    guide_user = await guide.register("Gina Guide", "gina@example.com", "secret123", "guide")
    tour = await guide.create_tour(
        title="Harbour Kayaking",
        description="Paddle around the harbour",
        base_price=60,
        max_people=2,
        extra_person_price=25,
        location="Harbour",
        duration="3 hours",
    )

    await tourist.review_tour(tour["id"], 5, "Loved it")
    await tourist.review_guide(guide_user["id"], 4)

    with pytest.raises(ApiClientError) as exc_info:
        await tourist.review_tour(tour["id"], 1)
    assert exc_info.value.status_code == 400
    assert exc_info.value.error == "You have already reviewed this tour"

    detail = await tourist.get_tour(tour["id"])
    assert detail["average_rating"] == 5.0
    assert detail["review_count"] == 1


@pytest.mark.asyncio
async def test_client_errors_and_logout(clients):
    tourist, _ = clients

    with pytest.raises(ApiClientError) as exc_info:
        await tourist.my_requests()
    assert exc_info.value.status_code == 401

    await tourist.register("Tom Tourist", "tom@example.com", "secret123", "tourist")
    with pytest.raises(ApiClientError) as exc_info:
        await tourist.create_tour(
            title="Not allowed",
            description="Tourists cannot create tours",
            base_price=10,
            max_people=1,
            location="Nowhere",
            duration="1 hour",
        )
    assert exc_info.value.status_code == 403

    tourist.logout()
    assert tourist.token is None

    user = await tourist.login("tom@example.com", "secret123")
    assert user["email"] == "tom@example.com"
    assert await tourist.my_requests() == []
