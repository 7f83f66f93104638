"""Unit tests for the tour request lifecycle."""

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from tourguide.core.exceptions import NotFoundError, ValidationError
from tourguide.models import Notification, NotificationType, TourRequest, TourRequestStatus
from tourguide.schemas.tour_request import CreateTourRequestRequest
from tourguide.services.notification_service import NotificationService
from tourguide.services.tour_request_service import TourRequestService, tour_request_to_schema


def _booking(tour_id, tour_date, **overrides):
    data = {"tour_id": tour_id, "request_date": tour_date, "people_count": 2}
    data.update(overrides)
    return CreateTourRequestRequest(**data)


async def _count(session, model):
    return (await session.execute(select(func.count(model.id)))).scalar_one()


@pytest.mark.asyncio
async def test_create_request_is_pending_and_notifies_guide(test_session, sample_tour, tourist, guide, tour_date):
    service = TourRequestService(test_session)

    tour_request = await service.create_request(
        _booking(sample_tour.id, tour_date, special_requests="Vegetarian lunch"),
        tourist,
    )

    assert tour_request.status == TourRequestStatus.PENDING
    assert tour_request.total_price == 100.0
    assert tour_request.special_requests == "Vegetarian lunch"

    data = tour_request_to_schema(tour_request)
    assert data.tourist_name == "Tom Tourist"
    assert data.tour_title == sample_tour.title
    assert data.guide_id == guide.user_id

    notifications = await NotificationService(test_session).list_for_user(guide.user_id)
    assert len(notifications) == 1
    assert notifications[0].type == NotificationType.TOUR_REQUEST.value
    assert notifications[0].related_id == tour_request.id
    assert notifications[0].related_type == "tour_request"


@pytest.mark.asyncio
async def test_create_request_quotes_extra_people(test_session, sample_tour, tourist, tour_date):
    service = TourRequestService(test_session)

    tour_request = await service.create_request(_booking(sample_tour.id, tour_date, people_count=6), tourist)

    assert tour_request.total_price == 140.0


@pytest.mark.asyncio
async def test_create_request_keeps_given_total(test_session, sample_tour, tourist, tour_date):
    service = TourRequestService(test_session)

    tour_request = await service.create_request(_booking(sample_tour.id, tour_date, total_price=80.5), tourist)

    assert tour_request.total_price == 80.5


@pytest.mark.asyncio
async def test_create_request_unknown_tour(test_session, tourist, tour_date):
    service = TourRequestService(test_session)

    with pytest.raises(NotFoundError) as exc_info:
        await service.create_request(_booking(9999, tour_date), tourist)

    assert exc_info.value.status_code == 404
    assert await _count(test_session, TourRequest) == 0


@pytest.mark.asyncio
async def test_notification_failure_does_not_fail_request(
    test_session, sample_tour, tourist, guide, tour_date, monkeypatch
):
    service = TourRequestService(test_session)

    async def broken_create_notification(**kwargs):
        raise OperationalError("INSERT INTO notifications", {}, Exception("disk I/O error"))

    monkeypatch.setattr(service.notification_service, "create_notification", broken_create_notification)

    tour_request = await service.create_request(_booking(sample_tour.id, tour_date), tourist)

    assert tour_request.id is not None
    assert tour_request.status == TourRequestStatus.PENDING
    assert await _count(test_session, TourRequest) == 1
    assert await _count(test_session, Notification) == 0


@pytest.mark.asyncio
async def test_list_for_user_depends_on_role(
    test_session, sample_tour, tourist, guide, other_tourist, tour_date
):
    service = TourRequestService(test_session)
    first = await service.create_request(_booking(sample_tour.id, tour_date), tourist)
    second = await service.create_request(_booking(sample_tour.id, tour_date), other_tourist)

    guide_view = await service.list_for_user(guide)
    assert [r.id for r in guide_view] == [second.id, first.id]

    tourist_view = await service.list_for_user(tourist)
    assert [r.id for r in tourist_view] == [first.id]


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [TourRequestStatus.APPROVED, TourRequestStatus.REJECTED])
async def test_update_status_notifies_tourist(test_session, sample_tour, tourist, tour_date, status):
    service = TourRequestService(test_session)
    created = await service.create_request(_booking(sample_tour.id, tour_date), tourist)

    updated = await service.update_status(created.id, status)

    assert updated.status == status
    notifications = await NotificationService(test_session).list_for_user(tourist.user_id)
    assert len(notifications) == 1
    assert notifications[0].type == NotificationType.TOUR_REQUEST_STATUS.value
    assert notifications[0].title == f"Request {status.value}"


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [TourRequestStatus.PENDING, TourRequestStatus.CANCELLED])
async def test_update_status_rejects_other_statuses(test_session, sample_tour, tourist, tour_date, status):
    service = TourRequestService(test_session)
    created = await service.create_request(_booking(sample_tour.id, tour_date), tourist)

    with pytest.raises(ValidationError):
        await service.update_status(created.id, status)

    assert (await service.get_request(created.id)).status == TourRequestStatus.PENDING


@pytest.mark.asyncio
async def test_update_status_unknown_request_writes_nothing(test_session):
    service = TourRequestService(test_session)

    with pytest.raises(NotFoundError):
        await service.update_status(9999, TourRequestStatus.APPROVED)

    assert await _count(test_session, Notification) == 0


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "prior",
    [None, TourRequestStatus.APPROVED, TourRequestStatus.REJECTED],
)
async def test_cancel_from_any_status(test_session, sample_tour, tourist, guide, tour_date, prior):
    service = TourRequestService(test_session)
    created = await service.create_request(_booking(sample_tour.id, tour_date), tourist)
    if prior is not None:
        await service.update_status(created.id, prior)

    cancelled = await service.cancel(created.id)

    assert cancelled.status == TourRequestStatus.CANCELLED
    guide_inbox = await NotificationService(test_session).list_for_user(guide.user_id)
    assert guide_inbox[0].type == NotificationType.TOUR_REQUEST_CANCELLED.value


@pytest.mark.asyncio
async def test_cancel_unknown_request(test_session):
    with pytest.raises(NotFoundError):
        await TourRequestService(test_session).cancel(9999)
