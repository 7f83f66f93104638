"""Property-based tests for pricing and tour request invariants."""

import asyncio
from datetime import date, timedelta

from hypothesis import given, settings
from hypothesis import strategies as st

from tourguide.core.database import Database
from tourguide.models import Tour, TourRequestStatus, User, UserType
from tourguide.schemas.auth import AuthenticatedUser
from tourguide.schemas.tour_request import MAX_PEOPLE_PER_REQUEST, CreateTourRequestRequest
from tourguide.services.tour_request_service import TourRequestService

prices = st.floats(min_value=0, max_value=10000, allow_nan=False, allow_infinity=False)
capacities = st.integers(min_value=1, max_value=MAX_PEOPLE_PER_REQUEST)
party_sizes = st.integers(min_value=1, max_value=MAX_PEOPLE_PER_REQUEST)


@given(base_price=prices, extra_price=prices, max_people=capacities, people_count=party_sizes)
def test_quote_is_base_price_up_to_capacity(base_price, extra_price, max_people, people_count):
    tour = Tour(base_price=base_price, max_people=max_people, extra_person_price=extra_price)

    quote = tour.quote(people_count)

    extra_people = max(0, people_count - max_people)
    assert quote == round(base_price + extra_people * extra_price, 2)
    assert quote >= round(base_price, 2) - 0.01
    if people_count <= max_people:
        assert quote == round(base_price, 2)


@given(base_price=prices, extra_price=prices, max_people=capacities, people_count=party_sizes)
def test_quote_never_decreases_with_party_size(base_price, extra_price, max_people, people_count):
    tour = Tour(base_price=base_price, max_people=max_people, extra_person_price=extra_price)

    if people_count < MAX_PEOPLE_PER_REQUEST:
        assert tour.quote(people_count + 1) >= tour.quote(people_count)


async def _create_requests(people_counts: list[int]) -> list[str]:
    database = Database("sqlite+aiosqlite:///:memory:")
    await database.create_all()
    try:
        async with database.session() as session:
            guide = User(name="Guide", email="guide@example.com", password_hash="x", user_type=UserType.GUIDE)
            tourist = User(name="Tourist", email="tourist@example.com", password_hash="x", user_type=UserType.TOURIST)
            session.add_all([guide, tourist])
            await session.commit()

            tour = Tour(
                guide_id=guide.id,
                title="Property Tour",
                description="Generated",
                location="Anywhere",
                duration="1 hour",
                base_price=50.0,
                max_people=4,
                extra_person_price=10.0,
            )
            session.add(tour)
            await session.commit()

            identity = AuthenticatedUser(user_id=tourist.id, email=tourist.email, user_type=UserType.TOURIST)
            service = TourRequestService(session)
            for people_count in people_counts:
                await service.create_request(
                    CreateTourRequestRequest(
                        tour_id=tour.id,
                        request_date=date.today() + timedelta(days=7),
                        people_count=people_count,
                    ),
                    identity,
                )

            return [tr.status for tr in await service.list_for_user(identity)]
    finally:
        await database.dispose()


@settings(max_examples=20, deadline=None)
@given(people_counts=st.lists(party_sizes, min_size=1, max_size=5))
def test_created_requests_are_pending(people_counts):
    """Every request stays pending until someone decides on it."""
    statuses = asyncio.run(_create_requests(people_counts))

    assert len(statuses) == len(people_counts)
    assert all(TourRequestStatus(status) is TourRequestStatus.PENDING for status in statuses)
