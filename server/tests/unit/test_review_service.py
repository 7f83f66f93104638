"""Unit tests for tour and guide reviews."""

import pytest
from sqlalchemy import func, select

from tourguide.core.exceptions import AlreadyReviewedError, NotFoundError
from tourguide.models import GuideReview, TourReview
from tourguide.schemas.review import (
    CreateGuideReviewRequest,
    CreateTourReviewRequest,
    UpdateTourReviewRequest,
)
from tourguide.services.review_service import (
    ReviewService,
    guide_review_to_schema,
    tour_review_to_schema,
)
from tourguide.services.tour_service import TourService


@pytest.mark.asyncio
async def test_create_tour_review(test_session, sample_tour, tourist):
    service = ReviewService(test_session)

    review = await service.create_tour_review(
        CreateTourReviewRequest(tour_id=sample_tour.id, rating=5, comment="Wonderful"),
        tourist,
    )

    data = tour_review_to_schema(review)
    assert data.rating == 5
    assert data.tourist_name == "Tom Tourist"
    assert data.tour_title == sample_tour.title


@pytest.mark.asyncio
async def test_create_tour_review_unknown_tour(test_session, tourist):
    with pytest.raises(NotFoundError):
        await ReviewService(test_session).create_tour_review(
            CreateTourReviewRequest(tour_id=9999, rating=4),
            tourist,
        )


@pytest.mark.asyncio
async def test_second_tour_review_is_refused(test_session, sample_tour, tourist):
    service = ReviewService(test_session)
    request = CreateTourReviewRequest(tour_id=sample_tour.id, rating=4)
    await service.create_tour_review(request, tourist)

    with pytest.raises(AlreadyReviewedError) as exc_info:
        await service.create_tour_review(request, tourist)

    assert exc_info.value.status_code == 400
    assert exc_info.value.error == "You have already reviewed this tour"
    count = (await test_session.execute(select(func.count(TourReview.id)))).scalar_one()
    assert count == 1


@pytest.mark.asyncio
async def test_list_and_average_tour_reviews(test_session, sample_tour, tourist, other_tourist):
    service = ReviewService(test_session)
    first = await service.create_tour_review(CreateTourReviewRequest(tour_id=sample_tour.id, rating=5), tourist)
    second = await service.create_tour_review(
        CreateTourReviewRequest(tour_id=sample_tour.id, rating=2), other_tourist
    )

    reviews = await service.list_tour_reviews(sample_tour.id)
    assert [r.id for r in reviews] == [second.id, first.id]

    assert await service.tour_rating_summary(sample_tour.id) == (3.5, 2)
    assert await service.tour_rating_summary(9999) == (0, 0)

    detail = await TourService(test_session).get_tour_detail(sample_tour.id)
    assert (detail.average_rating, detail.review_count) == (3.5, 2)

    mine = await service.list_reviews_by_tourist(tourist.user_id)
    assert [r.id for r in mine] == [first.id]


@pytest.mark.asyncio
async def test_update_own_review(test_session, sample_tour, tourist):
    service = ReviewService(test_session)
    review = await service.create_tour_review(CreateTourReviewRequest(tour_id=sample_tour.id, rating=2), tourist)

    updated = await service.update_tour_review(
        review.id, UpdateTourReviewRequest(rating=4, comment="Better on reflection"), tourist
    )

    assert updated.rating == 4
    assert updated.comment == "Better on reflection"


@pytest.mark.asyncio
async def test_cannot_touch_someone_elses_review(test_session, sample_tour, tourist, other_tourist):
    service = ReviewService(test_session)
    review = await service.create_tour_review(CreateTourReviewRequest(tour_id=sample_tour.id, rating=3), tourist)

    with pytest.raises(NotFoundError):
        await service.update_tour_review(review.id, UpdateTourReviewRequest(rating=1), other_tourist)
    with pytest.raises(NotFoundError):
        await service.delete_tour_review(review.id, other_tourist)

    assert (await service.get_tour_review(review.id)).rating == 3


@pytest.mark.asyncio
async def test_delete_own_review(test_session, sample_tour, tourist):
    service = ReviewService(test_session)
    review = await service.create_tour_review(CreateTourReviewRequest(tour_id=sample_tour.id, rating=3), tourist)

    deleted = await service.delete_tour_review(review.id, tourist)

    assert deleted.id == review.id
    assert await service.get_tour_review(review.id) is None
    # Reviewing again is allowed once the old review is gone
    await service.create_tour_review(CreateTourReviewRequest(tour_id=sample_tour.id, rating=5), tourist)


@pytest.mark.asyncio
async def test_guide_review_lifecycle(test_session, guide, tourist, other_tourist):
    service = ReviewService(test_session)

    review = await service.create_guide_review(
        CreateGuideReviewRequest(guide_id=guide.user_id, rating=5, comment="Knows every street"),
        tourist,
    )
    assert guide_review_to_schema(review).tourist_name == "Tom Tourist"

    await service.create_guide_review(CreateGuideReviewRequest(guide_id=guide.user_id, rating=4), other_tourist)

    with pytest.raises(AlreadyReviewedError) as exc_info:
        await service.create_guide_review(CreateGuideReviewRequest(guide_id=guide.user_id, rating=1), tourist)
    assert exc_info.value.error == "You have already reviewed this guide"

    reviews = await service.list_guide_reviews(guide.user_id)
    assert len(reviews) == 2
    assert await service.guide_rating_summary(guide.user_id) == (4.5, 2)


@pytest.mark.asyncio
async def test_guide_review_target_must_be_a_guide(test_session, tourist, other_tourist):
    service = ReviewService(test_session)

    with pytest.raises(NotFoundError) as exc_info:
        await service.create_guide_review(
            CreateGuideReviewRequest(guide_id=other_tourist.user_id, rating=3), tourist
        )
    assert exc_info.value.error == "Guide not found"

    with pytest.raises(NotFoundError):
        await service.create_guide_review(CreateGuideReviewRequest(guide_id=9999, rating=3), tourist)

    count = (await test_session.execute(select(func.count(GuideReview.id)))).scalar_one()
    assert count == 0
