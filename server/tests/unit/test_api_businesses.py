"""API tests for the business directory."""

import pytest
import pytest_asyncio

from tourguide.services.business_service import BusinessService


@pytest_asyncio.fixture
async def seeded(test_session):
    await BusinessService(test_session).seed_sample_businesses()


def _new_business(**overrides):
    data = {
        "name": "Seaside Grill",
        "type": "restaurant",
        "description": "Fresh fish by the water",
        "address": "5 Beach Road",
        "rating": 4.1,
    }
    data.update(overrides)
    return data


@pytest.mark.asyncio
async def test_list_businesses(test_client, seeded):
    response = await test_client.get("/api/businesses")

    assert response.status_code == 200
    ratings = [b["rating"] for b in response.json()]
    assert ratings == [4.9, 4.8, 4.7, 4.5]


@pytest.mark.asyncio
async def test_type_and_min_rating_filter(test_client, seeded, tourist_headers):
    await test_client.post("/api/businesses", json=_new_business(rating=3.5), headers=tourist_headers)
    await test_client.post(
        "/api/businesses", json=_new_business(name="Harbour Kitchen", rating=4.6), headers=tourist_headers
    )

    response = await test_client.get("/api/businesses", params={"type": "restaurant", "min_rating": 4})

    businesses = response.json()
    assert all(b["type"] == "restaurant" and b["rating"] >= 4 for b in businesses)
    assert [b["rating"] for b in businesses] == [4.6, 4.5]


@pytest.mark.asyncio
async def test_type_all_means_no_filter(test_client, seeded):
    response = await test_client.get("/api/businesses", params={"type": "all"})

    assert len(response.json()) == 4


@pytest.mark.asyncio
async def test_invalid_type_is_rejected(test_client, seeded):
    response = await test_client.get("/api/businesses", params={"type": "casino"})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid business type: casino"}


@pytest.mark.asyncio
async def test_search_endpoints(test_client, seeded):
    response = await test_client.get("/api/businesses/search", params={"q": "mountain"})
    assert [b["type"] for b in response.json()] == ["hotel"]

    response = await test_client.get("/api/businesses", params={"search": "MOUNTAIN", "type": "store"})
    assert response.json() == []

    response = await test_client.get("/api/businesses/search")
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_verified_and_by_type(test_client, seeded, tourist_headers):
    await test_client.post("/api/businesses", json=_new_business(), headers=tourist_headers)

    response = await test_client.get("/api/businesses/verified")
    assert len(response.json()) == 4

    response = await test_client.get("/api/businesses/type/restaurant")
    assert [b["name"] for b in response.json()] == ["Traditional Restaurant", "Seaside Grill"]


@pytest.mark.asyncio
async def test_business_crud(test_client, tourist_headers):
    response = await test_client.post("/api/businesses", json=_new_business(), headers=tourist_headers)
    assert response.status_code == 201
    business = response.json()["data"]
    assert business["is_verified"] is False

    response = await test_client.get(f"/api/businesses/{business['id']}")
    assert response.json()["name"] == "Seaside Grill"

    response = await test_client.put(
        f"/api/businesses/{business['id']}",
        json={"is_verified": True},
        headers=tourist_headers,
    )
    assert response.status_code == 200
    assert response.json()["data"]["is_verified"] is True

    response = await test_client.put(f"/api/businesses/{business['id']}", json={}, headers=tourist_headers)
    assert response.status_code == 400
    assert response.json() == {"error": "No fields to update"}

    response = await test_client.delete(f"/api/businesses/{business['id']}", headers=tourist_headers)
    assert response.status_code == 200
    assert response.json()["data"]["name"] == "Seaside Grill"

    response = await test_client.get(f"/api/businesses/{business['id']}")
    assert response.status_code == 404
    assert response.json() == {"error": "Business not found"}


@pytest.mark.asyncio
async def test_business_mutations_require_auth(test_client):
    response = await test_client.post("/api/businesses", json=_new_business())
    assert response.status_code == 401

    response = await test_client.delete("/api/businesses/1")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_create_business_missing_fields(test_client, tourist_headers):
    response = await test_client.post(
        "/api/businesses",
        json={"name": "Nameless", "type": "store"},
        headers=tourist_headers,
    )

    assert response.status_code == 400


@pytest.mark.asyncio
@pytest.mark.parametrize("field", ["name", "type", "description", "address", "rating", "is_verified"])
async def test_update_business_rejects_null_required_field(test_client, tourist_headers, field):
    created = await test_client.post("/api/businesses", json=_new_business(), headers=tourist_headers)
    business_id = created.json()["data"]["id"]

    response = await test_client.put(
        f"/api/businesses/{business_id}",
        json={field: None},
        headers=tourist_headers,
    )

    assert response.status_code == 400
    assert response.json()["error"].startswith(field)

    response = await test_client.get(f"/api/businesses/{business_id}")
    assert response.json()["name"] == "Seaside Grill"


@pytest.mark.asyncio
async def test_update_business_clears_optional_field(test_client, tourist_headers):
    created = await test_client.post(
        "/api/businesses",
        json=_new_business(phone="(11) 5555-5555"),
        headers=tourist_headers,
    )
    business_id = created.json()["data"]["id"]

    response = await test_client.put(f"/api/businesses/{business_id}", json={"phone": None}, headers=tourist_headers)

    assert response.status_code == 200
    assert response.json()["data"]["phone"] is None
