"""
Tests for bidding and bid history.
"""

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def test_bid_sequence_is_strictly_increasing(client: AsyncClient, make_user, make_item):
    seller = await make_user()
    bidder = await make_user()
    item_id = await make_item(seller["headers"], starting_bid=100)

    response = await client.post(f"/item/{item_id}/bid", json={"amount": 100}, headers=bidder["headers"])
    assert response.status_code == 400

    response = await client.post(f"/item/{item_id}/bid", json={"amount": 101}, headers=bidder["headers"])
    assert response.status_code == 201
    assert "message" in response.json()

    response = await client.post(f"/item/{item_id}/bid", json={"amount": 101}, headers=bidder["headers"])
    assert response.status_code == 400

    response = await client.get(f"/item/{item_id}/bid")
    assert response.status_code == 200
    history = response.json()
    assert len(history) == 1
    assert history[0]["amount"] == 101
    assert history[0]["user_id"] == bidder["user_id"]
    assert history[0]["item_id"] == item_id
    assert history[0]["first_name"] == "Ada"
    assert isinstance(history[0]["timestamp"], int)


async def test_history_is_ordered_highest_first(client: AsyncClient, make_user, make_item):
    seller = await make_user()
    first = await make_user()
    second = await make_user()
    item_id = await make_item(seller["headers"], starting_bid=10)

    for bidder, amount in ((first, 20), (second, 30), (first, 45)):
        response = await client.post(f"/item/{item_id}/bid", json={"amount": amount}, headers=bidder["headers"])
        assert response.status_code == 201

    history = (await client.get(f"/item/{item_id}/bid")).json()
    assert [entry["amount"] for entry in history] == [45, 30, 20]


async def test_creator_cannot_bid_on_own_item(client: AsyncClient, make_user, make_item):
    seller = await make_user()
    item_id = await make_item(seller["headers"])

    response = await client.post(f"/item/{item_id}/bid", json={"amount": 500}, headers=seller["headers"])
    assert response.status_code == 403
    assert response.json() == {"error_message": "Cannot bid on your own item!"}

    history = (await client.get(f"/item/{item_id}/bid")).json()
    assert history == []


async def test_bid_requires_session(client: AsyncClient, make_user, make_item):
    seller = await make_user()
    item_id = await make_item(seller["headers"])

    response = await client.post(f"/item/{item_id}/bid", json={"amount": 500})
    assert response.status_code == 401


async def test_bid_on_unknown_item(client: AsyncClient, make_user):
    bidder = await make_user()
    for item_id in ("999", "abc"):
        response = await client.post(f"/item/{item_id}/bid", json={"amount": 500}, headers=bidder["headers"])
        assert response.status_code == 404

    assert (await client.get("/item/999/bid")).status_code == 404
    assert (await client.get("/item/abc/bid")).status_code == 404


@pytest.mark.parametrize("body", [{"amount": 0}, {"amount": "lots"}, {}, {"amount": 500, "user_id": 1}])
async def test_bid_invalid_bodies(client: AsyncClient, make_user, make_item, body):
    seller = await make_user()
    bidder = await make_user()
    item_id = await make_item(seller["headers"])

    response = await client.post(f"/item/{item_id}/bid", json=body, headers=bidder["headers"])
    assert response.status_code == 400


async def test_oversized_amount_is_a_validation_error(client: AsyncClient, make_user, make_item):
    seller = await make_user()
    bidder = await make_user()
    item_id = await make_item(seller["headers"])

    response = await client.post(f"/item/{item_id}/bid", json={"amount": 10**20}, headers=bidder["headers"])
    assert response.status_code == 400
    assert "amount" in response.json()["error_message"]

    response = await client.post(f"/item/{item_id}/bid", json={"amount": 2**31 - 1}, headers=bidder["headers"])
    assert response.status_code == 201

    history = (await client.get(f"/item/{item_id}/bid")).json()
    assert [entry["amount"] for entry in history] == [2**31 - 1]
