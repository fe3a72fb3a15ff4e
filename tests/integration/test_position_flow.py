# tests/integration/test_position_flow.py
"""Integration tests for the positions flow: ingest → list/filter/sort → detail.

Orders are ingested fresh for every test; the store is cleared by conftest.py.
"""

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio(loop_scope="session")

BASE = "/api/v1/positions"
ALICE = "0xaaaa000000000000000000000000000000000001"
BOB = "0xbbbb000000000000000000000000000000000002"
MAXI_ADDRESS = "0x0d86eb9f43c57f6ff3bc9e23d8f9d82503f0e84b"
FAR_FUTURE = 4_000_000_000
LONG_AGO = 1_000_000_000
E18 = 10**18


def _order(**kwargs) -> dict:
    order = {
        "order_id": 1,
        "owner": ALICE,
        "sell_token": "0x0",
        "original_sell_amount": str(1000 * E18),
        "remaining_sell_amount": str(1000 * E18),
        "status": 0,
        "expiration_time": FAR_FUTURE,
        "buy_token_indices": [0],
        "buy_amounts": [20 * 10**8],
    }
    order.update(kwargs)
    return order


async def _ingest(client: AsyncClient) -> None:
    orders = [
        _order(order_id=1),
        _order(order_id=2, owner=BOB, sell_token=MAXI_ADDRESS,
               original_sell_amount=50 * 10**8, remaining_sell_amount=20 * 10**8),
        _order(order_id=3, expiration_time=LONG_AGO),
        _order(order_id=4, owner=BOB, status=2, remaining_sell_amount=0),
        _order(order_id=5, status=1, remaining_sell_amount=str(600 * E18)),
    ]
    resp = await client.put(f"{BASE}/orders", json={"orders": orders})
    assert resp.status_code == 200
    assert resp.json()["data"]["ingested"] == 5


class TestList:
    async def test_default_active_tab(self, client):
        await _ingest(client)
        resp = await client.get(BASE)
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert [p["order_id"] for p in data["items"]] == [1, 2]
        assert data["counts"] == {
            "ACTIVE": 2, "EXPIRED": 1, "COMPLETED": 1, "CANCELLED": 1, "ALL": 5,
        }

    async def test_mine(self, client):
        await _ingest(client)
        params = {"viewer": ALICE.upper(), "ownership": "MINE", "status": "ALL"}
        resp = await client.get(BASE, params=params)
        # expiration ascending: the expired order first
        assert [p["order_id"] for p in resp.json()["data"]["items"]] == [3, 1, 5]

    async def test_mine_without_viewer(self, client):
        await _ingest(client)
        resp = await client.get(BASE, params={"ownership": "MINE", "status": "ALL"})
        assert resp.json()["data"]["items"] == []

    async def test_maxi_category(self, client):
        await _ingest(client)
        resp = await client.get(BASE, params={"category": "MAXI", "status": "ALL"})
        assert [p["order_id"] for p in resp.json()["data"]["items"]] == [2]

    async def test_sort_progress_desc(self, client):
        await _ingest(client)
        resp = await client.get(BASE, params={"status": "ALL", "sort": "PROGRESS", "direction": "DESC"})
        ids = [p["order_id"] for p in resp.json()["data"]["items"]]
        assert ids[:3] == [4, 2, 5]

    async def test_search_by_ticker(self, client):
        await _ingest(client)
        resp = await client.get(BASE, params={"search": "maxi"})
        assert [p["order_id"] for p in resp.json()["data"]["items"]] == [2]

    async def test_invalid_sort_rejected(self, client):
        resp = await client.get(BASE, params={"sort": "PRICE"})
        assert resp.status_code == 422


class TestDetail:
    async def test_partial_fill(self, client):
        await _ingest(client)
        resp = await client.get(f"{BASE}/2")
        data = resp.json()["data"]
        assert data["effective_status"] == "ACTIVE"
        assert data["fill_percent"] == pytest.approx(60.0)
        assert data["fill_display"] == "60%"
        assert data["proceeds_available"] is True
        assert data["sell_ticker"] == "MAXI"
        assert data["remaining_sell_amount"] == "20"

    async def test_expired_is_derived(self, client):
        await _ingest(client)
        data = (await client.get(f"{BASE}/3")).json()["data"]
        assert data["on_chain_status"] == 0
        assert data["effective_status"] == "EXPIRED"

    async def test_not_found(self, client):
        resp = await client.get(f"{BASE}/404")
        assert resp.status_code == 404
        assert resp.json()["code"] == 3002


class TestExpired:
    async def test_viewer_expired_ids(self, client):
        await _ingest(client)
        resp = await client.get(f"{BASE}/expired", params={"viewer": ALICE})
        assert resp.json()["data"]["order_ids"] == [3]

    async def test_no_viewer(self, client):
        await _ingest(client)
        resp = await client.get(f"{BASE}/expired")
        assert resp.json()["data"]["order_ids"] == []
