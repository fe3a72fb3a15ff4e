"""Integration-test fixtures.

All integration tests share a single event loop and one ASGI client. The
in-process stores are module singletons, so every test starts from a known
price snapshot and an empty order store.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.lo_market.domain.token_table import HEX_ADDRESS, WPLS_ADDRESS
from src.lo_market.infrastructure.snapshot_store import market_snapshot_store
from src.lo_position.infrastructure.order_store import order_store
from src.main import app

MAXI_ADDRESS = "0x0d86eb9f43c57f6ff3bc9e23d8f9d82503f0e84b"
PLSX_ADDRESS = "0x95b303987a60c71504d99aa1b13b4da07b0790ab"

SEED_PRICES = {
    WPLS_ADDRESS: 0.0001,
    HEX_ADDRESS: 0.005,
    MAXI_ADDRESS: 0.01,
    PLSX_ADDRESS: 0.00005,
}


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def client() -> AsyncClient:  # type: ignore[override]
    """Session-scoped async HTTP client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture(autouse=True)
def seeded_state() -> None:
    market_snapshot_store.replace(SEED_PRICES)
    order_store.clear()
