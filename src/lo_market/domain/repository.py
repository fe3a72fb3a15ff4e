"""PriceSource Protocol — interface contract for the external price feed."""
from collections.abc import Iterable
from typing import Protocol


class PriceSourceProtocol(Protocol):
    async def fetch_usd_prices(self, addresses: Iterable[str]) -> dict[str, float]: ...
