"""TokenRegistry: canonical address lookups over the token metadata table.

Addresses are compared lower-case; the native-token aliases resolve to the
contract's native address before any lookup.
"""
from collections.abc import Iterable

from src.lo_common.enums import TokenCategory
from src.lo_common.errors import UnknownTokenError
from src.lo_market.domain.models import TokenMetadata, TokenRef
from src.lo_market.domain.token_table import NATIVE_ADDRESS, NATIVE_ALIASES, build_token_table

UNKNOWN_TOKEN_DECIMALS = 18


def canonical_address(address: str) -> str:
    lowered = address.strip().lower()
    if lowered in NATIVE_ALIASES:
        return NATIVE_ADDRESS
    return lowered


def fallback_ticker(address: str) -> str:
    """Short ticker for an address missing from the table: '0x...abcd'."""
    return f"0x...{canonical_address(address)[-4:]}"


def display_ticker(ticker: str) -> str:
    """Bridged tickers render with an 'e' prefix: weHEX -> eHEX."""
    if ticker.startswith("we"):
        return "e" + ticker[2:]
    return ticker


class TokenRegistry:
    def __init__(
        self,
        table: Iterable[TokenMetadata],
        whitelist: Iterable[str] | None = None,
    ) -> None:
        self._table = list(table)
        self._by_address = {row.address: row for row in self._table}
        order = whitelist if whitelist is not None else [row.address for row in self._table]
        self._whitelist = {canonical_address(a): i for i, a in enumerate(order)}

    def with_whitelist(self, addresses: Iterable[str]) -> "TokenRegistry":
        """Same table, contract whitelist order taken from `addresses`."""
        return TokenRegistry(self._table, whitelist=list(addresses))

    def all(self) -> list[TokenMetadata]:
        return list(self._table)

    def get(self, address: str) -> TokenMetadata | None:
        return self._by_address.get(canonical_address(address))

    def require(self, address: str) -> TokenMetadata:
        meta = self.get(address)
        if meta is None:
            raise UnknownTokenError(address)
        return meta

    def token_ref(self, address: str) -> TokenRef:
        meta = self.get(address)
        if meta is not None:
            return meta.token
        canonical = canonical_address(address)
        return TokenRef(
            address=canonical,
            ticker=fallback_ticker(canonical),
            decimals=UNKNOWN_TOKEN_DECIMALS,
        )

    def ticker_of(self, address: str) -> str:
        return self.token_ref(address).ticker

    def decimals_of(self, address: str) -> int:
        return self.token_ref(address).decimals

    def category_of(self, address: str) -> TokenCategory:
        meta = self.get(address)
        return meta.category if meta is not None else TokenCategory.NON_MAXI

    def whitelist_index(self, address: str) -> int | None:
        return self._whitelist.get(canonical_address(address))

    def address_at(self, index: int) -> str | None:
        for address, position in self._whitelist.items():
            if position == index:
                return address
        return None

    def search(self, query: str = "") -> list[TokenMetadata]:
        """Case-insensitive ticker / name substring match, table order."""
        needle = query.strip().casefold()
        if not needle:
            return self.all()
        return [
            row for row in self._table
            if needle in row.ticker.casefold() or needle in row.name.casefold()
        ]


_default_registry = TokenRegistry(build_token_table())


def default_registry() -> TokenRegistry:
    return _default_registry
