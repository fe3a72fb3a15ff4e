"""Token metadata table.

Families and categories are declared per canonical address; nothing is
inferred from ticker prefixes. Table order is the contract whitelist order
unless a registry is rebuilt with an explicit whitelist.
"""
from src.lo_common.enums import TokenVariant
from src.lo_market.domain.models import TokenFamily, TokenMetadata, TokenRef

NATIVE_ADDRESS = "0x000000000000000000000000000000000000dead"
NATIVE_ALIASES = frozenset({
    "0x0",
    "0x0000000000000000000000000000000000000000",
})
WPLS_ADDRESS = "0xa1077a294dde1b09bb078844df40758a5d0f9a27"
WEDAI_ADDRESS = "0xefd766ccb38eaf1dfd701853bfce31359239f305"
HEX_ADDRESS = "0x2b591e99afe9f32eaa6214f7b7629768c40eeb39"

DEFAULT_NATIVE_FALLBACK_USD_PRICE = 0.000034

_NATIVE = TokenVariant.NATIVE
_PULSE = TokenVariant.PULSECHAIN
_BRIDGED = TokenVariant.BRIDGED

# (address, ticker, name, decimals, base_asset, variant)
_ROWS: tuple[tuple[str, str, str, int, str, TokenVariant], ...] = (
    (HEX_ADDRESS, "HEX", "HEX", 8, "HEX", _PULSE),
    ("0x57fde0a71132198bbec939b98976993d8d89d225", "weHEX", "HEX from Ethereum", 8, "HEX", _BRIDGED),
    (NATIVE_ADDRESS, "PLS", "Pulse", 18, "PLS", _NATIVE),
    (WPLS_ADDRESS, "WPLS", "Wrapped Pulse", 18, "PLS", _PULSE),
    ("0x95b303987a60c71504d99aa1b13b4da07b0790ab", "PLSX", "PulseX", 18, "PLSX", _PULSE),
    ("0x2fa878ab3f87cc1c9737fc071108f904c0b0c95d", "INC", "Incentive", 18, "INC", _PULSE),
    (WEDAI_ADDRESS, "weDAI", "Dai Stablecoin from Ethereum", 18, "DAI", _BRIDGED),
    ("0x15d38573d2feeb82e7ad5187ab8c1d52810b1f07", "weUSDC", "USD Coin from Ethereum", 6, "USDC", _BRIDGED),
    ("0x0cb6f5a34ad42ec934882a05265a7d5f59b51a2f", "weUSDT", "Tether USD from Ethereum", 6, "USDT", _BRIDGED),
    ("0x0d86eb9f43c57f6ff3bc9e23d8f9d82503f0e84b", "MAXI", "Maximus", 8, "MAXI", _PULSE),
    ("0x6b32022693210cd2cfc466b9ac0085de8fc34ea6", "DECI", "Maximus Decimus", 8, "DECI", _PULSE),
    ("0x6b0956258ff7bd7645aa35369b55b61b8e6d6140", "LUCKY", "Maximus Lucky", 8, "LUCKY", _PULSE),
    ("0xf55cd1e399e1cc3d95303048897a680be3313308", "TRIO", "Maximus Trio", 8, "TRIO", _PULSE),
    ("0xe9f84d418b008888a992ff8c6d22389c2c3504e0", "BASE", "Maximus Base", 8, "BASE", _PULSE),
    ("0x352511c9bc5d47dbc122883ed9353e987d10a3ba", "weMAXI", "Maximus from Ethereum", 8, "MAXI", _BRIDGED),
    ("0x189a3ca3cc1337e85c7bc0a43b8d3457fd5aae89", "weDECI", "Maximus Decimus from Ethereum", 8, "DECI", _BRIDGED),
    ("0x8924f56df76ca9e7babb53489d7bef4fb7caff19", "weLUCKY", "Maximus Lucky from Ethereum", 8, "LUCKY", _BRIDGED),
    ("0x0f3c6134f4022d85127476bc4d3787860e5c5569", "weTRIO", "Maximus Trio from Ethereum", 8, "TRIO", _BRIDGED),
    ("0xda073388422065fe8d3b5921ec2ae475bae57bed", "weBASE", "Maximus Base from Ethereum", 8, "BASE", _BRIDGED),
)


def build_token_table(
    native_fallback_usd_price: float = DEFAULT_NATIVE_FALLBACK_USD_PRICE,
) -> list[TokenMetadata]:
    table: list[TokenMetadata] = []
    for address, ticker, name, decimals, base_asset, variant in _ROWS:
        pegged = 1.0 if address == WEDAI_ADDRESS else None
        proxy = WPLS_ADDRESS if address == NATIVE_ADDRESS else None
        fallback = native_fallback_usd_price if address == NATIVE_ADDRESS else None
        table.append(
            TokenMetadata(
                token=TokenRef(address=address, ticker=ticker, decimals=decimals),
                name=name,
                family=TokenFamily(base_asset=base_asset, variant=variant),
                pegged_usd_price=pegged,
                price_proxy=proxy,
                fallback_usd_price=fallback,
            )
        )
    return table
