"""Global enums.

OnChainStatus values must match the order contract's status codes exactly.
"""

from enum import Enum, IntEnum


class OnChainStatus(IntEnum):
    ACTIVE = 0
    CANCELLED = 1
    COMPLETED = 2


class EffectiveStatus(str, Enum):
    """Display status; EXPIRED is derived from ACTIVE + wall clock."""
    ACTIVE = "ACTIVE"
    EXPIRED = "EXPIRED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class TokenVariant(str, Enum):
    NATIVE = "NATIVE"
    PULSECHAIN = "PULSECHAIN"
    BRIDGED = "BRIDGED"  # bridged from Ethereum ("we" tickers)


class TokenCategory(str, Enum):
    MAXI = "MAXI"
    NON_MAXI = "NON_MAXI"


class EditField(str, Enum):
    SELL = "SELL"
    BUY = "BUY"
    PRICE = "PRICE"
    PERCENT = "PERCENT"
    LINE_PRICE = "LINE_PRICE"
    TOKEN = "TOKEN"


class PresetDirection(str, Enum):
    ABOVE = "ABOVE"
    BELOW = "BELOW"


class OwnershipFilter(str, Enum):
    MINE = "MINE"
    NON_MINE = "NON_MINE"
    ALL = "ALL"


class StatusFilter(str, Enum):
    ACTIVE = "ACTIVE"
    EXPIRED = "EXPIRED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    ALL = "ALL"


class CategoryFilter(str, Enum):
    MAXI = "MAXI"
    NON_MAXI = "NON_MAXI"
    ALL = "ALL"


class SortField(str, Enum):
    SELL_USD = "SELL_USD"
    ASKING_FOR = "ASKING_FOR"
    PROGRESS = "PROGRESS"
    OWNER = "OWNER"
    STATUS = "STATUS"
    EXPIRATION = "EXPIRATION"
    LIMIT_VS_MARKET = "LIMIT_VS_MARKET"


class SortDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


class DragPhase(str, Enum):
    IDLE = "IDLE"
    DRAGGING = "DRAGGING"
    COOLDOWN = "COOLDOWN"
