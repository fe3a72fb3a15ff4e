from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # App
    APP_NAME: str = "Limit Order Engine"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Draft construction
    MAX_BUY_LINES: int = 10
    DEFAULT_EXPIRATION_DAYS: int = 7
    MIN_EXPIRATION_SECONDS: int = 86_400  # contract rejects anything under one day
    PROTOCOL_FEE_BPS: int = 20  # 0.2%, deducted from the buyer's payment
    DISPLAY_SIGNIFICANT_FIGURES: int = 4
    PERCENT_DISPLAY_EPSILON: float = 0.01

    # Price marker drag
    DEFAULT_RANGE_PERCENT: float = 30.0
    RANGE_BUCKET_PERCENT: float = 10.0
    RANGE_PADDING_PERCENT: float = 5.0
    DRAG_THROTTLE_MS: int = 50
    DRAG_COOLDOWN_MS: int = 300

    # Market data
    PRICE_REFRESH_SECONDS: float = 10.0
    NATIVE_FALLBACK_USD_PRICE: float = 0.000034


settings = Settings()
