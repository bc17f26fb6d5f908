from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional


class Settings(BaseSettings):
    """
    Settings class to retrieve environment variables.
    """

    API_VERSION: str = "v1"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["http://localhost", "http://localhost:3000"]

    # Requests without an x-user-id header act on this user's cart
    DEFAULT_USER_ID: str = "demo-user"

    # Discount issuance: one code every NTH_ORDER_FOR_DISCOUNT completed orders
    NTH_ORDER_FOR_DISCOUNT: int = 3
    DISCOUNT_PERCENT: float = 10.0

    # Unset means the in-memory store is used
    DATABASE_URL: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file='.env',
        extra='ignore',
    )


Config = Settings()
