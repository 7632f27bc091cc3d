from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    APP_NAME: str = "Art Marketplace Storefront"
    DEBUG: bool = False  # Safe default for production; set DEBUG=True in .env for local dev
    LOG_LEVEL: str = "INFO"

    # Tax: disabled unless explicitly turned on
    TAX_ENABLED: bool = False
    # No key → provider unavailable → manual VAT table is used
    STRIPE_SECRET_KEY: str | None = None
    STRIPE_API_URL: str = "https://api.stripe.com"

    # Hosted marketplace platform
    MARKETPLACE_API_URL: str = "https://flex-api.sharetribe.com"
    MARKETPLACE_ASSETS_URL: str = "https://cdn.st-api.com/v1/assets/pub"
    MARKETPLACE_CLIENT_ID: str = ""
    # Needed to exchange caller tokens for trusted ones (privileged transitions)
    MARKETPLACE_CLIENT_SECRET: str | None = None
    COMMISSION_ASSET_PATH: str = "/latest/transactions/commission.json"

    # Pricing
    DEFAULT_UNIT_TYPE: str = "item"
    ART_LEVY_ENABLED: bool = False
    ART_LEVY_RATE_BPS: int = 500  # 5% kunstavgift


settings = Settings()
