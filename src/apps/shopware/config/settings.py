import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Application configuration settings loaded from environment variables."""

    LOG_LEVEL: str = "INFO"
    DATA_PATH: Path = Path(__file__).parent.parent.joinpath("data")
    IMAGE_CACHE_PATH: Path = Path(__file__).parent.parent.joinpath("data", "generated_images")

    # OpenAI Configuration
    OPENAI_API_KEY: str = ""
    TEXT_MODEL: str = "gpt-4.1-2025-04-14"
    IMAGE_MODEL: str = "gpt-image-1"
    IMAGE_SIZE: str = "1024x1024"

    # Context enrichment
    ENRICH_MAX_CHARS: int = 3000
    STATIC_FETCH_TIMEOUT: float = 10.0
    RENDER_TIMEOUT_MS: int = 30000
    RENDER_SETTLE_MS: int = 1000

    # Shopware Admin API Configuration
    SW_ENV_URL: str = "http://localhost:8000"
    SW_CLIENT_ID: str = ""
    SW_CLIENT_SECRET: str = ""
    SW_ADMIN_USER: str = "admin"
    SW_ADMIN_PASSWORD: str = "shopware"
    SW_SALES_CHANNEL: str = "Storefront"
    SW_CURRENCY: str = "EUR"

    # Generation defaults
    DEFAULT_CATEGORY: str = "soft drinks"
    DEFAULT_PRODUCT_COUNT: int = 10
    DEFAULT_DESCRIPTION_WORDS: int = 200

    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 3000

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def model_dump_str(self):
        dump = self.model_dump()
        return {k: str(v) for k, v in dump.items() if "KEY" not in k and "SECRET" not in k and "PASSWORD" not in k}

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if self.OPENAI_API_KEY and self.OPENAI_API_KEY.strip():
            os.environ["OPENAI_API_KEY"] = self.OPENAI_API_KEY


# Create a singleton instance
settings = Config()  # type: ignore
