from functools import lru_cache
from pathlib import Path

import click
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Storefront settings loaded from the environment (or a .env file).

    Remote store (required only for catalog and order commands):
      - SUPABASE_URL
      - SUPABASE_KEY (anon key)

    Everything else has a default.
    """

    SUPABASE_URL: str = ""
    SUPABASE_KEY: str = ""
    PRODUCTS_TABLE: str = "products"
    ORDERS_TABLE: str = "orders"

    # Local cart file; defaults to the per-user application directory
    CART_FILE: Path | None = None

    # Static payment instructions
    BANK_ACCOUNT_NAME: str = "Catena LTD"
    BANK_NAME: str = "Real Bank"
    BANK_ACCOUNT_NUMBER: str = "0123456789"

    # Sales contact channel (WhatsApp)
    CONTACT_PHONE: str = "+23481292785"
    CONTACT_MESSAGE_TEMPLATE: str = (
        "Good day, I have enquiries about an order, here is my order ID: {order_id}"
    )

    LOG_LEVEL: str = "WARNING"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def cart_path(self) -> Path:
        if self.CART_FILE is not None:
            return self.CART_FILE
        return Path(click.get_app_dir("storefront")) / "cart.json"


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures .env is parsed once per process.
    """
    return Settings()
