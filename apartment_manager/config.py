# apartment_manager/config.py
from decimal import Decimal
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # --- Databases ---
    # Login users live apart from the property records.
    users_database_url: str = "sqlite:///app.db"
    apartments_database_url: str = "sqlite:///resident.db"

    # --- Receipts ---
    receipt_output_dir: str = "receipts"
    system_title: str = "Apartment Management System"
    currency_symbol: str = "Rs."
    default_collection_amount: Decimal = Decimal("4000.00")

    # --- Ledger ---
    recent_transactions_limit: int = 10

    # --- Logging ---
    log_level: str = "INFO"
    log_json: bool = False


@lru_cache
def get_settings() -> Settings:
    return Settings()


def sqlite_path(database_url: str) -> Path | None:
    if not database_url.startswith("sqlite:///"):
        return None
    return Path(database_url.replace("sqlite:///", "", 1))
