import logging
from decimal import Decimal

from apartment_manager.config import Settings, sqlite_path
from apartment_manager.core.logging import configure_logging


def test_defaults_match_the_original_file_layout(monkeypatch):
    for name in ["USERS_DATABASE_URL", "APARTMENTS_DATABASE_URL", "RECEIPT_OUTPUT_DIR"]:
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.users_database_url == "sqlite:///app.db"
    assert settings.apartments_database_url == "sqlite:///resident.db"
    assert settings.default_collection_amount == Decimal("4000.00")
    assert settings.recent_transactions_limit == 10


def test_settings_read_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("RECEIPT_OUTPUT_DIR", str(tmp_path / "pdf"))
    monkeypatch.setenv("CURRENCY_SYMBOL", "$")

    settings = Settings(_env_file=None)

    assert settings.receipt_output_dir == str(tmp_path / "pdf")
    assert settings.currency_symbol == "$"


def test_sqlite_path():
    assert str(sqlite_path("sqlite:///data/resident.db")) == "data/resident.db"
    assert sqlite_path("postgresql://localhost/db") is None


def test_configure_logging_sets_root_level():
    root = logging.getLogger()
    previous_level, previous_handlers = root.level, list(root.handlers)
    try:
        configure_logging("DEBUG")
        assert root.level == logging.DEBUG
        assert logging.getLogger("sqlalchemy.engine").level == logging.INFO

        configure_logging("WARNING")
        assert root.level == logging.WARNING
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
    finally:
        root.handlers = previous_handlers
        root.setLevel(previous_level)
