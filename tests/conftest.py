import sys
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from apartment_manager.config import Settings  # noqa: E402
from apartment_manager.database import Base, Database, UsersBase  # noqa: E402
from apartment_manager.main import AppContext, open_databases  # noqa: E402
# Import the full models module so every table registers with its base.
from apartment_manager.models import models as _all_models  # noqa: E402,F401
from apartment_manager.models.models import Apartment  # noqa: E402
from apartment_manager.services.apartments import ApartmentStore  # noqa: E402


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings pointing every file the app writes into the test's tmp dir."""
    return Settings(
        users_database_url=f"sqlite:///{tmp_path / 'app.db'}",
        apartments_database_url=f"sqlite:///{tmp_path / 'resident.db'}",
        receipt_output_dir=str(tmp_path / "receipts"),
    )


@pytest.fixture
def apartments_db(test_settings) -> Generator[Database, None, None]:
    """Provide a fresh apartments database for each test."""
    database = Database(test_settings.apartments_database_url, Base)
    database.create_all()
    try:
        yield database
    finally:
        Base.metadata.drop_all(database.engine)
        database.dispose()


@pytest.fixture
def users_db(test_settings) -> Generator[Database, None, None]:
    database = Database(test_settings.users_database_url, UsersBase)
    database.create_all()
    try:
        yield database
    finally:
        UsersBase.metadata.drop_all(database.engine)
        database.dispose()


@pytest.fixture
def app(test_settings) -> Generator[AppContext, None, None]:
    with open_databases(test_settings) as context:
        yield context


@pytest.fixture
def store(apartments_db) -> ApartmentStore:
    return ApartmentStore(apartments_db)


@pytest.fixture
def create_apartment(store: ApartmentStore) -> Callable[..., Apartment]:
    def _create(apartment_id: str = "A1", owner: str = "Smith", resident: str = "") -> Apartment:
        return store.upsert({"id": apartment_id, "owner": owner, "resident": resident})

    return _create
