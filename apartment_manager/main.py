import logging
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

from .config import Settings, get_settings
from .core.logging import configure_logging
from .database import Base, Database, UsersBase
# Register every table with its declarative base before create_all runs.
from .models import models as _all_models  # noqa: F401
from .services.apartments import ApartmentStore
from .services.collections import CollectionService
from .services.ledger import LedgerService
from .services.transfer import export_apartments, import_apartments
from .services.users import UserService

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    settings: Settings
    users_db: Database
    apartments_db: Database
    users: UserService
    apartments: ApartmentStore
    collections: CollectionService
    ledger: LedgerService

    def import_apartments(self, path: str | Path) -> int:
        return import_apartments(self.apartments_db, path)

    def export_apartments(self, path: str | Path) -> int:
        return export_apartments(self.apartments_db, path)


@contextmanager
def open_databases(app_settings: Optional[Settings] = None, *, setup_logging: bool = False) -> Iterator[AppContext]:
    """Open both databases, create missing tables and build the services.

    The databases are disposed when the block exits.
    """
    app_settings = app_settings or get_settings()
    if setup_logging:
        configure_logging(app_settings.log_level.upper(), json_output=app_settings.log_json)  # type: ignore[arg-type]

    with ExitStack() as stack:
        users_db = stack.enter_context(Database(app_settings.users_database_url, UsersBase))
        apartments_db = stack.enter_context(Database(app_settings.apartments_database_url, Base))
        users_db.create_all()
        apartments_db.create_all()
        logger.info(
            "Databases ready (users=%s, apartments=%s)",
            app_settings.users_database_url,
            app_settings.apartments_database_url,
        )

        yield AppContext(
            settings=app_settings,
            users_db=users_db,
            apartments_db=apartments_db,
            users=UserService(users_db),
            apartments=ApartmentStore(apartments_db),
            collections=CollectionService(apartments_db, app_settings),
            ledger=LedgerService(apartments_db, app_settings),
        )
