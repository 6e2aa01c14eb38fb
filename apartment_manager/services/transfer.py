import logging
from pathlib import Path

from sqlalchemy.exc import SQLAlchemyError

from ..core.errors import ConstraintError
from ..database import Database
from .apartments import list_apartments, upsert_apartment
from .records import codec_for_path

logger = logging.getLogger(__name__)


def import_apartments(database: Database, path: str | Path) -> int:
    """Upsert every row of the file in a single transaction.

    Either all rows are committed or none are.
    """
    path = Path(path)
    codec = codec_for_path(path)
    records = codec.read(path)

    try:
        with database.session_scope() as session:
            for record in records:
                upsert_apartment(session, record)
    except SQLAlchemyError as exc:
        logger.warning("Import of %s rolled back: %s", path, exc)
        raise ConstraintError(f"import of {path.name} failed and was rolled back: {exc}") from exc

    logger.info("Imported %d apartments from %s", len(records), path)
    return len(records)


def export_apartments(database: Database, path: str | Path) -> int:
    path = Path(path)
    codec = codec_for_path(path)
    with database.session_scope() as session:
        apartments = list_apartments(session)
    written = codec.write(path, apartments)
    logger.info("Exported %d apartments to %s", written, path)
    return written
