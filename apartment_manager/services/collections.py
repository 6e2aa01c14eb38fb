"""Maintenance collections and their receipts.

Recording a collection is two steps with separate durability: the database
insert, then the receipt file. A receipt failure does not undo the insert;
it is reported on the returned outcome instead so the caller can tell a
fully processed collection from one that still needs its receipt.
"""
import logging
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError

from ..config import Settings
from ..core.errors import ConstraintError, NotFoundError, ReceiptWriteError, ValidationError
from ..database import Database
from ..models.models import Apartment, Collection
from ..schemas.schemas import CollectionCreate
from ..utils.pdf_utils import generate_collection_receipt

logger = logging.getLogger(__name__)

STATUS_RECORDED = "RECORDED"
STATUS_RECEIPT_FAILED = "RECEIPT_FAILED"


@dataclass
class CollectionOutcome:
    collection: Collection
    receipt_path: Optional[Path] = None
    receipt_error: Optional[ReceiptWriteError] = None

    @property
    def status(self) -> str:
        return STATUS_RECEIPT_FAILED if self.receipt_error else STATUS_RECORDED

    @property
    def fully_processed(self) -> bool:
        return self.receipt_error is None


class CollectionService:
    def __init__(self, database: Database, settings: Settings) -> None:
        self.database = database
        self.settings = settings

    def record_collection(
        self,
        apartment_id: str,
        month: str,
        collection_type: str,
        amount: Decimal | float | str | None = None,
    ) -> CollectionOutcome:
        try:
            payload = CollectionCreate(
                apartment_id=apartment_id,
                month=month,
                type=collection_type,
                price=self.settings.default_collection_amount if amount is None else amount,
            )
        except PydanticValidationError as exc:
            raise ValidationError.from_pydantic(exc) from exc

        try:
            with self.database.session_scope() as session:
                if session.get(Apartment, payload.apartment_id) is None:
                    raise NotFoundError("apartment", payload.apartment_id)
                collection = Collection(**payload.model_dump())
                session.add(collection)
                session.flush()
        except SQLAlchemyError as exc:
            raise ConstraintError(f"could not record collection for {payload.apartment_id!r}: {exc}") from exc
        logger.info(
            "Recorded collection %s for apartment %s (%s %s, %.2f)",
            collection.id,
            collection.apartment_id,
            collection.month,
            collection.type,
            collection.price,
        )

        outcome = CollectionOutcome(collection=collection)
        try:
            outcome.receipt_path = self._write_receipt(collection)
        except ReceiptWriteError as exc:
            logger.exception("Collection %s is recorded but its receipt could not be written", collection.id)
            outcome.receipt_error = exc
        return outcome

    def regenerate_receipt(self, collection_id: int) -> Path:
        return self._write_receipt(self.get(collection_id))

    def get(self, collection_id: int) -> Collection:
        with self.database.session_scope() as session:
            collection = session.get(Collection, collection_id)
        if collection is None:
            raise NotFoundError("collection", collection_id)
        return collection

    def list_for_apartment(self, apartment_id: str) -> List[Collection]:
        with self.database.session_scope() as session:
            return (
                session.query(Collection)
                .filter(Collection.apartment_id == apartment_id)
                .order_by(Collection.date.desc(), Collection.id.desc())
                .all()
            )

    def _write_receipt(self, collection: Collection) -> Path:
        path = generate_collection_receipt(
            collection,
            output_dir=self.settings.receipt_output_dir,
            title=self.settings.system_title,
            currency_symbol=self.settings.currency_symbol,
        )
        logger.info("Receipt for collection %s written to %s", collection.id, path)
        return path
