import logging
from decimal import Decimal
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError

from ..config import Settings
from ..core.errors import ConstraintError, ValidationError
from ..database import Database
from ..models.models import Payment
from ..schemas.schemas import PaymentCreate
from ..utils.csv_utils import ledger_to_csv

logger = logging.getLogger(__name__)


class LedgerService:
    def __init__(self, database: Database, settings: Settings) -> None:
        self.database = database
        self.settings = settings

    def record_transaction(
        self,
        month: str,
        expense_type: str,
        amount: Decimal | float | str,
        transaction_type: str,
    ) -> Payment:
        try:
            payload = PaymentCreate(
                month=month,
                type=expense_type,
                price=amount,
                transaction_type=transaction_type,
            )
        except PydanticValidationError as exc:
            raise ValidationError.from_pydantic(exc) from exc

        try:
            with self.database.session_scope() as session:
                payment = Payment(**payload.model_dump())
                session.add(payment)
                session.flush()
        except SQLAlchemyError as exc:
            raise ConstraintError(f"could not record transaction: {exc}") from exc
        logger.info(
            "Recorded %s of %.2f for %s (%s)",
            payment.transaction_type,
            payment.price,
            payment.type,
            payment.month,
        )
        return payment

    def recent_transactions(self, limit: Optional[int] = None) -> List[Payment]:
        if limit is None:
            limit = self.settings.recent_transactions_limit
        if limit <= 0:
            return []
        with self.database.session_scope() as session:
            return (
                session.query(Payment)
                .order_by(Payment.date.desc(), Payment.id.desc())
                .limit(limit)
                .all()
            )

    def export_transactions(self, path: str | Path, limit: Optional[int] = None) -> int:
        with self.database.session_scope() as session:
            query = session.query(Payment).order_by(Payment.date.desc(), Payment.id.desc())
            if limit is not None:
                query = query.limit(limit)
            payments = query.all()
        Path(path).write_text(ledger_to_csv(payments), encoding="utf-8", newline="")
        logger.info("Exported %d ledger entries to %s", len(payments), path)
        return len(payments)
