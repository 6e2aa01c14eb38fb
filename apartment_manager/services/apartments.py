import logging
from typing import List

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.errors import ConstraintError, NotFoundError, ValidationError
from ..database import Database
from ..models.models import Apartment
from ..schemas.schemas import ApartmentCreate

logger = logging.getLogger(__name__)


def _ensure_apartment_data(data: ApartmentCreate | dict) -> ApartmentCreate:
    if isinstance(data, ApartmentCreate):
        return data
    try:
        return ApartmentCreate(**data)
    except PydanticValidationError as exc:
        raise ValidationError.from_pydantic(exc) from exc


def upsert_apartment(session: Session, data: ApartmentCreate | dict) -> Apartment:
    """Insert the apartment, or replace the stored row sharing its ID.

    Runs inside the caller's session so a batch of upserts can share one
    transaction. The same flag is always recomputed from owner and resident.
    """
    payload = _ensure_apartment_data(data)
    apartment = session.get(Apartment, payload.id)
    if apartment is None:
        apartment = Apartment(id=payload.id)
        session.add(apartment)
    apartment.owner = payload.owner
    apartment.resident = payload.resident
    apartment.same_flag = payload.same_flag
    session.flush()
    return apartment


class ApartmentStore:
    def __init__(self, database: Database) -> None:
        self.database = database

    def upsert(self, data: ApartmentCreate | dict) -> Apartment:
        payload = _ensure_apartment_data(data)
        try:
            with self.database.session_scope() as session:
                apartment = upsert_apartment(session, payload)
        except SQLAlchemyError as exc:
            raise ConstraintError(f"could not save apartment {payload.id!r}: {exc}") from exc
        logger.info("Saved apartment %s (same_flag=%s)", apartment.id, apartment.same_flag)
        return apartment

    def delete(self, apartment_id: str) -> bool:
        try:
            with self.database.session_scope() as session:
                apartment = session.get(Apartment, apartment_id)
                if apartment is None:
                    return False
                session.delete(apartment)
        except SQLAlchemyError as exc:
            raise ConstraintError(f"could not delete apartment {apartment_id!r}: {exc}") from exc
        logger.info("Deleted apartment %s", apartment_id)
        return True

    def get(self, apartment_id: str) -> Apartment:
        with self.database.session_scope() as session:
            apartment = session.get(Apartment, apartment_id)
        if apartment is None:
            raise NotFoundError("apartment", apartment_id)
        return apartment

    def list(self) -> List[Apartment]:
        with self.database.session_scope() as session:
            return list_apartments(session)

    def ids(self) -> List[str]:
        with self.database.session_scope() as session:
            return [row[0] for row in session.query(Apartment.id).order_by(Apartment.id.asc()).all()]

    def count(self) -> int:
        with self.database.session_scope() as session:
            return session.query(Apartment).count()


def list_apartments(session: Session) -> List[Apartment]:
    return session.query(Apartment).order_by(Apartment.id.asc()).all()
