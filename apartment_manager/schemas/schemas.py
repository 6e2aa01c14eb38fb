from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from ..constants import TRANSACTION_TYPE_LABELS, VACANT_RESIDENT

Month = Literal[
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]
CollectionType = Literal["Maintenance", "Other"]
ExpenseType = Literal["Security Service", "Cleaning Services", "Utilities", "Repairs"]
TransactionType = Literal["Debit", "Credit"]


def compute_same_flag(owner: str, resident: str) -> bool:
    return bool(owner) and owner == resident


class ApartmentCreate(BaseModel):
    id: str = Field(min_length=1)
    owner: str = ""
    resident: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def _strip_id(cls, value):
        return str(value).strip() if value is not None else ""

    # Names are kept exactly as entered; the same flag compares them verbatim.
    @field_validator("owner", "resident", mode="before")
    @classmethod
    def _text(cls, value):
        return "" if value is None else str(value)

    @field_validator("resident")
    @classmethod
    def _vacant_when_blank(cls, value: str) -> str:
        return value or VACANT_RESIDENT

    @computed_field  # type: ignore[misc]
    @property
    def same_flag(self) -> bool:
        return compute_same_flag(self.owner, self.resident)


class ApartmentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    owner: str
    resident: str
    same_flag: bool


class CollectionCreate(BaseModel):
    apartment_id: str = Field(min_length=1)
    month: Month
    type: CollectionType
    price: Decimal

    @field_validator("apartment_id", mode="before")
    @classmethod
    def _strip(cls, value):
        return str(value).strip() if value is not None else ""


class CollectionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    apartment_id: str
    month: str
    type: str
    price: Decimal
    date: datetime


class PaymentCreate(BaseModel):
    month: Month
    type: ExpenseType
    price: Decimal
    transaction_type: TransactionType

    @field_validator("price", mode="before")
    @classmethod
    def _parse_amount(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("transaction_type", mode="before")
    @classmethod
    def _normalize_label(cls, value):
        if isinstance(value, str):
            return TRANSACTION_TYPE_LABELS.get(value, value)
        return value


class PaymentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    month: str
    type: str
    price: Decimal
    transaction_type: str
    date: datetime


class UserCreate(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)

    @field_validator("username", mode="before")
    @classmethod
    def _strip(cls, value):
        return str(value).strip() if value is not None else ""


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
