from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship as orm_relationship

from ..database import Base, UsersBase


def utcnow():
    return datetime.now(timezone.utc)


class User(UsersBase):
    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String, unique=True, index=True, nullable=False)
    # Holds a passlib hash; the column name is kept from the original schema.
    hashed_password = Column("password", String, nullable=False)


class Apartment(Base):
    __tablename__ = "apartments"

    id = Column(String, primary_key=True)
    owner = Column(String, nullable=False)
    resident = Column(String, nullable=False)
    same_flag = Column(Boolean, nullable=False, default=False)

    collections = orm_relationship("Collection", back_populates="apartment")


class Collection(Base):
    __tablename__ = "collections"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    apartment_id = Column(String, ForeignKey("apartments.id"), nullable=False, index=True)
    month = Column(String, nullable=False)
    type = Column(String, nullable=False)  # Maintenance|Other
    price = Column(Float(asdecimal=True, decimal_return_scale=2), nullable=False)
    date = Column(DateTime, default=utcnow, server_default=func.current_timestamp(), nullable=False)

    apartment = orm_relationship("Apartment", back_populates="collections")


class Payment(Base):
    __tablename__ = "payments"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    month = Column(String, nullable=False)
    type = Column(String, nullable=False)
    price = Column(Float(asdecimal=True, decimal_return_scale=2), nullable=False)
    transaction_type = Column(String, nullable=False)  # Debit|Credit
    date = Column(DateTime, default=utcnow, server_default=func.current_timestamp(), nullable=False, index=True)
