import logging
from typing import List, Optional

from passlib.exc import UnknownHashError
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..auth.passwords import get_password_hash, verify_password
from ..core.errors import AuthenticationError, ConstraintError, NotFoundError, ValidationError
from ..database import Database
from ..models.models import User
from ..schemas.schemas import UserCreate

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, database: Database) -> None:
        self.database = database

    def save_user(self, username: str, password: str, user_id: Optional[int] = None) -> User:
        """Create a login user, or update the one with ``user_id``."""
        try:
            payload = UserCreate(username=username, password=password)
        except PydanticValidationError as exc:
            raise ValidationError("username and password are required") from exc

        try:
            with self.database.session_scope() as session:
                if user_id is None:
                    user = User(username=payload.username)
                    session.add(user)
                else:
                    user = session.get(User, user_id)
                    if user is None:
                        raise NotFoundError("user", user_id)
                    user.username = payload.username
                user.hashed_password = get_password_hash(payload.password)
                session.flush()
        except IntegrityError as exc:
            raise ConstraintError(f"username {payload.username!r} is already taken") from exc
        except SQLAlchemyError as exc:
            raise ConstraintError(f"could not save user {payload.username!r}: {exc}") from exc
        logger.info("Saved user %s (id=%s)", user.username, user.id)
        return user

    def delete_user(self, user_id: int) -> bool:
        with self.database.session_scope() as session:
            user = session.get(User, user_id)
            if user is None:
                return False
            session.delete(user)
        logger.info("Deleted user %s", user_id)
        return True

    def get(self, user_id: int) -> User:
        with self.database.session_scope() as session:
            user = session.get(User, user_id)
        if user is None:
            raise NotFoundError("user", user_id)
        return user

    def list(self) -> List[User]:
        with self.database.session_scope() as session:
            return session.query(User).order_by(User.id.asc()).all()

    def count(self) -> int:
        with self.database.session_scope() as session:
            return session.query(User).count()

    def authenticate(self, username: str, password: str) -> bool:
        with self.database.session_scope() as session:
            user = session.query(User).filter(User.username == username).first()
        if user is None:
            return False
        try:
            return verify_password(password, user.hashed_password)
        except (UnknownHashError, ValueError):
            logger.warning("Stored password for %s is not a recognised hash", username)
            return False

    def login(self, username: str, password: str) -> User:
        if not self.authenticate(username, password):
            logger.info("Failed login for %s", username)
            raise AuthenticationError("invalid credentials")
        with self.database.session_scope() as session:
            return session.query(User).filter(User.username == username).one()
