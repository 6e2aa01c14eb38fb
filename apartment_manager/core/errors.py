from typing import Optional


class ApartmentManagerError(Exception):
    """Base class for failures surfaced to the invoking surface."""


class NotFoundError(ApartmentManagerError):
    def __init__(self, entity: str, key) -> None:
        super().__init__(f"{entity} {key!r} not found")
        self.entity = entity
        self.key = key


class ConstraintError(ApartmentManagerError):
    """A write was rejected by the storage layer."""


class FormatError(ApartmentManagerError):
    def __init__(self, message: str, row_number: Optional[int] = None) -> None:
        if row_number is not None:
            message = f"row {row_number}: {message}"
        super().__init__(message)
        self.row_number = row_number


class UnsupportedFormatError(ApartmentManagerError):
    def __init__(self, extension: str) -> None:
        super().__init__(f"unsupported file type: {extension or '(none)'}")
        self.extension = extension


class ReceiptWriteError(ApartmentManagerError, OSError):
    """The receipt directory or file could not be written."""


class ValidationError(ApartmentManagerError):
    @classmethod
    def from_pydantic(cls, exc) -> "ValidationError":
        problems = []
        for error in exc.errors():
            field = ".".join(str(part) for part in error.get("loc", ())) or "input"
            problems.append(f"{field}: {error.get('msg', 'invalid value')}")
        return cls("; ".join(problems) or "invalid input")


class AuthenticationError(ApartmentManagerError):
    pass


def user_message(exc: BaseException) -> str:
    """Render a failure as the single line shown to the user."""
    if isinstance(exc, ApartmentManagerError):
        return str(exc)
    if isinstance(exc, OSError):
        target = exc.filename or ""
        reason = exc.strerror or str(exc)
        return f"{reason}: {target}" if target else reason
    return "Unexpected error. See the application log for details."
