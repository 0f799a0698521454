"""Result types for error handling without exceptions."""

from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, NoReturn, TypeVar

from attrs import field, frozen
from beartype import beartype

T = TypeVar("T")
E = TypeVar("E")


class ErrorKind(str, Enum):
    """Classification of service failures, mapped to HTTP statuses at the edge."""

    VALIDATION = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    STORAGE = "STORAGE_ERROR"


@frozen
class ServiceError:
    """A classified service failure with a human-readable message."""

    kind: ErrorKind = field()
    message: str = field()

    @classmethod
    @beartype
    def validation(cls, message: str) -> "ServiceError":
        """Build a validation error."""
        return cls(ErrorKind.VALIDATION, message)

    @classmethod
    @beartype
    def not_found(cls, message: str) -> "ServiceError":
        """Build a not-found error."""
        return cls(ErrorKind.NOT_FOUND, message)

    @classmethod
    @beartype
    def storage(cls, message: str) -> "ServiceError":
        """Build a storage failure error."""
        return cls(ErrorKind.STORAGE, message)

    def __str__(self) -> str:
        return self.message


@frozen
class Ok(Generic[T]):
    """Success result wrapper."""

    value: T

    @beartype
    def is_ok(self) -> bool:
        """Check if result is Ok."""
        return True

    @beartype
    def is_err(self) -> bool:
        """Check if result is Error."""
        return False

    @beartype
    def unwrap(self) -> T:
        """Get the success value."""
        return self.value

    @beartype
    def unwrap_or(self, default: T) -> T:
        """Get the success value."""
        return self.value

    @beartype
    def unwrap_err(self) -> NoReturn:
        """Raise ValueError as this is Ok."""
        raise ValueError("Called unwrap_err on Ok value")


@frozen
class Err(Generic[E]):
    """Error result wrapper."""

    error: E

    @beartype
    def is_ok(self) -> bool:
        """Check if result is Ok."""
        return False

    @beartype
    def is_err(self) -> bool:
        """Check if result is Error."""
        return True

    @beartype
    def unwrap(self) -> NoReturn:
        """Raise ValueError as this is Err."""
        raise ValueError(f"Called unwrap on Err value: {self.error}")

    @beartype
    def unwrap_or(self, default: T) -> T:
        """Return default value."""
        return default

    @beartype
    def unwrap_err(self) -> E:
        """Get the error value."""
        return self.error


if TYPE_CHECKING:
    Result = Ok[T] | Err[E]
else:

    class Result(Generic[T, E]):
        """Result alias with generic type support."""

        def __class_getitem__(cls, params: Any) -> Any:
            """Support generic type annotations like Result[T, E]."""
            return Ok[Any] | Err[Any]
