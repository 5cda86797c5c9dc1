"""Value-style results for callers that prefer not to handle exceptions."""
from dataclasses import dataclass
from typing import Any, Awaitable, Generic, Optional, TypeVar, Union

from gitfs.exceptions import ContentError, ErrorKind

T = TypeVar("T")


# Result Types
@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    kind: ErrorKind
    message: str
    status: Optional[int] = None

    @property
    def ok(self) -> bool:
        return False

    @classmethod
    def from_exception(cls, error: ContentError) -> "Err":
        return cls(kind=error.kind, message=str(error), status=error.status)


Result = Union[Ok[Any], Err]


# Helpers
async def capture(operation: Awaitable[T]) -> Union[Ok[T], Err]:
    """Await a client operation and fold content errors into an Err.

    Transport failures are not content errors and still propagate.
    """
    try:
        return Ok(await operation)
    except ContentError as e:
        return Err.from_exception(e)
