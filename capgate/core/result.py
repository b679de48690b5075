"""Result types for railway-oriented programming.

Operations that can fail return ``Result[T, E]`` instead of raising. Every
failure in the dispatch path (unknown resource, denied action, backend error)
travels back to the caller as a ``Failure`` carrying a typed error value.

Usage:
    def lookup(name: str) -> Result[ActionSet, NotFoundError]:
        if name not in types:
            return Failure(error=NotFoundError(...))
        return Success(value=types[name])

    match registry.lookup("dataset-probe"):
        case Success(value=action_set):
            ...
        case Failure(error=error):
            ...
"""

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


Result: TypeAlias = Success[T] | Failure[E]
