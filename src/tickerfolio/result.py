"""Tagged ``Ok | Err`` result used at the service boundary."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

from .errors import ErrorKind, TickerfolioError

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Err:
    kind: ErrorKind
    message: str

    @property
    def ok(self) -> bool:
        return False

    @classmethod
    def from_error(cls, error: TickerfolioError) -> "Err":
        return cls(kind=error.kind, message=error.message)


Result = Union[Ok[T], Err]


def attempt(func: Callable[..., T], *args, **kwargs) -> Result[T]:
    """Run ``func`` and fold domain errors into ``Err``.

    Only ``TickerfolioError`` is captured; anything else is a bug and
    propagates unchanged.
    """

    try:
        return Ok(func(*args, **kwargs))
    except TickerfolioError as exc:
        return Err.from_error(exc)
