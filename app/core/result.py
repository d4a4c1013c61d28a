from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from app.core.errors import AppError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    error: AppError


# Returned by repositories and the geocoding client instead of raising
Result = Union[Ok[T], Err]
