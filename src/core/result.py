"""Success/Failure result values.

Handlers return ``Result[T, AuthError]`` for every outcome a client can
cause (bad code, reused token, disabled account); callers branch with
``match``:

    match await handler.handle(RefreshTokens(refresh_token=raw)):
        case Success(value=pair):
            ...
        case Failure(error=TokenTheftDetectedError()):
            ...
        case Failure(error=error):
            ...
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    error: E


Result = Union[Success[T], Failure[E]]
