"""Base type for expected failures carried inside ``Failure``.

Failures the caller is meant to handle (identity provider rejected the code,
refresh token reused, account disabled) are values, never raised. Storage
outages and programming errors stay ordinary exceptions.

Subclasses are frozen, slotted, keyword-only dataclasses that add context
fields:

    @dataclass(frozen=True, slots=True, kw_only=True)
    class TokenTheftDetectedError(AuthError):
        user_id: UUID | None = None
"""

from dataclasses import dataclass

from src.core.enums import ErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class DomainError:
    """Expected failure: stable code, readable message, optional context.

    Not an Exception subclass, so it cannot be raised by accident.
    """

    code: ErrorCode
    message: str
    details: dict[str, str] | None = None

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"
