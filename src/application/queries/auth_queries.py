"""Authentication queries (CQRS read operations).

Queries represent requests for information. They are immutable dataclasses
with question-like names. Queries NEVER change state.
"""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class GetCurrentUser:
    """Get the user identified by a verified access token.

    Attributes:
        user_id: ``sub`` claim of the access token.

    Example:
        >>> query = GetCurrentUser(user_id=payload.user_id)
        >>> result = await handler.handle(query)
    """

    user_id: UUID


@dataclass(frozen=True, kw_only=True)
class ListActiveSessions:
    """List the unexpired sessions of a user, newest first.

    Attributes:
        user_id: User identifier.
        current_session_id: Session of the caller (flagged in the result).
    """

    user_id: UUID
    current_session_id: UUID | None = None
