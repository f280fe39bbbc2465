"""LoggerProtocol: structured logging port.

Every entry is an event name plus key-value context. Identify tokens by
their ``jti`` and users by id; raw access/refresh tokens, authorization
codes, PKCE verifiers and client secrets are never logged.

Example:
    logger.warning("refresh_token_theft_detected", user_id=str(user.id))
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Structured logger used by services, handlers and adapters."""

    def debug(self, message: str, /, **context: Any) -> None: ...

    def info(self, message: str, /, **context: Any) -> None: ...

    def warning(self, message: str, /, **context: Any) -> None: ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a failure; implementations record the type and text of ``error``."""
        ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Return a logger that adds ``context`` to every entry."""
        ...
