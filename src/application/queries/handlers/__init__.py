"""Query handlers.

Usage:
    from src.application.queries.handlers import GetCurrentUserHandler
"""

from src.application.queries.handlers.get_current_user_handler import (
    GetCurrentUserHandler,
)
from src.application.queries.handlers.list_active_sessions_handler import (
    ListActiveSessionsHandler,
)

__all__ = ["GetCurrentUserHandler", "ListActiveSessionsHandler"]
