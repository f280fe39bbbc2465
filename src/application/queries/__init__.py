"""Application queries (CQRS read operations).

Usage:
    from src.application.queries import GetCurrentUser, ListActiveSessions
"""

from src.application.queries.auth_queries import GetCurrentUser, ListActiveSessions

__all__ = ["GetCurrentUser", "ListActiveSessions"]
