"""Container module - Centralized dependency injection.

This module re-exports all factory functions from submodules:

    from src.core.container import get_token_issuer, get_logger, ...

The container is organized into modules:
- infrastructure: Core services (db, revocation store, issuer, hasher,
  identity provider, logging)
- auth_handlers: Authentication handler factories
"""

# Infrastructure services
from src.core.container.infrastructure import (
    get_database,
    get_db_session,
    get_identity_provider,
    get_logger,
    get_revocation_store,
    get_secret_hasher,
    get_token_issuer,
)

# Auth handlers
from src.core.container.auth_handlers import (
    build_refresh_token_ledger,
    build_session_tracker,
    get_authenticate_user_handler,
    get_get_current_user_handler,
    get_list_active_sessions_handler,
    get_logout_user_handler,
    get_purge_expired_auth_records_handler,
    get_refresh_tokens_handler,
)

__all__ = [
    # Infrastructure
    "get_database",
    "get_db_session",
    "get_identity_provider",
    "get_logger",
    "get_revocation_store",
    "get_secret_hasher",
    "get_token_issuer",
    # Application services
    "build_refresh_token_ledger",
    "build_session_tracker",
    # Auth handlers
    "get_authenticate_user_handler",
    "get_get_current_user_handler",
    "get_list_active_sessions_handler",
    "get_logout_user_handler",
    "get_purge_expired_auth_records_handler",
    "get_refresh_tokens_handler",
]
