"""Application services shared by the authentication handlers.

Usage:
    from src.application.services import RefreshTokenLedger, SessionTracker
"""

from src.application.services.refresh_token_ledger import RefreshTokenLedger
from src.application.services.session_tracker import SessionTracker

__all__ = ["RefreshTokenLedger", "SessionTracker"]
