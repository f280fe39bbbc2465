"""Application layer - Use cases (CQRS commands/queries and handlers).

Contents:
- commands/: write intents (AuthenticateUser, RefreshTokens, LogoutUser, ...)
- queries/: read intents (GetCurrentUser, ListActiveSessions)
- dtos/: results carried back to the presentation layer
- services/: refresh token ledger and session tracker shared by handlers

The application layer depends only on the domain layer. Infrastructure
adapters are injected through domain protocols by the container.
"""
