"""Domain layer - Pure business logic.

This layer contains the authentication entities, value objects, errors and
protocols (ports). It has NO dependencies on any framework or
infrastructure - it is pure Python.

Structure:
- entities/: Domain entities (User, RefreshTokenRecord, SessionRecord)
- value_objects/: Value objects (TokenPair, TokenPayload, ProviderClaims, ...)
- errors/: Failure variants returned inside Result types
- protocols/: Ports implemented by infrastructure adapters
"""
