"""Adapters implementing the domain protocols.

persistence (SQLAlchemy), security (JWT, bcrypt, PKCE), cache (revocation
stores), providers/oidc (identity provider over httpx), logging (structlog).
"""
