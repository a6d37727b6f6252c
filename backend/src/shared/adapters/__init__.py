"""
Adapters Package

External service integrations.

Contents:
=========
- keycloak_adapter: Keycloak admin API client (identity provider)

Note: Database access is handled by shared/db/session.py using async SQLAlchemy.

Usage:
======
    from src.shared.adapters.keycloak_adapter import KeycloakAdapter

    keycloak = KeycloakAdapter()
    user_id = await keycloak.create_user(registration)
"""

from src.shared.adapters.keycloak_adapter import IdentityProvider, KeycloakAdapter

__all__ = [
    "IdentityProvider",
    "KeycloakAdapter",
]
