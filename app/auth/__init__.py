"""Identity provider integration."""

from app.auth.identity_provider import IdentityProvider, GoogleIdentityProvider

__all__ = ["IdentityProvider", "GoogleIdentityProvider"]
