"""Identity provider abstraction for the OAuth2 authorization-code flow."""

import logging
from abc import ABC, abstractmethod
from typing import Optional

import httpx
from authlib.integrations.starlette_client import OAuth, OAuthError
from pydantic import ValidationError
from starlette.requests import Request
from starlette.responses import Response

from app.config import settings
from app.schemas.user import IdentityProfile
from app.services.exceptions import AuthProviderError

logger = logging.getLogger(__name__)

GOOGLE_SCOPES = "openid email profile"


class IdentityProvider(ABC):
    """
    Abstract interface for an OAuth2 identity provider.

    Allows swapping Google for another provider, or for a fake in tests,
    by implementing this interface.
    """

    @abstractmethod
    async def authorize_redirect(self, request: Request, redirect_uri: str) -> Response:
        """
        Build the redirect to the provider's authorization endpoint.

        Args:
            request: Incoming request (the provider may stash state in its session)
            redirect_uri: Absolute callback URL the provider should return to

        Returns:
            A redirect response
        """
        pass

    @abstractmethod
    async def fetch_profile(self, request: Request) -> IdentityProfile:
        """
        Exchange the authorization code on the callback request for a profile.

        Args:
            request: The callback request carrying ``code`` and ``state``

        Returns:
            The verified profile assertion

        Raises:
            AuthProviderError: If the exchange fails or the assertion is unusable
        """
        pass


class GoogleIdentityProvider(IdentityProvider):
    """Google OpenID Connect provider backed by Authlib's Starlette client."""

    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        metadata_url: Optional[str] = None,
    ):
        self._oauth = OAuth()
        self._oauth.register(
            name="google",
            client_id=client_id or settings.GOOGLE_CLIENT_ID,
            client_secret=client_secret or settings.GOOGLE_CLIENT_SECRET,
            server_metadata_url=metadata_url or settings.GOOGLE_METADATA_URL,
            client_kwargs={"scope": GOOGLE_SCOPES},
        )

    @property
    def client(self):
        return self._oauth.create_client("google")

    async def authorize_redirect(self, request: Request, redirect_uri: str) -> Response:
        try:
            return await self.client.authorize_redirect(request, redirect_uri)
        except httpx.HTTPError as e:
            # Metadata discovery happens lazily on the first redirect
            raise AuthProviderError(f"Could not reach Google: {e}", cause=e)

    async def fetch_profile(self, request: Request) -> IdentityProfile:
        try:
            token = await self.client.authorize_access_token(request)
            userinfo = token.get("userinfo")
            if not userinfo:
                userinfo = await self.client.userinfo(token=token)
        except OAuthError as e:
            raise AuthProviderError(f"Google rejected the authorization code: {e.error}", cause=e)
        except httpx.HTTPError as e:
            raise AuthProviderError(f"Could not reach Google: {e}", cause=e)

        try:
            return IdentityProfile(
                sub=userinfo.get("sub"),
                email=userinfo.get("email"),
                name=userinfo.get("name"),
            )
        except ValidationError as e:
            raise AuthProviderError("Google profile has no subject identifier", cause=e)
