"""Pytest configuration and fixtures."""

import os

# Point the app's own engine at in-memory SQLite before anything imports it
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SESSION_SECRET", "test-session-secret")

from urllib.parse import urlencode

import pytest
from fastapi.responses import RedirectResponse
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.api.dependencies import get_identity_provider
from app.auth.identity_provider import IdentityProvider
from app.config import settings
from app.db.base import Base
from app.db.session import get_db
from app.schemas.user import IdentityProfile
from app.services.exceptions import AuthProviderError


# In-memory SQLite for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class MockIdentityProvider(IdentityProvider):
    """Identity provider that maps authorization codes to canned profiles."""

    AUTHORIZE_URL = "https://accounts.example.test/o/oauth2/auth"

    def __init__(self):
        self._profiles = {}

    def register(self, code: str, sub: str, email: str = None, name: str = None) -> None:
        self._profiles[code] = IdentityProfile(sub=sub, email=email, name=name)

    async def authorize_redirect(self, request, redirect_uri: str):
        query = urlencode({"redirect_uri": redirect_uri, "scope": "openid email profile"})
        return RedirectResponse(url=f"{self.AUTHORIZE_URL}?{query}", status_code=302)

    async def fetch_profile(self, request) -> IdentityProfile:
        code = request.query_params.get("code")
        if code not in self._profiles:
            raise AuthProviderError("invalid_grant")
        return self._profiles[code]


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database session for each test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def identity_provider():
    """Create a mock identity provider for testing."""
    return MockIdentityProvider()


@pytest.fixture(scope="function")
def client(db_session, identity_provider):
    """Create a test client with overridden dependencies."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    def override_get_identity_provider():
        return identity_provider

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_identity_provider] = override_get_identity_provider

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def other_client(client):
    """A second browser with its own cookie jar, sharing the same overrides."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def login(client, identity_provider):
    """
    Return a helper running the Google callback for ``sub``.

    The session cookie lands in the jar of the client passed as ``http``
    (the default client unless given); the helper returns the token.
    """

    def _login(sub: str, name: str = None, http: TestClient = None) -> str:
        http = http or client
        code = f"code-{sub}"
        identity_provider.register(code, sub=sub, email=f"{sub}@example.com", name=name)

        response = http.get(
            "/auth/google/callback", params={"code": code}, follow_redirects=False
        )
        assert response.status_code == 302
        assert response.headers["location"] == settings.AUTH_SUCCESS_REDIRECT

        return response.cookies[settings.SESSION_COOKIE_NAME]

    return _login


@pytest.fixture
def alice(client, login):
    """Log the default client in as Alice and return her user record."""
    login("google-alice", name="Alice")
    response = client.get("/api/me")
    assert response.status_code == 200
    return response.json()


@pytest.fixture
def bob(other_client, login):
    """Log the second client in as Bob and return his user record."""
    login("google-bob", name="Bob", http=other_client)
    response = other_client.get("/api/me")
    assert response.status_code == 200
    return response.json()
