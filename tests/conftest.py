"""Shared test fixtures for mothrbox."""

import mongomock
import pytest

from mothrbox.auth.password import PasswordHasher
from mothrbox.auth.schemas import RegisterRequest
from mothrbox.auth.service import AuthService
from mothrbox.auth.token import TokenService
from mothrbox.config import Settings
from mothrbox.db import UserDirectory
from mothrbox.main import create_app

TEST_SECRET = "test-secret-key-long-enough-for-hs256!"


@pytest.fixture
def jwt_secret():
    """Signing secret shared by the app and token fixtures."""
    return TEST_SECRET


@pytest.fixture
def test_settings(jwt_secret):
    """Settings isolated from .env with a fixed secret and a fast bcrypt cost."""
    return Settings(
        _env_file=None,
        jwt_secret=jwt_secret,
        bcrypt_work_factor=4,
        database_name="mothrbox_test",
    )


@pytest.fixture
def mongo_client():
    """In-process MongoDB double."""
    return mongomock.MongoClient()


@pytest.fixture
def users_collection(mongo_client, test_settings):
    return mongo_client[test_settings.database_name][test_settings.users_collection]


@pytest.fixture
def directory(users_collection):
    """User directory over an empty collection with its indexes in place."""
    directory = UserDirectory(users_collection)
    directory.ensure_indexes()
    return directory


@pytest.fixture
def hasher():
    return PasswordHasher(work_factor=4)


@pytest.fixture
def tokens(jwt_secret):
    return TokenService(jwt_secret)


@pytest.fixture
def auth_service(directory, hasher, tokens):
    return AuthService(directory, hasher, tokens)


@pytest.fixture
def app(test_settings, directory):
    """Flask app wired to the mongomock directory."""
    app = create_app(test_settings, directory)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    """Create test client for API testing."""
    with app.test_client() as client:
        yield client


@pytest.fixture
def registered_user(auth_service):
    """Register a@x.com / pw1234 directly through the service.

    Returns the AuthResponse (token + public user view).
    """
    return auth_service.register(RegisterRequest(email="a@x.com", password="pw1234"))


@pytest.fixture
def auth_headers(registered_user):
    """Authorization header carrying the registered user's token."""
    return {"Authorization": f"Bearer {registered_user.token}"}
