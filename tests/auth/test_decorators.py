"""Tests for bearer-token authentication.

Covers authenticate() directly (failure ordering: missing header, then
prefix, then token validation) and the @auth_required decorator on a Flask
route.
"""

from datetime import timedelta

import pytest
from flask import g, jsonify

from mothrbox.auth.decorators import auth_required, authenticate
from mothrbox.auth.token import TokenService
from mothrbox.exceptions import ExpiredToken, InvalidToken, MissingToken
from mothrbox.utils import isodatetime

USER_ID = "665f1c2e9b1e8a3d4c2b1a00"
EMAIL = "a@x.com"


class TestAuthenticate:
    """Tests for authenticate()."""

    def test_valid_bearer_token(self, tokens):
        headers = {"Authorization": f"Bearer {tokens.issue(USER_ID, EMAIL)}"}
        user = authenticate(headers, tokens)

        assert user.id == USER_ID
        assert user.email == EMAIL

    def test_header_name_is_case_insensitive(self, tokens):
        headers = {"authorization": f"Bearer {tokens.issue(USER_ID, EMAIL)}"}
        assert authenticate(headers, tokens).id == USER_ID

    def test_missing_header_raises_missing_token(self, tokens):
        with pytest.raises(MissingToken):
            authenticate({}, tokens)

    def test_other_headers_only_raises_missing_token(self, tokens):
        with pytest.raises(MissingToken):
            authenticate({"X-API-Key": "abc"}, tokens)

    @pytest.mark.parametrize("value", [
        "Basic dXNlcjpwYXNz",
        "bearer token",
        "Bearer",
        "Token abc",
        "",
    ])
    def test_non_bearer_header_raises_invalid_token(self, tokens, value):
        """Anything without the literal "Bearer " prefix is an invalid token."""
        with pytest.raises(InvalidToken):
            authenticate({"Authorization": value}, tokens)

    def test_prefix_checked_before_validation(self, tokens):
        """A valid token behind the wrong scheme is still rejected."""
        token = tokens.issue(USER_ID, EMAIL)
        with pytest.raises(InvalidToken):
            authenticate({"Authorization": f"JWT {token}"}, tokens)

    def test_garbage_token_raises_invalid_token(self, tokens):
        with pytest.raises(InvalidToken):
            authenticate({"Authorization": "Bearer garbage"}, tokens)

    def test_empty_token_raises_invalid_token(self, tokens):
        with pytest.raises(InvalidToken):
            authenticate({"Authorization": "Bearer "}, tokens)

    def test_expired_token_raises_expired_token(self, tokens, jwt_secret):
        past = isodatetime.utcnow() - timedelta(days=2)
        token = TokenService(jwt_secret, clock=lambda: past).issue(USER_ID, EMAIL)

        with pytest.raises(ExpiredToken):
            authenticate({"Authorization": f"Bearer {token}"}, tokens)


class TestAuthRequiredDecorator:
    """Tests for @auth_required on a real route."""

    @pytest.fixture
    def whoami_client(self, app):
        @app.route("/test/whoami")
        @auth_required
        def whoami():
            return jsonify({"id": g.user.id, "email": g.user.email})

        with app.test_client() as client:
            yield client

    def test_stores_identity_on_g(self, whoami_client, tokens):
        token = tokens.issue(USER_ID, EMAIL)
        response = whoami_client.get("/test/whoami", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.get_json() == {"id": USER_ID, "email": EMAIL}

    def test_rejects_missing_header(self, whoami_client):
        response = whoami_client.get("/test/whoami")

        assert response.status_code == 401
        assert response.get_json() == {"error": "Missing authentication token"}

    def test_rejects_invalid_token(self, whoami_client):
        response = whoami_client.get("/test/whoami", headers={"Authorization": "Bearer garbage"})

        assert response.status_code == 401
        assert response.get_json() == {"error": "Invalid token"}

    def test_preserves_function_name(self):
        @auth_required
        def my_view():
            return "ok"

        assert my_view.__name__ == "my_view"
