"""
Test Module for Bearer Token Resolution.

The auth server is replaced with a Mock session so no network traffic happens.

Dependency References:
- partnerboard/services/auth.py: resolve_user
- partnerboard/tests/conftest.py: test_settings
"""

from unittest.mock import Mock

import pytest
import requests

from partnerboard.services.auth import resolve_user
from partnerboard.services.errors import AuthenticationError, PartnerboardError


def auth_session(status_code=200, body=None, json_error=None) -> Mock:
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = body
    session = Mock()
    session.get.return_value = response
    return session


class TestResolveUser:
    """Tests for resolve_user()."""

    def test_resolves_user(self, test_settings):
        session = auth_session(body={"id": "user-1", "email": "anna@example.hu"})

        user = resolve_user("Bearer token-123", test_settings, session)

        assert user.id == "user-1"
        assert user.email == "anna@example.hu"
        session.get.assert_called_once_with(
            "https://auth.test/auth/v1/user",
            headers={
                "Authorization": "Bearer token-123",
                "apikey": "test-anon-key",
            },
            timeout=10,
        )

    def test_trailing_slash_in_base_url(self, test_settings):
        settings = test_settings.model_copy(update={"supabase_url": "https://auth.test/"})
        session = auth_session(body={"id": "user-1"})

        resolve_user("Bearer t", settings, session)

        assert session.get.call_args.args[0] == "https://auth.test/auth/v1/user"

    @pytest.mark.parametrize("header", [None, "", "token-123", "Basic abc", "bearer token"])
    def test_missing_or_malformed_header(self, test_settings, header):
        session = auth_session()

        with pytest.raises(AuthenticationError) as exc_info:
            resolve_user(header, test_settings, session)

        assert exc_info.value.status_code == 401
        assert exc_info.value.message == "Hiányzó vagy hibás Authorization header"
        session.get.assert_not_called()

    def test_missing_auth_configuration(self, test_settings):
        settings = test_settings.model_copy(update={"supabase_anon_key": None})

        with pytest.raises(PartnerboardError) as exc_info:
            resolve_user("Bearer t", settings, auth_session())

        assert not isinstance(exc_info.value, AuthenticationError)
        assert exc_info.value.status_code == 500

    def test_rejected_token(self, test_settings):
        with pytest.raises(AuthenticationError, match="nem azonosítható"):
            resolve_user("Bearer expired", test_settings, auth_session(status_code=401))

    def test_auth_server_unreachable(self, test_settings):
        session = Mock()
        session.get.side_effect = requests.ConnectionError("refused")

        with pytest.raises(AuthenticationError):
            resolve_user("Bearer t", test_settings, session)

    def test_invalid_json(self, test_settings):
        session = auth_session(json_error=ValueError("Expecting value"))

        with pytest.raises(AuthenticationError):
            resolve_user("Bearer t", test_settings, session)

    @pytest.mark.parametrize("body", [{}, {"email": "a@b.hu"}, {"id": ""}, ["user-1"], None])
    def test_body_without_id(self, test_settings, body):
        with pytest.raises(AuthenticationError):
            resolve_user("Bearer t", test_settings, auth_session(body=body))
