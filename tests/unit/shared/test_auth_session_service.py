"""
Tests for AuthSessionService.
Tests cookie forwarding and how auth service replies map to a session user.
"""
from unittest.mock import Mock, patch

import pytest
import requests

from meetai.auth.exceptions import AuthServiceUnavailableError
from meetai.shared.services.AuthSessionService import AuthSessionService


def _response(status_code=200, payload=None, json_error=False):
    response = Mock()
    response.status_code = status_code
    if json_error:
        response.json.side_effect = ValueError("No JSON")
    else:
        response.json.return_value = payload
    return response


@pytest.fixture
def auth_service():
    """AuthSessionService with a mocked HTTP session"""
    service = AuthSessionService(base_url="https://auth.meet.test/")
    service.session = Mock()
    return service


@pytest.mark.unit
class TestAuthSessionService:
    """Test session lookups"""

    def test_requires_base_url(self):
        """Test missing configuration fails fast"""
        with pytest.raises(ValueError):
            AuthSessionService(base_url="")

    def test_no_cookie_skips_lookup(self, auth_service):
        """Test requests without cookies are anonymous"""
        assert auth_service.get_session(None) is None
        assert auth_service.get_session("") is None
        auth_service.session.get.assert_not_called()

    def test_valid_session(self, auth_service):
        """Test a session body resolves to a SessionUser"""
        auth_service.session.get.return_value = _response(
            payload={
                "session": {"id": "sess_1", "userId": "u1"},
                "user": {"id": "u1", "name": "Jane", "email": "j@x.io", "image": None},
            }
        )

        user = auth_service.get_session("better-auth.session_token=xyz")

        assert user.id == "u1"
        assert user.name == "Jane"
        auth_service.session.get.assert_called_once_with(
            "https://auth.meet.test/api/auth/get-session",
            headers={"Cookie": "better-auth.session_token=xyz"},
            timeout=10,
        )

    @pytest.mark.parametrize(
        "response",
        [
            _response(status_code=401),
            _response(payload=None),
            _response(payload={"session": None}),
            _response(payload={"user": {"name": "no id"}}),
            _response(json_error=True),
        ],
    )
    def test_unusable_replies_are_anonymous(self, auth_service, response):
        """Test every non-session reply maps to None"""
        auth_service.session.get.return_value = response

        assert auth_service.get_session("cookie=1") is None

    def test_transport_failure(self, auth_service):
        """Test network errors raise AuthServiceUnavailableError"""
        auth_service.session.get.side_effect = requests.ConnectionError("refused")

        with pytest.raises(AuthServiceUnavailableError) as exc_info:
            auth_service.get_session("cookie=1")

        assert exc_info.value.status_code == 503


@pytest.mark.unit
class TestServiceLoader:
    """Test cached loaders"""

    def test_auth_session_service_uses_config(self):
        """Test the loader reads AUTH_BASE_URL"""
        from meetai.shared.utils import service_loader

        service_loader.get_auth_session_service.cache_clear()
        try:
            with patch.object(service_loader, "get_env", return_value="https://auth.meet.test"):
                service = service_loader.get_auth_session_service()
            assert service.base_url == "https://auth.meet.test"
            assert service_loader.get_auth_session_service() is service
        finally:
            service_loader.get_auth_session_service.cache_clear()

    def test_supabase_client_validates_config(self):
        """Test missing Supabase config raises before connecting"""
        from meetai.shared.utils import service_loader

        service_loader.get_supabase_client.cache_clear()
        try:
            with patch.object(
                service_loader, "validate_supabase_config", side_effect=ValueError("missing")
            ), patch.object(service_loader, "create_client") as mock_create:
                with pytest.raises(ValueError):
                    service_loader.get_supabase_client()
                mock_create.assert_not_called()
        finally:
            service_loader.get_supabase_client.cache_clear()
