"""
Auth Session Client - resolves session cookies against the auth service.

The auth service owns sign-in, sign-up, social providers and cookies. This
client only asks it who the current request belongs to:
- Endpoint: GET {AUTH_BASE_URL}/api/auth/get-session
- The caller's Cookie header is forwarded untouched
- Body is either null or {"session": {...}, "user": {...}}
"""
import logging
from typing import Optional

import requests
from pydantic import ValidationError

from meetai.auth.exceptions import AuthServiceUnavailableError
from meetai.auth.models import SessionUser

logger = logging.getLogger(__name__)

GET_SESSION_PATH = "/api/auth/get-session"
REQUEST_TIMEOUT = 10  # seconds


class AuthSessionService:
    """Looks up the user behind a session cookie."""

    def __init__(self, base_url: Optional[str] = None):
        """
        Initialize the session client.

        Args:
            base_url: Auth service base URL (e.g. https://app.meet.ai)
        """
        if not base_url:
            raise ValueError("AUTH_BASE_URL not configured")

        self.base_url = base_url.rstrip("/")

        # Connection pooling across lookups
        self.session = requests.Session()
        self.session.headers.update({"Accept": "application/json"})

    def get_session(self, cookie_header: Optional[str]) -> Optional[SessionUser]:
        """
        Resolve the session user for a Cookie header.

        Args:
            cookie_header: Raw Cookie header from the incoming request

        Returns:
            SessionUser, or None when there is no valid session

        Raises:
            AuthServiceUnavailableError: If the auth service cannot be reached
        """
        if not cookie_header:
            return None

        try:
            response = self.session.get(
                f"{self.base_url}{GET_SESSION_PATH}",
                headers={"Cookie": cookie_header},
                timeout=REQUEST_TIMEOUT,
            )
        except requests.RequestException as e:
            logger.error(f"Session lookup failed: {e}")
            raise AuthServiceUnavailableError(str(e)) from e

        if response.status_code != 200:
            logger.debug(f"Session lookup returned HTTP {response.status_code}")
            return None

        try:
            payload = response.json()
        except ValueError:
            logger.warning("Session lookup returned a non-JSON body")
            return None

        if not payload or not payload.get("user"):
            return None

        try:
            return SessionUser(**payload["user"])
        except ValidationError as e:
            logger.warning(f"Session lookup returned an unusable user: {e}")
            return None
