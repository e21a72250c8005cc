"""
Meeting-link resolution.

Two forms that must agree:
- resolve_meeting_link(): synchronous, used as the optimistic/fallback value
- MeetingLinkClient.fetch(): asks GET /api/live/meeting-link, the value of record
"""
import logging
import re
from typing import Optional

import httpx

from .constants import (
    FALLBACK_AGENT_SLUG,
    MEETING_LINK_BASE_URL,
    MEETING_LINK_PATH,
    MEETING_LINK_TIMEOUT,
)
from .exceptions import MeetingLinkLookupError

logger = logging.getLogger(__name__)

_NON_SLUG_RUN = re.compile(r"[^a-z0-9]+")


def slugify_agent_name(name: Optional[str]) -> str:
    """
    Turn an agent name into a URL slug.

    Lower-cases, collapses every run of characters outside [a-z0-9] into one
    hyphen and strips hyphens at either end. Falls back to "agent".
    """
    slug = _NON_SLUG_RUN.sub("-", (name if name is not None else FALLBACK_AGENT_SLUG).lower())
    return slug.strip("-") or FALLBACK_AGENT_SLUG


def resolve_meeting_link(name: Optional[str]) -> str:
    """Build the Stream meeting URL for an agent name."""
    return f"{MEETING_LINK_BASE_URL}/{slugify_agent_name(name)}"


class MeetingLinkClient:
    """Async client for the meeting-link endpoint."""

    def __init__(
        self,
        base_url: str,
        timeout: float = MEETING_LINK_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Origin serving /api/live/meeting-link
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Accept": "application/json"},
            timeout=httpx.Timeout(timeout),
            follow_redirects=False,
            transport=transport,
        )

    async def fetch(self, agent_name: str) -> str:
        """
        Look up the meeting link for an agent name.

        Raises:
            MeetingLinkLookupError: On transport failure, non-2xx or bad body
        """
        try:
            response = await self.client.get(
                MEETING_LINK_PATH, params={"agent": agent_name}
            )
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise MeetingLinkLookupError(f"Meeting link lookup failed: {e}") from e
        except ValueError as e:
            raise MeetingLinkLookupError("Meeting link response was not JSON") from e

        link = payload.get("meetingLink") if isinstance(payload, dict) else None
        if not link or not isinstance(link, str):
            raise MeetingLinkLookupError("Meeting link response had no meetingLink")

        logger.debug(f"Resolved meeting link for {agent_name!r}: {link}")
        return link

    async def aclose(self) -> None:
        """Release pooled connections."""
        await self.client.aclose()
