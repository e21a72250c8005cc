"""
Live Domain Module - simulated live calls with an agent.

This module contains:
- Business Logic: models.py (CallSession), services.py (LiveCallController)
- Meeting links: meeting_link.py (slug resolver and async lookup client)
- API Interfaces: routes.py (meeting-link endpoint, call WebSocket)
- Validation: schemas.py (Pydantic validation)
- Error Handling: exceptions.py
- Configuration: constants.py
"""

from .constants import CallStatus, ClientAction, TranscriptTone
from .exceptions import (
    InvalidClientMessageError,
    LiveCallException,
    MeetingLinkLookupError,
    OriginNotAllowedError,
)
from .meeting_link import MeetingLinkClient, resolve_meeting_link, slugify_agent_name
from .models import CallSession, TranscriptLine
from .routes import live_bp
from .schemas import ClientMessage, MeetingLinkResponse, StateMessage
from .services import LiveCallController

__all__ = [
    # Blueprint
    "live_bp",
    # Models
    "CallSession",
    "TranscriptLine",
    # Services
    "LiveCallController",
    "MeetingLinkClient",
    "resolve_meeting_link",
    "slugify_agent_name",
    # Schemas
    "ClientMessage",
    "MeetingLinkResponse",
    "StateMessage",
    # Exceptions
    "LiveCallException",
    "MeetingLinkLookupError",
    "InvalidClientMessageError",
    "OriginNotAllowedError",
    # Constants
    "CallStatus",
    "ClientAction",
    "TranscriptTone",
]
