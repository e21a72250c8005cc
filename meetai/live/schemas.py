"""
Live Domain Schemas - Request/response validation using Pydantic

Following patterns from agents/schemas.py for consistency.
"""
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import MESSAGE_TYPE_ERROR, MESSAGE_TYPE_STATE, ClientAction


class MeetingLinkResponse(BaseModel):
    """Body of GET /api/live/meeting-link."""

    model_config = ConfigDict(populate_by_name=True)

    meeting_link: str = Field(..., serialization_alias="meetingLink")


class ClientMessage(BaseModel):
    """A message received from the browser over the live-call socket."""

    model_config = ConfigDict(extra="ignore")

    action: ClientAction
    agent_id: Optional[str] = None

    @field_validator("agent_id")
    @classmethod
    def validate_agent_id(cls, v):
        """Blank ids are treated as missing."""
        if v is not None and not v.strip():
            return None
        return v


class StateMessage(BaseModel):
    """Snapshot of the call session pushed to the browser."""

    type: str = MESSAGE_TYPE_STATE
    data: Dict[str, Any]
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class ErrorMessage(BaseModel):
    """Error pushed to the browser before (or instead of) a state update."""

    type: str = MESSAGE_TYPE_ERROR
    error: str
    message: str
    timestamp: datetime = Field(default_factory=datetime.utcnow)
