"""Agents Domain Models - Business entities."""
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class Agent(BaseModel):
    """A named, user-owned assistant persona."""
    id: str = Field(..., description="Server-generated identifier")
    user_id: str = Field(..., description="Owner of the agent")
    name: str = Field(..., min_length=1, description="Display name")
    instructions: str = Field(default="", description="Free-text instructions")
    created_at: Optional[datetime] = Field(default=None)
    updated_at: Optional[datetime] = Field(default=None)

    class Config:
        """Pydantic configuration."""
        extra = "ignore"
        json_schema_extra = {
            "example": {
                "id": "5f0c6d1e-8f0b-4a53-9d4c-2f3f0a1b2c3d",
                "user_id": "usr_123",
                "name": "Cricket Coach",
                "instructions": "Coach the batting lineup between overs.",
                "created_at": "2024-01-01T00:00:00Z",
                "updated_at": "2024-01-01T00:00:00Z"
            }
        }

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Agent":
        """Build an Agent from a PostgREST row."""
        return cls(**row)
