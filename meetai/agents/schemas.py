"""Agents Request/Response Schemas - Pydantic validation for API endpoints."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from .constants import MAX_AGENT_NAME_LENGTH, MAX_INSTRUCTIONS_LENGTH
from .models import Agent


# Request Schemas
class AgentInsertSchema(BaseModel):
    """Schema for creating an agent."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=MAX_AGENT_NAME_LENGTH,
        description="Display name for the agent",
    )
    instructions: str = Field(
        default="",
        max_length=MAX_INSTRUCTIONS_LENGTH,
        description="Instructions the agent follows during calls",
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate and clean the agent name."""
        if not v or not v.strip():
            raise ValueError("Name is required")
        return v.strip()

    @field_validator("instructions", mode="before")
    @classmethod
    def validate_instructions(cls, v) -> str:
        """Treat a missing value as empty instructions."""
        if v is None:
            return ""
        if not isinstance(v, str):
            raise ValueError("Instructions must be a string")
        return v.strip()

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "Cricket Coach",
                "instructions": "Coach the batting lineup between overs.",
            }
        }
    }


class AgentUpdateSchema(AgentInsertSchema):
    """Schema for updating an agent (same fields as insert)."""


# Response Schemas
class AgentResponseSchema(BaseModel):
    """Single agent as returned by the API."""

    id: str
    user_id: str
    name: str
    instructions: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_agent(cls, agent: Agent) -> "AgentResponseSchema":
        return cls(**agent.model_dump())


class AgentListResponseSchema(BaseModel):
    """Agents owned by the session user."""

    agents: List[AgentResponseSchema] = Field(default_factory=list)
    count: int = Field(..., ge=0)
