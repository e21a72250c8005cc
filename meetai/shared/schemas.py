"""Response envelopes shared by every blueprint."""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ErrorResponseSchema(BaseModel):
    """Standard error response format."""

    error: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(
        default=None, description="Additional error details"
    )
    timestamp: datetime = Field(default_factory=datetime.utcnow)

    model_config = {
        "json_schema_extra": {
            "example": {
                "error": "NOT_FOUND",
                "message": "Agent not found",
                "details": {"resource_type": "Agent", "resource_id": "abc"},
                "timestamp": "2024-01-01T00:00:00Z",
            }
        }
    }
