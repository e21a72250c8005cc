"""Auth Domain Models - identity attached to the current request."""
from typing import Optional

from pydantic import BaseModel, Field


class SessionUser(BaseModel):
    """User resolved from the session cookie by the auth service."""
    id: str = Field(..., min_length=1, description="Stable user identifier")
    name: Optional[str] = Field(default=None, description="Display name")
    email: Optional[str] = Field(default=None, description="Account email")
    image: Optional[str] = Field(default=None, description="Avatar URL")

    class Config:
        """Pydantic configuration."""
        extra = "ignore"
        json_schema_extra = {
            "example": {
                "id": "usr_123",
                "name": "Jane Doe",
                "email": "jane@example.com",
                "image": None
            }
        }
