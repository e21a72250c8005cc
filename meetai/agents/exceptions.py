"""Agents Domain Exceptions - Custom exception classes for error handling."""

from .constants import ERROR_AGENT_NOT_FOUND


class AgentsError(Exception):
    """Base exception for all Agents domain errors."""

    def __init__(
        self,
        message: str,
        code: str = "AGENTS_ERROR",
        status_code: int = 500,
        details: dict = None,
    ):
        """
        Initialize Agents error.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
            status_code: HTTP status returned to the caller
            details: Additional error details
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Convert exception to dictionary for API responses."""
        return {"error": self.code, "message": self.message, "details": self.details}


class InvalidRequestError(AgentsError):
    """Raised when a request is invalid or malformed."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(
            message=message, code="INVALID_REQUEST", status_code=400, details=details
        )


class AgentNotFoundError(AgentsError):
    """Raised when an agent does not exist or belongs to another user."""

    def __init__(self, agent_id: str, details: dict = None):
        super().__init__(
            message=ERROR_AGENT_NOT_FOUND,
            code="NOT_FOUND",
            status_code=404,
            details=details or {"resource_type": "Agent", "resource_id": agent_id},
        )


class AgentStoreError(AgentsError):
    """Raised when the agents table cannot be read or written."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(
            message=message, code="AGENT_STORE_ERROR", status_code=502, details=details
        )
