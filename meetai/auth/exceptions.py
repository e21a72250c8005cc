"""Auth Domain Exceptions - Following patterns from agents/exceptions.py"""


class AuthError(Exception):
    """Base exception for session lookup failures."""

    def __init__(
        self,
        message: str,
        code: str = "AUTH_ERROR",
        status_code: int = 500,
        details: dict = None,
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Convert exception to dictionary for API responses."""
        return {"error": self.code, "message": self.message, "details": self.details}


class UnauthorizedError(AuthError):
    """Raised when a request carries no valid session."""

    def __init__(self, message: str = "Authentication required", details: dict = None):
        super().__init__(
            message=message, code="UNAUTHORIZED", status_code=401, details=details
        )


class AuthServiceUnavailableError(AuthError):
    """Raised when the auth service cannot be reached."""

    def __init__(self, message: str = "Auth service unavailable", details: dict = None):
        super().__init__(
            message=message,
            code="AUTH_SERVICE_UNAVAILABLE",
            status_code=503,
            details=details,
        )
