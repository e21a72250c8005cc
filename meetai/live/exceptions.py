"""Live Domain Exceptions - Following patterns from agents/exceptions.py"""


class LiveCallException(Exception):
    """Base exception for the live-call domain."""

    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class MeetingLinkLookupError(LiveCallException):
    """Raised when the meeting-link endpoint cannot produce a link."""

    def __init__(self, message: str = "Unable to fetch meeting link"):
        super().__init__(message, status_code=502)


class InvalidClientMessageError(LiveCallException):
    """Raised when a live-call socket message cannot be understood."""

    def __init__(self, message: str = "Invalid message"):
        super().__init__(message, status_code=400)


class OriginNotAllowedError(LiveCallException):
    """Raised when a live-call upgrade comes from an origin outside CORS_ORIGINS."""

    def __init__(self, origin: str):
        super().__init__(f"Origin not allowed: {origin}", status_code=403)
