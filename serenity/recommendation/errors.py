"""
Request-level errors raised by the recommendation engine.
"""


class RecommendationError(Exception):
    """Base class for errors that fail a whole recommendation request."""
    code = "internal"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnauthenticatedError(RecommendationError):
    """Raised before any network activity when no caller identity is present."""
    code = "unauthenticated"

    def __init__(self, message: str = "User must be authenticated"):
        super().__init__(message)


class InternalRecommendationError(RecommendationError):
    """Raised when something outside the per-source isolation boundary fails."""
    code = "internal"

    def __init__(self, message: str = "Failed to fetch recommendations"):
        super().__init__(message)
