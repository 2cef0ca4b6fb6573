# ABOUTME: Root exception class for the action middleware library
# ABOUTME: Provides structured error handling with error codes and contextual details

from typing import Dict, Any


class CoreException(Exception):
    """Base exception class for the action middleware library.

    Carries an optional error code and contextual details next to the
    human-readable message. Every exception raised by this package derives
    from it, so callers can catch the whole family with a single clause.

    Attributes:
        message: Human-readable error message
        code: Optional error code for programmatic handling
        details: Optional dictionary containing contextual information
    """

    def __init__(self, message: str, code: str | None = None, details: Dict[str, Any] | None = None):
        """Initialize CoreException with message, optional code and details.

        Args:
            message: Human-readable error message
            code: Optional error code for programmatic handling
            details: Optional dictionary containing contextual information
        """
        self.message = message
        self.code = code
        self.details = details.copy() if details else {}
        super().__init__(self.message)
