"""Custom exception classes.

This module defines custom exceptions used throughout the application.
"""

from typing import Any, Dict, Optional


class BaseAppException(Exception):
    """Base exception class for the application.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Error message.
            details: Additional error details.
            cause: Underlying exception that caused this error.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        """String representation of the exception."""
        return self.message

    def __repr__(self) -> str:
        """Detailed representation of the exception."""
        return f"{self.__class__.__name__}('{self.message}', details={self.details})"


class ValidationError(BaseAppException):
    """Raised when inbound request parameters are missing or rejected."""
    pass


class ExternalServiceError(BaseAppException):
    """Raised when external service call fails.

    Attributes:
        service: Name of the external service.
        status_code: HTTP status code if applicable.
    """

    def __init__(
        self,
        message: str,
        service: str,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Error message.
            service: Name of the external service.
            status_code: HTTP status code if applicable.
            details: Additional error details.
            cause: Underlying exception that caused this error.
        """
        super().__init__(message, details, cause)
        self.service = service
        self.status_code = status_code


class DirectionsFetchError(ExternalServiceError):
    """Raised when the upstream directions call or its JSON decoding fails.

    Attributes:
        attempts: Number of upstream attempts made before giving up.
    """

    def __init__(
        self,
        cause: Exception,
        attempts: int = 1,
        status_code: Optional[int] = None,
        secret: Optional[str] = None,
    ) -> None:
        """Initialize the exception.

        Args:
            cause: Underlying transport or decoding error.
            attempts: Number of upstream attempts made.
            status_code: Upstream HTTP status code if a response arrived.
            secret: Credential to scrub from the diagnostic text.
        """
        super().__init__(
            "Failed to fetch directions",
            service="directions",
            status_code=status_code,
            details={"attempts": attempts},
            cause=cause,
        )
        self.attempts = attempts
        self._secret = secret

    @property
    def diagnostic(self) -> str:
        """Stringified underlying failure, safe to return to callers."""
        text = str(self.cause)
        if self._secret:
            text = text.replace(self._secret, "***")
        if not text:
            return type(self.cause).__name__
        return f"{type(self.cause).__name__}: {text}"
