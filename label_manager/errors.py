# =============================================================================
# Label Manager - Exceptions
# =============================================================================
"""
Exception hierarchy shared by the codec, the API client and the operations.

Every error derives from LabelManagerError so the public operations can
catch a single type at their boundary and turn it into a log message.
"""

from typing import Any, Optional


class LabelManagerError(Exception):
    """
    Base exception for label manager errors.

    Attributes:
        message: Error description.
    """

    def __init__(self, message: str) -> None:
        """
        Initialize the exception.

        Args:
            message: Error description.
        """
        super().__init__(message)
        self.message = message


class ValidationError(LabelManagerError):
    """Raised for an unsupported kind or a malformed form record."""

    pass


class CredentialsError(ValidationError):
    """Raised when the login information is missing or incomplete."""

    pass


class HttpError(LabelManagerError):
    """
    Raised when GitHub answers with a non-success status.

    Attributes:
        status_code: HTTP status code.
        reason: HTTP reason phrase.
        response_data: Parsed response body, if it was JSON.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        reason: str = "",
        response_data: Optional[Any] = None,
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Human-readable status message.
            status_code: HTTP status code.
            reason: HTTP reason phrase.
            response_data: Parsed response body.
        """
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason
        self.response_data = response_data if response_data is not None else {}


class AuthenticationError(HttpError):
    """Raised when authentication fails (401)."""

    pass


class ForbiddenError(HttpError):
    """Raised when the request is refused (403), often rate limiting."""

    pass


class NotFoundError(HttpError):
    """Raised when the repository or entry is not found (404)."""

    pass


class EmptyResultError(LabelManagerError):
    """
    Raised when the first page of a listing holds no entries.

    Attributes:
        kind: Path segment of the listed kind (labels, milestones).
    """

    def __init__(self, kind: str) -> None:
        super().__init__(f"No {kind} exist in this repository.")
        self.kind = kind


class NetworkError(LabelManagerError):
    """Raised when the request never got a response (DNS, TLS, timeout)."""

    pass


class PageLimitError(LabelManagerError):
    """Raised when a listing does not end within the page cap."""

    pass
