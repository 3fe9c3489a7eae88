"""Custom exception classes for the application.

Defines domain-specific exceptions that can be raised throughout the
application and handled consistently by exception handlers.
"""

from typing import Optional, Any, Dict, List


class AppException(Exception):
    """Base exception class for all application exceptions.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code to return.
        details: Optional additional error details.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        """Initialize application exception.

        Args:
            message: Error message.
            status_code: HTTP status code (default: 500).
            details: Optional dictionary with additional error context.
        """
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(AppException):
    """Exception raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: Any):
        """Initialize not found error.

        Args:
            resource: Type of resource (e.g., 'Submission').
            identifier: ID or identifier that was not found.
        """
        message = f"{resource} with id '{identifier}' not found"
        super().__init__(message, status_code=404, details={"resource": resource, "id": identifier})


class SubmissionValidationError(AppException):
    """Raised when a questionnaire submission fails field validation.

    All collected messages travel together so the client can fix every
    field in one round trip.
    """

    def __init__(self, messages: List[str]):
        self.messages = list(messages)
        super().__init__(
            "Submission failed validation",
            status_code=422,
            details={"messages": self.messages},
        )


class DuplicateEmailError(AppException):
    """Raised when the submitted email already belongs to a stored user."""

    def __init__(self, email: str):
        super().__init__(
            "This email is already registered. Please use a different email.",
            status_code=409,
            details={"field": "email"},
        )
        self.email = email


class StorageError(AppException):
    """Exception raised when persisting a submission fails.

    The message is deliberately generic; the underlying cause is logged.
    """

    def __init__(self, message: str = "We could not save your submission.", operation: Optional[str] = None):
        details = {"operation": operation} if operation else {}
        super().__init__(message, status_code=500, details=details)


class NotificationError(AppException):
    """Exception raised when an outbound email cannot be delivered."""

    def __init__(self, recipient: str, reason: str):
        super().__init__(
            f"Could not send email to {recipient}: {reason}",
            status_code=500,
            details={"recipient": recipient},
        )
        self.recipient = recipient
        self.reason = reason
