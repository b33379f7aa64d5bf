from abc import ABC


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """


class NotFoundError(UserError):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str = "Document not found") -> None:
        super().__init__(message)


class AuthenticationError(UserError):
    """Raised when authentication fails."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message)


class MissingTokenError(AuthenticationError):
    """Raised when a request carries no session token."""

    def __init__(self, message: str = "Session token required") -> None:
        super().__init__(message)


class SessionNotFoundError(AuthenticationError):
    """Raised when the session token is unknown to the ledger."""

    def __init__(self, message: str = "Invalid session") -> None:
        super().__init__(message)


class SessionExpiredError(AuthenticationError):
    """Raised when the session token is past its validity window.

    The session has already been removed from the ledger when this is raised.
    """

    def __init__(self, message: str = "Session expired") -> None:
        super().__init__(message)


class ValidationError(UserError):
    """Raised when user input fails validation."""


class ConflictError(UserError):
    """Raised when a write collides with concurrent state. Safe to retry."""


class AllocationConflictError(ConflictError):
    """Raised when every attempt to insert a task lost the race for its allocated id."""

    def __init__(self, message: str = "Task id allocation conflict, please retry") -> None:
        super().__init__(message)


class StorageError(Exception):
    """Raised when the backing store is unreachable or fails.

    Not a UserError: the underlying message may leak infrastructure details.
    """
