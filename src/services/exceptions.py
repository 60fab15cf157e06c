"""
Shared exceptions for service layer operations.

Each class is one failure kind. The HTTP layer maps each to a fixed status code
(see api/main.py); services never raise HTTPException themselves.
"""


class ServiceError(Exception):
    """Base class for expected, client-caused failures."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidInputError(ServiceError):
    """Raised when a required field is missing, empty, or malformed."""


class EmailTakenError(ServiceError):
    """Raised when signup or a profile edit uses an email that belongs to an account."""

    def __init__(self) -> None:
        super().__init__("Email already registered")


class InvalidCredentialsError(ServiceError):
    """
    Raised by login for both an unknown email and a wrong password.

    One class for both cases so callers cannot tell them apart.
    """

    def __init__(self) -> None:
        super().__init__("Invalid credentials")


class UnauthenticatedError(ServiceError):
    """Raised when a request has no usable bearer token or its user no longer exists."""

    def __init__(self) -> None:
        super().__init__("Not authenticated")


class BookmarkNotFoundError(ServiceError):
    """Raised when a bookmark id does not exist or belongs to another user."""

    def __init__(self, bookmark_id: int) -> None:
        self.bookmark_id = bookmark_id
        super().__init__("Bookmark not found")
