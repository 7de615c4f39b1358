"""Error taxonomy shared by services, adapters and the HTTP layer."""

from enum import Enum


class StudioError(Exception):
    """Base class for application errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(StudioError):
    """A required field is missing or invalid; raised before any network call."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


class RepositoryError(StudioError):
    """The content store rejected or failed a CRUD call."""

    def __init__(
        self,
        message: str,
        cause: Exception | None = None,
        *,
        not_found: bool = False,
        unique_violation: bool = False,
    ) -> None:
        super().__init__(message)
        self.cause = cause
        self.not_found = not_found
        self.unique_violation = unique_violation


class UploadError(StudioError):
    """An asset upload was rejected (size, type) or failed in storage."""

    def __init__(self, message: str, *, too_large: bool = False) -> None:
        super().__init__(message)
        self.too_large = too_large


class AuthFailure(Enum):
    """Reasons an authentication or registration attempt fails."""

    INVALID_CREDENTIALS = "invalid_credentials"
    UNAUTHORIZED = "unauthorized"
    INVALID_SECRET = "invalid_secret"
    DUPLICATE_REGISTRATION = "duplicate_registration"
    NO_SESSION = "no_session"
    PROVIDER_FAILURE = "provider_failure"


_AUTH_MESSAGES = {
    AuthFailure.INVALID_CREDENTIALS: "Login failed. Please check your credentials.",
    AuthFailure.UNAUTHORIZED: (
        "Access denied. You are not authorized to access the admin panel."
    ),
    AuthFailure.INVALID_SECRET: "Invalid admin secret key",
    AuthFailure.DUPLICATE_REGISTRATION: "This account is already registered as an admin.",
    AuthFailure.NO_SESSION: "No signed-in user. Please sign in and try again.",
    AuthFailure.PROVIDER_FAILURE: "Authentication failed. Please try again.",
}


class AuthError(StudioError):
    """Authentication, authorization or registration failure."""

    def __init__(self, reason: AuthFailure, message: str | None = None) -> None:
        super().__init__(message or _AUTH_MESSAGES[reason])
        self.reason = reason


class AdminRedirect(StudioError):
    """Raised by the admin gate to abort rendering and send the visitor away."""

    def __init__(self, location: str) -> None:
        super().__init__(f"Redirect to {location}")
        self.location = location


class OperationInProgress(StudioError):
    """A second submission arrived while the same operation was still pending."""


class ContactRelayError(StudioError):
    """The external contact form relay did not accept a submission."""
