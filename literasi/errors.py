from __future__ import annotations


class LiterasiError(Exception):
    """Base exception for the admin console."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(LiterasiError):
    """Raised before any network call when local input is invalid."""
    pass


class RequestError(LiterasiError):
    """Raised when the backend answers with a non-2xx status."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class NetworkError(LiterasiError):
    """Raised when a request could not complete."""
    pass


class InvalidTransition(LiterasiError):
    """Raised when a workflow operation is not offered in the current mode."""
    pass


class WorkflowBusy(InvalidTransition):
    """Raised when a control is re-triggered while its request is in flight."""
    pass


class LoginRequired(LiterasiError):
    """No admin session is available."""
    pass


class AccessDenied(LiterasiError):
    """The session belongs to a non-admin user."""
    pass
