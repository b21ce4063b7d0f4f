from __future__ import annotations


class AppError(RuntimeError):
    """Base application-level error."""


class ValidationError(AppError):
    """Client-side input validation failure; never reaches the network."""


class SessionRequiredError(AppError):
    """No authenticated session is available."""


class RequestFailure(AppError):
    """Network or server error returned by the remote service."""

    def __init__(
        self,
        message: str,
        details: str | None = None,
        *,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details
        self.status_code = status_code

    @classmethod
    def from_exception(cls, exc: Exception) -> RequestFailure:
        if isinstance(exc, RequestFailure):
            return exc
        return cls(str(exc) or exc.__class__.__name__)


class ReferenceDataUnavailable(AppError):
    """A dropdown source could not be loaded."""

    def __init__(self, key: str, message: str) -> None:
        super().__init__(f"{key}: {message}")
        self.key = key
        self.message = message
