"""Exception hierarchy for provider and configuration errors."""

from __future__ import annotations


class ProviderError(Exception):
    """Base exception for AWS provider errors.

    Attributes:
        status_code: HTTP status code from the API response
        error_code: Error code from the AWS error response (e.g., "NotFoundException")
        message: Human-readable error message
        request_id: AWS request ID (x-amzn-RequestId) for support tickets
        response: The full error response dict
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        error_code: str | None = None,
        request_id: str | None = None,
        response: object | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.request_id = request_id
        self.response = response

    def __repr__(self) -> str:
        parts = [f"status_code={self.status_code}"]
        if self.error_code:
            parts.append(f"error_code={self.error_code!r}")
        if self.request_id:
            parts.append(f"request_id={self.request_id!r}")
        return f"{self.__class__.__name__}({self.message!r}, {', '.join(parts)})"


class ProviderTransientError(ProviderError):
    """Transient provider errors that may succeed on a later run."""

    pass


class ProviderPermanentError(ProviderError):
    """Permanent provider errors that need a configuration or permission fix."""

    pass


# Transient errors
class ProviderThrottledError(ProviderTransientError):
    """429 TooManyRequestsException - Request rate exceeded."""

    pass


class ProviderServerError(ProviderTransientError):
    """5xx Server Error - Transient service-side issue."""

    pass


class ProviderConnectionError(ProviderTransientError):
    """No response - endpoint unreachable, timed out, or credentials missing."""

    pass


# Permanent errors
class ProviderBadRequestError(ProviderPermanentError):
    """400 BadRequestException - Invalid request parameters."""

    pass


class ProviderUnauthorizedError(ProviderPermanentError):
    """401/403 - Missing or insufficient credentials."""

    pass


class ProviderNotFoundError(ProviderPermanentError):
    """404 NotFoundException - REST API or resource does not exist."""

    pass


class ConfigError(Exception):
    """Deployment file or import section could not be read or is malformed."""

    pass


def retry_hint(exc: Exception) -> str | None:
    """Advice for the user depending on whether the failure is transient."""
    if isinstance(exc, ProviderTransientError):
        return "May work on next run."
    if isinstance(exc, ProviderPermanentError):
        return "Fix the issue and re-run."
    return None
