"""Exception hierarchy for the Vercel API client.

Every failure a public operation can produce is one of the classes below.
HTTP failures are classified by :mod:`vercel_api.http`; transport and
decoding failures keep the underlying exception as ``__cause__``.
"""

from __future__ import annotations

from datetime import datetime

from vercel_api.models import RateLimitInfo


class VercelError(Exception):
    """Base exception for all Vercel API errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class AuthenticationError(VercelError):
    """Raised on 401 responses and on 403 responses other than token expiry."""

    def __init__(self, detail: str, status_code: int | None = 401) -> None:
        self.detail = detail
        super().__init__(f"Authentication failed: {detail}", status_code)


class TokenExpiredError(VercelError):
    """Raised on 403 responses whose error code marks the token as expired."""

    def __init__(self, status_code: int | None = 403) -> None:
        super().__init__(
            "API token has expired. Please create a new token.", status_code
        )


class RateLimitError(VercelError):
    """Raised on 429 responses."""

    def __init__(
        self,
        reset_at: datetime,
        rate_limit_info: RateLimitInfo | None = None,
    ) -> None:
        self.reset_at = reset_at
        self.rate_limit_info = rate_limit_info
        super().__init__(
            f"Rate limit exceeded. Resets at {reset_at.isoformat(timespec='seconds')}",
            429,
        )


class NetworkError(VercelError):
    """Raised when the request never produced an HTTP response."""

    def __init__(self, cause: Exception) -> None:
        super().__init__(f"Network error: {cause}")
        self.__cause__ = cause


class InvalidResponseError(VercelError):
    """Raised when a response arrived but could not be read at all."""

    def __init__(self, message: str = "Invalid response received from API") -> None:
        super().__init__(message)


class APIError(VercelError):
    """Raised on any other non-2xx response."""

    def __init__(self, code: str, detail: str, status_code: int | None = None) -> None:
        self.code = code
        self.detail = detail
        super().__init__(f"API error ({code}): {detail}", status_code)


class ValidationError(VercelError):
    """Raised for client-side misuse detected before a request is sent."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Validation error: {detail}")


class NotFoundError(VercelError):
    """Raised on 404 responses; ``resource`` is the requested path."""

    def __init__(self, resource: str) -> None:
        self.resource = resource
        super().__init__(f"Resource not found: {resource}", 404)


class DecodingError(VercelError):
    """Raised when a 2xx body is not valid JSON or does not fit the model."""

    def __init__(self, cause: Exception, status_code: int | None = None) -> None:
        super().__init__(f"Failed to decode response: {cause}", status_code)
        self.__cause__ = cause


class UnknownError(VercelError):
    """Raised for client failures that fit no other category."""

    def __init__(self, cause: Exception) -> None:
        super().__init__(f"Unknown error: {cause}")
        self.__cause__ = cause
