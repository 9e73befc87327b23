"""Exception hierarchy raised by the PSP client."""

from typing import Optional


class PSPClientError(Exception):
    """Base class for every error raised by this library."""


class ConfigurationError(PSPClientError):
    """Raised when the client configuration cannot address an API family."""


class InvalidRequestError(PSPClientError, ValueError):
    """Raised before sending when a request can't be turned into an API call."""


class ApiError(PSPClientError):
    """A classified failure of a single API call.

    Attributes:
        status_code: HTTP status, or None when no response was received.
        error_code: Platform error code from the response body, if any.
        message: Human readable description.
        raw_body: Response body text as received, if any.
        error_type: Platform error type (``validation``, ``security``...).
        psp_reference: Reference of the failed request, if returned.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        error_code: Optional[str] = None,
        raw_body: Optional[str] = None,
        error_type: Optional[str] = None,
        psp_reference: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.raw_body = raw_body
        self.error_type = error_type
        self.psp_reference = psp_reference

    @property
    def is_retryable(self) -> bool:
        """Hint for callers; the client itself never retries."""
        return False

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"HTTP {self.status_code}: {self.message}"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(status_code={self.status_code!r}, "
            f"error_code={self.error_code!r}, message={self.message!r})"
        )


class TransportError(ApiError):
    """The request never produced an HTTP response (DNS, refused, timeout)."""

    def __init__(self, message: str, *, timed_out: bool = False):
        super().__init__(message)
        self.timed_out = timed_out

    @property
    def is_retryable(self) -> bool:
        return True


class MalformedResponseError(ApiError):
    """A 2xx response whose body could not be parsed into the expected shape."""


class HttpError(ApiError):
    """Non-2xx response that does not fall into a more specific kind."""


class AuthenticationError(HttpError):
    """401/403: the credentials were rejected or lack permission."""


class ValidationError(HttpError):
    """400/422: the platform rejected the request payload."""


class ServerError(HttpError):
    """5xx: failure on the platform side."""

    @property
    def is_retryable(self) -> bool:
        return True
