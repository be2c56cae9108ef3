"""
Custom exceptions for the Apple News API client library.

Only ConfigurationError is raised to callers. The others are raised inside
the request pipeline and handed back as ``Failure.caused_by``.
"""


class AppleNewsClientError(Exception):
    """Base exception for Apple News client errors."""
    pass


class ConfigurationError(AppleNewsClientError):
    """Raised when client configuration or credentials are invalid."""
    pass


class PreSendError(AppleNewsClientError):
    """Raised when a request URL cannot be built from path and query."""
    pass


class TransportError(AppleNewsClientError):
    """Raised when sending a request or reading its response fails."""
    pass


class ResponseTooLargeError(TransportError):
    """Raised when a response body exceeds the configured size limit."""

    def __init__(self, limit: int):
        super().__init__(f"Response body exceeds limit {limit}")
        self.limit = limit


class DecodeError(AppleNewsClientError):
    """Raised when a successful response does not match the expected shape."""
    pass
