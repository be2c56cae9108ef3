"""
Result types and response classification.

Every endpoint returns an APIResult: Success with the decoded response, or
Failure with whichever details were available when the call failed.
"""

import enum
import json
import logging
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar, Union

from .exceptions import DecodeError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class APIError(enum.IntEnum):
    """Error codes documented by the Apple News API."""

    GENERAL_BAD_REQUEST = 4000000
    AUTHENTICATION_FAILED = 4010000
    FORBIDDEN = 4030000
    NOT_FOUND = 4040000
    CONFLICT = 4090000
    REQUEST_ENTITY_TOO_LARGE = 4130000
    RATE_LIMIT_EXCEEDED = 4290000
    GENERAL_INTERNAL = 5000000
    # An unknown error occurred, but the request can be retried
    GENERAL_INTERNAL_RETRYABLE = 5000001

    @classmethod
    def from_code(cls, code: int) -> Optional["APIError"]:
        """Return the matching member, or None for an unrecognized code."""
        try:
            return cls(code)
        except ValueError:
            return None


class FailureKind(enum.Enum):
    PRE_SEND = "pre_send"
    TRANSPORT = "transport"
    DECODE = "decode"
    API_ERROR = "api_error"
    UNRECOGNIZED_API_ERROR = "unrecognized_api_error"
    HTTP_STATUS = "http_status"


@dataclass(frozen=True)
class Success(Generic[T]):
    response: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """
    A failed call.

    Which fields are set depends on where the call failed:

    * before sending (bad URL): nothing
    * while sending or decoding: ``caused_by`` only
    * with a structured error body: ``status_code``, ``raw_api_error``,
      ``api_error`` (None if the code is unrecognized) and ``error_message``
    * with any other non-2xx response: ``status_code`` only
    """

    status_code: Optional[int] = None
    raw_api_error: Optional[int] = None
    api_error: Optional[APIError] = None
    error_message: Optional[str] = None
    caused_by: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return False

    @property
    def kind(self) -> FailureKind:
        if self.caused_by is not None:
            if isinstance(self.caused_by, DecodeError):
                return FailureKind.DECODE
            return FailureKind.TRANSPORT
        if self.raw_api_error is not None:
            if self.api_error is None:
                return FailureKind.UNRECOGNIZED_API_ERROR
            return FailureKind.API_ERROR
        if self.status_code is not None:
            return FailureKind.HTTP_STATUS
        return FailureKind.PRE_SEND


APIResult = Union[Success[T], Failure]


def _parse_error_payload(body: bytes):
    """Return (code, message) from an error body, or None."""
    try:
        payload = json.loads(body)
    except (ValueError, TypeError, RecursionError):
        return None
    if not isinstance(payload, dict):
        return None

    code = payload.get('code')
    message = payload.get('message')
    # bool is an int subclass but never a valid code
    if not isinstance(code, int) or isinstance(code, bool):
        return None
    if not isinstance(message, str):
        return None
    return code, message


def classify(status_code: int, body: bytes) -> APIResult[bytes]:
    """
    Map an HTTP status and body to a result.

    2xx responses succeed with the raw body. Anything else is a Failure,
    carrying the decoded error code and message when the body has them.
    """
    if 200 <= status_code < 300:
        return Success(body)

    parsed = _parse_error_payload(body) if body else None
    if parsed is None:
        logger.debug("HTTP %d without a structured error body", status_code)
        return Failure(status_code=status_code)

    code, message = parsed
    return Failure(
        status_code=status_code,
        raw_api_error=code,
        api_error=APIError.from_code(code),
        error_message=message
    )


def transport_failure(error: BaseException) -> Failure:
    return Failure(caused_by=error)
