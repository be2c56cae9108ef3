"""
Request signing for the Apple News API.

Every request carries an ``Authorization`` header of the form::

    HHMAC; key=<api key>; signature=<signature>; date=<timestamp>

where the signature is the base64 encoded HMAC-SHA256, keyed with the API
secret, of the canonical request: method, absolute URL and timestamp, plus
the content type and the hex SHA-256 digest of the body when one is sent.
"""

import base64
import datetime
import hashlib
import hmac
from dataclasses import dataclass
from typing import Callable, Optional

from .constants import AUTH_SCHEME, JSON_CONTENT_TYPE
from .exceptions import ConfigurationError


@dataclass(frozen=True)
class Credential:
    """API key and secret issued by News Publisher."""

    api_key: str
    api_secret: str

    def __post_init__(self):
        if not self.api_key:
            raise ConfigurationError("api_key cannot be empty")
        if not self.api_secret:
            raise ConfigurationError("api_secret cannot be empty")

    def __repr__(self):
        return f"Credential(api_key={self.api_key!r}, api_secret='***')"


def utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def format_timestamp(now: datetime.datetime) -> str:
    """
    Format a signing timestamp as ``yyyy-MM-ddTHH:mm:ss+00:00``.

    Naive datetimes are taken to be UTC. The output depends only on the
    instant, never on the host locale or timezone.
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=datetime.timezone.utc)
    now = now.astimezone(datetime.timezone.utc).replace(microsecond=0)
    return now.isoformat()


def body_digest(body: bytes) -> str:
    """Hex encoded (lowercase) SHA-256 digest of the raw body."""
    return hashlib.sha256(body).hexdigest()


def canonical_string(method: str, url: str, timestamp: str, body: Optional[bytes] = None) -> str:
    """
    Build the canonical request string.

    The content type is always ``application/json`` here, whatever the
    actual Content-Type header of the request is.
    """
    canonical = f"{method}{url}{timestamp}"
    if body is not None:
        canonical += JSON_CONTENT_TYPE + body_digest(body)
    return canonical


def hmac_sha256(secret: str, message: str) -> str:
    """Base64 encoded HMAC-SHA256 of message, keyed with secret."""
    mac = hmac.new(
        secret.encode('utf-8'),
        message.encode('utf-8'),
        hashlib.sha256
    )
    return base64.b64encode(mac.digest()).decode('ascii')


def sign(method: str, url: str, body: Optional[bytes], secret: str, key: str,
         now: datetime.datetime) -> str:
    """
    Produce the Authorization header value for a request.

    Args:
        method: HTTP method, e.g. ``GET``
        url: Absolute request URL including the query string
        body: Raw request body, or None when the request has no body
        secret: API secret
        key: API key
        now: Signing time

    Returns:
        ``HHMAC; key=...; signature=...; date=...``
    """
    timestamp = format_timestamp(now)
    signature = hmac_sha256(secret, canonical_string(method, url, timestamp, body))
    return f"{AUTH_SCHEME}; key={key}; signature={signature}; date={timestamp}"


class Signer:
    """
    Signs requests with a fixed credential.

    The clock is read once per call so the header is never reused.
    """

    def __init__(self, credential: Credential,
                 clock: Optional[Callable[[], datetime.datetime]] = None):
        self.credential = credential
        self.clock = clock or utcnow

    def authorization_header(self, method: str, url: str, body: Optional[bytes] = None) -> str:
        return sign(
            method,
            url,
            body,
            self.credential.api_secret,
            self.credential.api_key,
            self.clock()
        )
