"""
HTTP transport used by the request pipeline.

A transport takes a fully prepared request (URL, headers and body already
signed) and returns the status code and the collected body. The client
accepts any Transport subclass, which is how tests substitute a fake.
"""

import logging
from abc import ABC, abstractmethod
from time import monotonic
from typing import NamedTuple

import requests
from requests.adapters import HTTPAdapter

from .constants import DEFAULT_TIMEOUT, MAX_RESPONSE_SIZE, READ_CHUNK_SIZE
from .exceptions import ResponseTooLargeError, TransportError

logger = logging.getLogger(__name__)


class RawResponse(NamedTuple):
    """Status code and body of a completed HTTP exchange."""
    status_code: int
    body: bytes


class Transport(ABC):
    """Interface for executing prepared requests."""

    @abstractmethod
    def execute(self, request: requests.PreparedRequest) -> RawResponse:
        """
        Send request and collect the whole response body.

        Raises:
            TransportError: If the request cannot be sent or read
        """

    def close(self):
        """Release pooled connections."""
        pass


class RequestsTransport(Transport):
    """
    Transport backed by a pooled requests.Session.

    The session is shared between threads; every call is a single
    ``send`` with its own body limit. ``timeout`` bounds the whole call:
    requests applies it to connecting and to each socket read, and the
    body is abandoned once the total elapsed time passes it.
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT,
                 max_response_size: int = MAX_RESPONSE_SIZE,
                 pool_connections: int = 10, pool_maxsize: int = 10):
        self.timeout = timeout
        self.max_response_size = max_response_size

        self.session = requests.Session()
        adapter = HTTPAdapter(
            pool_connections=pool_connections,
            pool_maxsize=pool_maxsize,
        )
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

    def execute(self, request: requests.PreparedRequest) -> RawResponse:
        deadline = monotonic() + self.timeout
        try:
            response = self.session.send(request, timeout=self.timeout, stream=True)
        except requests.RequestException as e:
            raise TransportError(f"HTTP request failed: {e}") from e

        try:
            body = self._collect(response, deadline)
        except requests.RequestException as e:
            raise TransportError(f"Reading response failed: {e}") from e
        finally:
            response.close()

        logger.debug("%s %s -> %d (%d bytes)",
                     request.method, request.url, response.status_code, len(body))
        return RawResponse(response.status_code, body)

    def _collect(self, response: requests.Response, deadline: float) -> bytes:
        """Read the body, failing past max_response_size or the deadline."""
        declared = response.headers.get('Content-Length')
        if declared and declared.isdigit() and int(declared) > self.max_response_size:
            raise ResponseTooLargeError(self.max_response_size)

        buffer = bytearray()
        for chunk in response.iter_content(chunk_size=READ_CHUNK_SIZE):
            if monotonic() > deadline:
                raise TransportError(f"Response not completed within {self.timeout}s")
            buffer.extend(chunk)
            if len(buffer) > self.max_response_size:
                raise ResponseTooLargeError(self.max_response_size)
        return bytes(buffer)

    def close(self):
        """Close HTTP session."""
        if self.session:
            self.session.close()
