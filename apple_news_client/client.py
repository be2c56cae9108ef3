"""
Apple News API client.

This module provides the signed request pipeline and one method per API
operation. Endpoint methods never raise: every outcome, including network
failures and unexpected response bodies, comes back as an APIResult.
"""

import datetime
import json
import logging
import os
from typing import Any, Dict, List, Mapping, Optional, Type, Union
from urllib.parse import quote, urlencode

import requests
from pydantic import BaseModel

from .constants import (
    DEFAULT_CONFIG,
    ENV_API_KEY,
    ENV_API_SECRET,
    HEADER_ACCEPT,
    HEADER_AUTHORIZATION,
    HEADER_CONTENT_TYPE,
    HEADER_USER_AGENT,
    JSON_CONTENT_TYPE,
    USER_AGENT
)
from .envelope import Envelope, ListEnvelope
from .exceptions import (
    ConfigurationError,
    DecodeError,
    PreSendError,
    ResponseTooLargeError
)
from .models import PromoteArticleRequest
from .responses import (
    ArticleResponse,
    ChannelResponse,
    SearchResponse,
    SectionResponse,
    SectionsResponse
)
from .result import APIResult, Failure, Success, classify, transport_failure
from .signer import Credential, Signer
from .transport import RequestsTransport, Transport

logger = logging.getLogger(__name__)

QueryParameters = Mapping[str, List[str]]


def _json_default(value: Any):
    if isinstance(value, datetime.datetime):
        return format_query_date(value)
    if isinstance(value, datetime.date):
        return value.isoformat()
    if isinstance(value, BaseModel):
        return value.model_dump(mode='json', by_alias=True, exclude_none=True)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def format_query_date(value: Union[datetime.date, datetime.datetime]) -> str:
    """
    Format a search bound as ISO-8601 in UTC, e.g. ``2025-11-05T00:00:00Z``.

    Plain dates mean midnight UTC; naive datetimes are taken as UTC.
    """
    if not isinstance(value, datetime.datetime):
        value = datetime.datetime(value.year, value.month, value.day)
    if value.tzinfo is None:
        value = value.replace(tzinfo=datetime.timezone.utc)
    return value.astimezone(datetime.timezone.utc).strftime('%Y-%m-%dT%H:%M:%SZ')


class AppleNewsClient:
    """
    Client for the Apple News publishing API.

    Use it as a context manager, or call close() when done, so pooled
    connections are released:

        with AppleNewsClient(api_key, api_secret) as client:
            result = client.read_channel(channel_id)
            if isinstance(result, Success):
                print(result.response.channel.name)
    """

    def __init__(self, api_key: str, api_secret: str, **config):
        """
        Initialize the client.

        Args:
            api_key: API key from News Publisher
            api_secret: API secret from News Publisher
            **config: Configuration options (base_url, timeout,
                max_response_size, pool_connections, pool_maxsize,
                transport, clock)

        Raises:
            ConfigurationError: If a credential is empty or an option is invalid
        """
        unknown = set(config) - set(DEFAULT_CONFIG)
        if unknown:
            raise ConfigurationError(f"Unknown configuration options: {', '.join(sorted(unknown))}")

        self.credential = Credential(api_key, api_secret)

        # Merge default config with user overrides
        self.config = {**DEFAULT_CONFIG, **config}
        self._validate_config()

        self.base_url = self.config['base_url'].rstrip('/')
        self.signer = Signer(self.credential, clock=self.config['clock'])

        transport = self.config['transport']
        self._owns_transport = transport is None
        if transport is None:
            transport = RequestsTransport(
                timeout=self.config['timeout'],
                max_response_size=self.config['max_response_size'],
                pool_connections=self.config['pool_connections'],
                pool_maxsize=self.config['pool_maxsize']
            )
        self.transport = transport
        self._closed = False

        logger.info("Apple News client created for %s (key %s...)",
                    self.base_url, self.credential.api_key[:4])

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **config) -> "AppleNewsClient":
        """Create a client from APPLE_NEWS_API_KEY and APPLE_NEWS_API_SECRET."""
        environ = os.environ if environ is None else environ
        api_key = environ.get(ENV_API_KEY)
        api_secret = environ.get(ENV_API_SECRET)
        if not api_key or not api_secret:
            raise ConfigurationError(f"{ENV_API_KEY} and {ENV_API_SECRET} must be set")
        return cls(api_key, api_secret, **config)

    def _validate_config(self):
        """Validate client configuration."""
        if not self.config['base_url']:
            raise ConfigurationError("base_url cannot be empty")

        for option, types in (('timeout', (int, float)), ('max_response_size', int),
                              ('pool_connections', int), ('pool_maxsize', int)):
            value = self.config[option]
            if not isinstance(value, types) or isinstance(value, bool):
                raise ConfigurationError(f"{option} must be a number, got {value!r}")
            if value <= 0:
                raise ConfigurationError(f"{option} must be positive")

        transport = self.config['transport']
        if transport is not None and not isinstance(transport, Transport):
            raise ConfigurationError("transport must be a Transport instance")

        clock = self.config['clock']
        if clock is not None and not callable(clock):
            raise ConfigurationError("clock must be callable")

    def _build_url(self, path: str, query_parameters: Optional[QueryParameters]) -> str:
        """Join base URL, path and one query item per (name, value) pair."""
        if not path.startswith('/'):
            raise PreSendError(f"Path must be absolute: {path!r}")
        if any(c in path for c in '?#') or any(ord(c) < 0x20 or ord(c) == 0x7f for c in path):
            raise PreSendError(f"Path contains invalid characters: {path!r}")

        query_items = [
            (name, value)
            for name, values in (query_parameters or {}).items()
            for value in values
        ]
        url = self.base_url + quote(path, safe='/')
        if query_items:
            url += '?' + urlencode(query_items)
        return url

    def _serialize_body(self, json_data=None, data=None, content_type: Optional[str] = None):
        """Return (body, content type), or (None, None) without a body."""
        if json_data is not None and data is not None:
            raise PreSendError("A request carries at most one body")

        if json_data is not None:
            if isinstance(json_data, BaseModel):
                body = json_data.model_dump_json(by_alias=True, exclude_none=True)
            else:
                body = json.dumps(json_data, separators=(',', ':'), default=_json_default)
            return body.encode('utf-8'), JSON_CONTENT_TYPE
        elif data is not None:
            if isinstance(data, str):
                data = data.encode('utf-8')
            return bytes(data), content_type or JSON_CONTENT_TYPE
        else:
            return None, None

    def _make_request(self, method: str, path: str,
                      query_parameters: Optional[QueryParameters] = None,
                      json_data=None, data=None,
                      content_type: Optional[str] = None) -> APIResult[bytes]:
        """
        Make a signed HTTP request and classify the response.

        Args:
            method: HTTP method
            path: URL path (relative to base_url)
            query_parameters: Query values by parameter name
            json_data: Structured body, sent as JSON
            data: Raw body bytes, sent with content_type
            content_type: Content type of a raw body

        Returns:
            Success with the raw response body, or Failure
        """
        try:
            url = self._build_url(path, query_parameters)
            body, body_type = self._serialize_body(json_data, data, content_type)
            prepared = requests.Request(method, url, data=body).prepare()
            if body is not None:
                # requests drops empty bodies; send exactly what is signed
                prepared.body = body
                prepared.headers['Content-Length'] = str(len(body))
        except (PreSendError, requests.RequestException, ValueError, TypeError) as e:
            logger.warning("Could not build %s request for %s: %s", method, path, e)
            return Failure()

        try:
            prepared.headers[HEADER_USER_AGENT] = USER_AGENT
            prepared.headers[HEADER_AUTHORIZATION] = self.signer.authorization_header(
                method, prepared.url, body
            )
            prepared.headers[HEADER_ACCEPT] = JSON_CONTENT_TYPE
            if body is not None:
                prepared.headers[HEADER_CONTENT_TYPE] = body_type

            logger.debug("%s %s", method, prepared.url)
            response = self.transport.execute(prepared)
            if len(response.body) > self.config['max_response_size']:
                raise ResponseTooLargeError(self.config['max_response_size'])
        except Exception as e:
            logger.warning("%s %s failed: %s", method, path, e)
            return transport_failure(e)

        return classify(response.status_code, response.body)

    def _make_request_with_response_body(self, method: str, path: str,
                                         response_type: Type[Union[Envelope, ListEnvelope]],
                                         **kwargs) -> APIResult[Any]:
        result = self._make_request(method, path, **kwargs)
        if isinstance(result, Failure):
            return result

        try:
            return Success(response_type.from_json(result.response))
        except DecodeError as e:
            logger.warning("Could not decode %s from %s %s: %s",
                           response_type.__name__, method, path, e)
            return Failure(caused_by=e)
        except Exception as e:
            logger.warning("Could not decode %s from %s %s: %s",
                           response_type.__name__, method, path, e)
            error = DecodeError(f"Unexpected error decoding {response_type.__name__}: {e!r}")
            error.__cause__ = e
            return Failure(caused_by=error)

    def _make_request_without_response_body(self, method: str, path: str,
                                            **kwargs) -> APIResult[None]:
        result = self._make_request(method, path, **kwargs)
        if isinstance(result, Failure):
            return result
        return Success(None)

    # Channels

    def read_channel(self, channel_id: str) -> APIResult[ChannelResponse]:
        """Read channel information."""
        return self._make_request_with_response_body(
            'GET', '/channels/' + channel_id, ChannelResponse
        )

    # Articles

    def create_article(self, channel_id: str, article: bytes,
                       content_type: str = JSON_CONTENT_TYPE) -> APIResult[ArticleResponse]:
        """
        Create an article in a channel.

        Args:
            channel_id: The channel identifier
            article: The article payload, e.g. a multipart body holding
                article.json, metadata and resources
            content_type: Content type of the payload (with the multipart
                boundary when applicable)
        """
        return self._make_request_with_response_body(
            'POST', '/channels/' + channel_id + '/articles', ArticleResponse,
            data=article, content_type=content_type
        )

    def read_article(self, article_id: str) -> APIResult[ArticleResponse]:
        """Read article information."""
        return self._make_request_with_response_body(
            'GET', '/articles/' + article_id, ArticleResponse
        )

    def update_article(self, article_id: str, revision: str, article: bytes,
                       content_type: str = JSON_CONTENT_TYPE) -> APIResult[ArticleResponse]:
        """
        Update an article.

        Args:
            article_id: The article identifier
            revision: The current revision token of the article
            article: The updated article payload
            content_type: Content type of the payload
        """
        return self._make_request_with_response_body(
            'POST', '/articles/' + article_id, ArticleResponse,
            query_parameters={'revision': [revision]},
            data=article, content_type=content_type
        )

    def delete_article(self, article_id: str) -> APIResult[None]:
        """Delete an article."""
        return self._make_request_without_response_body(
            'DELETE', '/articles/' + article_id
        )

    def search_articles(self, channel_id: str,
                        from_date: Optional[datetime.datetime] = None,
                        to_date: Optional[datetime.datetime] = None,
                        page_token: Optional[str] = None,
                        page_size: Optional[int] = None) -> APIResult[SearchResponse]:
        """
        Search for articles in a channel.

        Returns a single page. Pass the previous page's ``next_page_token``
        as ``page_token`` to fetch the next one.
        """
        query_parameters: Dict[str, List[str]] = {}
        if from_date is not None:
            query_parameters['fromDate'] = [format_query_date(from_date)]
        if to_date is not None:
            query_parameters['toDate'] = [format_query_date(to_date)]
        if page_token is not None:
            query_parameters['pageToken'] = [str(page_token)]
        if page_size is not None:
            query_parameters['pageSize'] = [str(page_size)]

        return self._make_request_with_response_body(
            'GET', '/channels/' + channel_id + '/articles', SearchResponse,
            query_parameters=query_parameters
        )

    def promote_article(self, article_id: str, section_id: str) -> APIResult[None]:
        """Promote an article to a section."""
        return self._make_request_without_response_body(
            'POST', '/articles/' + article_id + '/promote',
            json_data=PromoteArticleRequest(section_id=section_id)
        )

    # Sections

    def read_section(self, section_id: str) -> APIResult[SectionResponse]:
        """Read section information."""
        return self._make_request_with_response_body(
            'GET', '/sections/' + section_id, SectionResponse
        )

    def list_sections(self, channel_id: str) -> APIResult[SectionsResponse]:
        """List the sections of a channel."""
        return self._make_request_with_response_body(
            'GET', '/channels/' + channel_id + '/sections', SectionsResponse
        )

    def close(self):
        """Release the transport. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        if self._owns_transport:
            self.transport.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
