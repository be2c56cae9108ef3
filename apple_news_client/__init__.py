"""
Apple News API Client Library

A Python client for the Apple News publishing API. Requests are signed
with the HHMAC scheme, and every endpoint returns an APIResult instead of
raising.

Example usage:
    from apple_news_client import AppleNewsClient, Success

    with AppleNewsClient("api-key", "api-secret") as client:
        result = client.read_article("article-id")
        if isinstance(result, Success):
            print(result.response.article.title)
        else:
            print(result.kind, result.api_error, result.error_message)
"""

from .client import AppleNewsClient, format_query_date
from .constants import (
    DEFAULT_CONFIG,
    MAX_RESPONSE_SIZE,
    PRODUCTION_URL,
    USER_AGENT,
    VERSION
)
from .envelope import (
    Envelope,
    ListEnvelope,
    decode_envelope,
    decode_list_envelope,
    encode_envelope,
    encode_list_envelope
)
from .exceptions import (
    AppleNewsClientError,
    ConfigurationError,
    DecodeError,
    PreSendError,
    ResponseTooLargeError,
    TransportError
)
from .models import (
    Article,
    ArticleLinks,
    ArticleLinksResponse,
    ArticleMetadataRequest,
    ArticleUpdateLinks,
    Channel,
    ChannelLinks,
    ChannelLinksResponse,
    CreateArticleMetadata,
    Meta,
    PromoteArticleRequest,
    SearchMeta,
    SearchResponseLinks,
    Section,
    SectionLinks,
    SectionLinksResponse,
    SectionListLinks,
    Throttling
)
from .responses import (
    ArticleResponse,
    ChannelResponse,
    SearchResponse,
    SectionResponse,
    SectionsResponse
)
from .result import APIError, APIResult, Failure, FailureKind, Success, classify
from .signer import Credential, Signer, canonical_string, format_timestamp, sign
from .transport import RawResponse, RequestsTransport, Transport

__version__ = VERSION
__all__ = [
    "AppleNewsClient",
    "format_query_date",
    "DEFAULT_CONFIG",
    "MAX_RESPONSE_SIZE",
    "PRODUCTION_URL",
    "USER_AGENT",
    "Envelope",
    "ListEnvelope",
    "decode_envelope",
    "decode_list_envelope",
    "encode_envelope",
    "encode_list_envelope",
    "AppleNewsClientError",
    "ConfigurationError",
    "DecodeError",
    "PreSendError",
    "ResponseTooLargeError",
    "TransportError",
    "Article",
    "ArticleLinks",
    "ArticleLinksResponse",
    "ArticleMetadataRequest",
    "ArticleUpdateLinks",
    "Channel",
    "ChannelLinks",
    "ChannelLinksResponse",
    "CreateArticleMetadata",
    "Meta",
    "PromoteArticleRequest",
    "SearchMeta",
    "SearchResponseLinks",
    "Section",
    "SectionLinks",
    "SectionLinksResponse",
    "SectionListLinks",
    "Throttling",
    "ArticleResponse",
    "ChannelResponse",
    "SearchResponse",
    "SectionResponse",
    "SectionsResponse",
    "APIError",
    "APIResult",
    "Failure",
    "FailureKind",
    "Success",
    "classify",
    "Credential",
    "Signer",
    "canonical_string",
    "format_timestamp",
    "sign",
    "RawResponse",
    "RequestsTransport",
    "Transport"
]
