"""
Constants for the Apple News API client library.
"""

VERSION = "1.0.0"

# Production endpoint of the Apple News API
PRODUCTION_URL = "https://news-api.apple.com"
USER_AGENT = f"apple-news-client/python/{VERSION}"

# HTTP Headers
HEADER_AUTHORIZATION = "Authorization"
HEADER_USER_AGENT = "User-Agent"
HEADER_ACCEPT = "Accept"
HEADER_CONTENT_TYPE = "Content-Type"

JSON_CONTENT_TYPE = "application/json"
AUTH_SCHEME = "HHMAC"

# Default configuration values
DEFAULT_CONFIG = {
    'base_url': PRODUCTION_URL,
    'timeout': 30,                  # per-request ceiling in seconds
    'max_response_size': 1048576,   # 1 MiB response body cap
    'pool_connections': 10,
    'pool_maxsize': 10,
    'transport': None,              # injected Transport, None builds a RequestsTransport
    'clock': None,                  # callable returning an aware datetime
}

# Other constants
MAX_RESPONSE_SIZE = 1024 * 1024
DEFAULT_TIMEOUT = 30
READ_CHUNK_SIZE = 64 * 1024

# Environment variables read by AppleNewsClient.from_env()
ENV_API_KEY = "APPLE_NEWS_API_KEY"
ENV_API_SECRET = "APPLE_NEWS_API_SECRET"
