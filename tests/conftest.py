"""
Shared fixtures for the Apple News client tests.
"""

import datetime
import json

import pytest

from apple_news_client import AppleNewsClient, RawResponse, Transport

API_KEY = "test-api-key"
API_SECRET = "test-api-secret"
FIXED_NOW = datetime.datetime(2025, 11, 13, 10, 30, 0, tzinfo=datetime.timezone.utc)


class RecordingTransport(Transport):
    """Transport spy: records prepared requests and replays queued responses."""

    def __init__(self):
        self.requests = []
        self.responses = []
        self.closed = False

    def queue(self, status_code, body=b""):
        if isinstance(body, (dict, list)):
            body = json.dumps(body).encode('utf-8')
        self.responses.append(RawResponse(status_code, body))

    def queue_error(self, error):
        self.responses.append(error)

    def execute(self, request):
        self.requests.append(request)
        if not self.responses:
            return RawResponse(200, b"")
        response = self.responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response

    def close(self):
        self.closed = True

    @property
    def last_request(self):
        return self.requests[-1]


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def client(transport):
    """Client wired to the spy transport and a fixed clock."""
    return AppleNewsClient(API_KEY, API_SECRET, transport=transport, clock=lambda: FIXED_NOW)


@pytest.fixture
def channel_body():
    return {
        "data": {
            "id": "c1",
            "type": "channel",
            "name": "Daily News",
            "website": "https://example.com",
            "shareUrl": "https://apple.news/c1",
            "createdAt": "2025-01-01T00:00:00Z",
            "modifiedAt": "2025-02-01T00:00:00Z",
            "links": {
                "self": "https://news-api.apple.com/channels/c1",
                "defaultSection": "https://news-api.apple.com/sections/s1",
                "sections": "https://news-api.apple.com/channels/c1/sections"
            }
        }
    }


@pytest.fixture
def article_body():
    return {
        "data": {
            "id": "a1",
            "type": "article",
            "title": "Hello World",
            "shareUrl": "https://apple.news/a1",
            "state": "LIVE",
            "revision": "AAAAAAAAAAAAAAAAAAAAew==",
            "createdAt": "2025-11-05T10:00:00Z",
            "modifiedAt": "2025-11-05T11:00:00Z",
            "isSponsored": False,
            "isPreview": True,
            "isCandidateToBeFeatured": False,
            "maturityRating": "GENERAL",
            "links": {
                "self": "https://news-api.apple.com/articles/a1",
                "channel": "https://news-api.apple.com/channels/c1",
                "sections": ["https://news-api.apple.com/sections/s1"]
            },
            "throttling": {
                "queueSize": 0,
                "estimatedDelayInSeconds": 0,
                "quotaAvailable": 100
            }
        }
    }


@pytest.fixture
def section_body():
    return {
        "data": {
            "id": "s1",
            "type": "section",
            "name": "Main",
            "isDefault": True,
            "shareUrl": "https://apple.news/s1",
            "links": {
                "self": "https://news-api.apple.com/sections/s1",
                "channel": "https://news-api.apple.com/channels/c1"
            }
        }
    }


@pytest.fixture
def search_body():
    return {
        "data": [
            {"id": "a1", "type": "article", "title": "First"},
            {"id": "a2", "type": "article", "title": "Second"}
        ],
        "links": {
            "self": "https://news-api.apple.com/channels/c1/articles",
            "next": "https://news-api.apple.com/channels/c1/articles?pageToken=abc"
        },
        "meta": {"nextPageToken": "abc"}
    }


@pytest.fixture
def sections_body():
    return {
        "data": [
            {"id": "s1", "type": "section", "name": "Main", "isDefault": True},
            {"id": "s2", "type": "section", "name": "Sports", "isDefault": False}
        ],
        "links": {"self": "https://news-api.apple.com/channels/c1/sections"}
    }
