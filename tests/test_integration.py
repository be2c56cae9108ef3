"""
Integration tests against the live Apple News API.

Skipped unless APPLE_NEWS_API_KEY, APPLE_NEWS_API_SECRET and
APPLE_NEWS_CHANNEL_ID are set. Only read operations are exercised.
"""

import datetime
import os

import pytest

from apple_news_client import APIError, AppleNewsClient, Failure, Success

REQUIRED = ("APPLE_NEWS_API_KEY", "APPLE_NEWS_API_SECRET", "APPLE_NEWS_CHANNEL_ID")

pytestmark = pytest.mark.skipif(
    not all(os.environ.get(name) for name in REQUIRED),
    reason="Apple News credentials not configured"
)


class TestIntegration:
    """Integration tests with the Apple News API."""

    @pytest.fixture(scope="class")
    def client(self):
        """Create authenticated client."""
        with AppleNewsClient.from_env() as client:
            yield client

    @pytest.fixture(scope="class")
    def channel_id(self):
        return os.environ["APPLE_NEWS_CHANNEL_ID"]

    def test_read_channel(self, client, channel_id):
        """Test authenticated access to the channel."""
        result = client.read_channel(channel_id)

        assert isinstance(result, Success), result
        assert result.response.channel.id == channel_id

    def test_list_and_read_sections(self, client, channel_id):
        """Test listing sections and reading the first one."""
        result = client.list_sections(channel_id)

        assert isinstance(result, Success), result
        assert result.response.sections

        section = result.response.sections[0]
        read = client.read_section(section.id)
        assert isinstance(read, Success), read
        assert read.response.section.id == section.id

    def test_search_articles(self, client, channel_id):
        """Test searching the last 30 days returns one page."""
        to_date = datetime.datetime.now(datetime.timezone.utc)
        from_date = to_date - datetime.timedelta(days=30)

        result = client.search_articles(channel_id, from_date=from_date, to_date=to_date)

        assert isinstance(result, Success), result
        for article in result.response.articles:
            assert article.id

    def test_missing_article(self, client):
        """Test an unknown article id yields a classified error."""
        result = client.read_article("00000000-0000-0000-0000-000000000000")

        assert isinstance(result, Failure)
        assert result.status_code == 404
        assert result.api_error in (APIError.NOT_FOUND, None)

    def test_wrong_secret(self, channel_id):
        """Test that a wrong secret results in an authentication failure."""
        with AppleNewsClient(os.environ["APPLE_NEWS_API_KEY"], "d3Jvbmctc2VjcmV0") as client:
            result = client.read_channel(channel_id)

        assert isinstance(result, Failure)
        assert result.status_code == 401
