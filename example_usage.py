#!/usr/bin/env python3
"""
Basic usage examples for the Apple News API client library.

Reads credentials from APPLE_NEWS_API_KEY / APPLE_NEWS_API_SECRET and
takes a channel id as the first argument.
"""

import datetime
import logging
import sys

from apple_news_client import (
    APIError,
    AppleNewsClient,
    AppleNewsClientError,
    Failure,
    FailureKind,
    Success
)


def describe(failure: Failure) -> str:
    """Render a failure for display."""
    if failure.kind is FailureKind.API_ERROR:
        return f"{failure.api_error.name} ({failure.status_code}): {failure.error_message}"
    if failure.kind is FailureKind.UNRECOGNIZED_API_ERROR:
        return f"unrecognized error {failure.raw_api_error}: {failure.error_message}"
    if failure.kind is FailureKind.HTTP_STATUS:
        return f"HTTP {failure.status_code}"
    if failure.kind is FailureKind.PRE_SEND:
        return "request could not be built"
    return f"{failure.kind.value}: {failure.caused_by}"


def main():
    """Run basic usage examples."""
    if len(sys.argv) != 2:
        print(f"usage: {sys.argv[0]} CHANNEL_ID")
        return 2
    channel_id = sys.argv[1]

    logging.basicConfig(level=logging.INFO)

    print("=== Apple News Client Basic Usage Examples ===\n")

    try:
        client = AppleNewsClient.from_env()
    except AppleNewsClientError as e:
        print(f"✗ Configuration error: {e}")
        return 1

    with client:
        print("1. Reading channel...")
        result = client.read_channel(channel_id)
        if isinstance(result, Success):
            channel = result.response.channel
            print(f"   ✓ {channel.name} ({channel.website or 'no website'})")
        else:
            print(f"   ✗ {describe(result)}")
        print()

        print("2. Listing sections...")
        result = client.list_sections(channel_id)
        if isinstance(result, Success):
            for section in result.response.sections:
                marker = " (default)" if section.is_default else ""
                print(f"   - {section.name}{marker}: {section.id}")
        else:
            print(f"   ✗ {describe(result)}")
        print()

        print("3. Searching articles from the last week...")
        to_date = datetime.datetime.now(datetime.timezone.utc)
        result = client.search_articles(
            channel_id,
            from_date=to_date - datetime.timedelta(days=7),
            to_date=to_date
        )
        if isinstance(result, Success):
            for article in result.response.articles:
                print(f"   - {article.title} [{article.state}]")
            if result.response.next_page_token is not None:
                print(f"   More results: pageToken={result.response.next_page_token}")
        elif result.api_error is APIError.RATE_LIMIT_EXCEEDED:
            print("   ✗ Rate limited, try again later")
        else:
            print(f"   ✗ {describe(result)}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
