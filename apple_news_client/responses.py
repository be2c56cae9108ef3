"""
Response envelopes returned by the endpoint methods.
"""

from typing import List, Optional, Union

from .envelope import Envelope, ListEnvelope
from .models import (
    Article,
    ArticleLinksResponse,
    Channel,
    ChannelLinksResponse,
    CreateArticleMetadata,
    Meta,
    SearchMeta,
    SearchResponseLinks,
    Section,
    SectionLinksResponse,
    SectionListLinks,
)


class ChannelResponse(Envelope[Channel]):
    payload_type = Channel
    links_type = ChannelLinksResponse

    @property
    def channel(self) -> Channel:
        return self.payload


class ArticleResponse(Envelope[Article]):
    """An article with its links, throttling meta and publishing flags."""

    payload_type = Article
    links_type = ArticleLinksResponse
    meta_type = Meta
    extra_type = CreateArticleMetadata

    @property
    def article(self) -> Article:
        return self.payload

    @property
    def metadata(self) -> Optional[CreateArticleMetadata]:
        return self.extra


class SectionResponse(Envelope[Section]):
    payload_type = Section
    links_type = SectionLinksResponse

    @property
    def section(self) -> Section:
        return self.payload


class SearchResponse(ListEnvelope[Article]):
    """
    One page of article search results.

    Pagination is left to the caller: pass ``next_page_token`` (or follow
    ``links.next``) to fetch the following page.
    """

    item_type = Article
    links_type = SearchResponseLinks
    meta_type = SearchMeta

    @property
    def articles(self) -> List[Article]:
        return self.items

    @property
    def next_page_token(self) -> Optional[Union[str, int]]:
        if self.meta is None:
            return None
        return self.meta.next_page_token


class SectionsResponse(ListEnvelope[Section]):
    item_type = Section
    links_type = SectionListLinks

    @property
    def sections(self) -> List[Section]:
        return self.items
