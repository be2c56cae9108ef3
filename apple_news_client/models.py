"""
Apple News API data models.

Plain pydantic data holders for channels, articles and sections, and for
the side structures (links, meta, metadata) the API returns next to them
inside the ``data`` object. Field names follow Python conventions and are
aliased to the camelCase keys used on the wire. Unknown keys are ignored,
which is what lets several models be validated against the same object.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class APIModel(BaseModel):
    """Base for all wire models."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra='ignore',
    )

    def to_wire(self) -> Dict[str, Any]:
        """Dump to a JSON-ready dict with wire keys, omitting unset values."""
        return self.model_dump(mode='json', by_alias=True, exclude_none=True)


# Channels

class Channel(APIModel):
    id: str
    type: str = "channel"
    name: str
    website: Optional[str] = None
    share_url: Optional[str] = None
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None


class ChannelLinks(APIModel):
    self_link: str = Field(alias='self')
    default_section: Optional[str] = None
    sections: Optional[str] = None


class ChannelLinksResponse(APIModel):
    links: ChannelLinks


# Articles

class Article(APIModel):
    id: str
    type: str = "article"
    title: Optional[str] = None
    share_url: Optional[str] = None
    state: Optional[str] = None
    revision: Optional[str] = None
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None
    document: Optional[Dict[str, Any]] = None
    warnings: Optional[List[Any]] = None


class ArticleLinks(APIModel):
    self_link: str = Field(alias='self')
    channel: str
    sections: List[str] = []


class ArticleLinksResponse(APIModel):
    links: ArticleLinks


class Throttling(APIModel):
    queue_size: Optional[int] = None
    estimated_delay_in_seconds: Optional[int] = None
    quota_available: Optional[int] = None


class Meta(APIModel):
    """Processing metadata returned with article writes."""
    throttling: Throttling


class CreateArticleMetadata(APIModel):
    """Publishing flags reported for an article."""
    is_sponsored: bool
    is_preview: bool
    is_candidate_to_be_featured: Optional[bool] = None
    is_hidden: Optional[bool] = None
    maturity_rating: Optional[str] = None
    accessory_text: Optional[str] = None
    target_territory_country_codes: Optional[List[str]] = None


class ArticleUpdateLinks(APIModel):
    """Section URLs an article is published to."""
    sections: List[str]


class ArticleMetadataRequest(APIModel):
    """
    The ``metadata`` part of a create or update article request.

    Serialize with ``to_wire()`` and embed it in the raw article payload.
    """
    revision: Optional[str] = None
    is_sponsored: Optional[bool] = None
    is_preview: Optional[bool] = None
    is_candidate_to_be_featured: Optional[bool] = None
    is_hidden: Optional[bool] = None
    maturity_rating: Optional[str] = None
    accessory_text: Optional[str] = None
    target_territory_country_codes: Optional[List[str]] = None
    links: Optional[ArticleUpdateLinks] = None


class PromoteArticleRequest(APIModel):
    section_id: str


# Sections

class Section(APIModel):
    id: str
    type: str = "section"
    name: str
    is_default: Optional[bool] = None
    share_url: Optional[str] = None
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None


class SectionLinks(APIModel):
    self_link: str = Field(alias='self')
    channel: str


class SectionLinksResponse(APIModel):
    links: SectionLinks


# Lists

class SearchResponseLinks(APIModel):
    self_link: str = Field(alias='self')
    next: str


class SearchMeta(APIModel):
    # Documented as a string token, some responses carry a number
    next_page_token: Union[str, int]


class SectionListLinks(APIModel):
    self_link: str = Field(alias='self')
