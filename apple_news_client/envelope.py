"""
Codec for the enveloped responses of the Apple News API.

Singular resources come back as one ``data`` object holding the resource
fields together with side structures (links, meta, extra metadata)::

    {"data": {"id": "...", "title": "...", "links": {...}, "throttling": {...}}}

Decoding parses the JSON once and validates several models against that
same object: the payload is required, the side structures are best effort
and end up as None when they do not fit. Encoding merges everything back
into one flat ``data`` object, in the order payload, links, meta, extra;
a key written later replaces the same key written earlier.

Lists use a different shape, with ``links`` and ``meta`` as peers of the
``data`` array::

    {"data": [{...}, {...}], "links": {"self": "...", "next": "..."}, "meta": {...}}
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from .exceptions import DecodeError

logger = logging.getLogger(__name__)

P = TypeVar("P", bound=BaseModel)
M = TypeVar("M", bound=BaseModel)

DATA_KEY = 'data'
LINKS_KEY = 'links'
META_KEY = 'meta'


@dataclass
class Envelope(Generic[P]):
    """A singular resource and its optional side structures."""

    payload: P
    links: Optional[BaseModel] = None
    meta: Optional[BaseModel] = None
    extra: Optional[BaseModel] = None

    payload_type: ClassVar[Optional[Type[BaseModel]]] = None
    links_type: ClassVar[Optional[Type[BaseModel]]] = None
    meta_type: ClassVar[Optional[Type[BaseModel]]] = None
    extra_type: ClassVar[Optional[Type[BaseModel]]] = None

    @classmethod
    def from_json(cls, raw: bytes):
        """Decode raw bytes using the component types declared on the class."""
        if cls.payload_type is None:
            raise TypeError(f"{cls.__name__} does not declare a payload_type")
        return decode_envelope(
            raw,
            cls.payload_type,
            links_type=cls.links_type,
            meta_type=cls.meta_type,
            extra_type=cls.extra_type,
            envelope_cls=cls
        )

    def to_json(self) -> bytes:
        return encode_envelope(self)


@dataclass
class ListEnvelope(Generic[P]):
    """A list of resources with sibling links and meta."""

    items: List[P] = field(default_factory=list)
    links: Optional[BaseModel] = None
    meta: Optional[BaseModel] = None

    item_type: ClassVar[Optional[Type[BaseModel]]] = None
    links_type: ClassVar[Optional[Type[BaseModel]]] = None
    meta_type: ClassVar[Optional[Type[BaseModel]]] = None

    @classmethod
    def from_json(cls, raw: bytes):
        if cls.item_type is None:
            raise TypeError(f"{cls.__name__} does not declare an item_type")
        return decode_list_envelope(
            raw,
            cls.item_type,
            links_type=cls.links_type,
            meta_type=cls.meta_type,
            envelope_cls=cls
        )

    def to_json(self) -> bytes:
        return encode_list_envelope(self)


def _load_document(raw: bytes) -> Dict[str, Any]:
    try:
        document = json.loads(raw)
    except (ValueError, TypeError, RecursionError) as e:
        raise DecodeError(f"Response is not valid JSON: {e}") from e
    if not isinstance(document, dict):
        raise DecodeError("Response is not a JSON object")
    return document


def _attempt(model_type: Optional[Type[M]], value: Any) -> Optional[M]:
    """Best-effort validation: a missing or mismatched value gives None."""
    if model_type is None or value is None:
        return None
    try:
        return model_type.model_validate(value)
    except ValidationError as e:
        logger.debug("Skipping %s: %d validation errors",
                     model_type.__name__, e.error_count())
        return None


def _dump(model: BaseModel) -> Dict[str, Any]:
    return model.model_dump(mode='json', by_alias=True, exclude_none=True)


def decode_envelope(raw: bytes, payload_type: Type[P],
                    links_type: Optional[Type[BaseModel]] = None,
                    meta_type: Optional[Type[BaseModel]] = None,
                    extra_type: Optional[Type[BaseModel]] = None,
                    envelope_cls: Type[Envelope] = Envelope) -> Envelope[P]:
    """
    Split a singular ``data`` object into payload and side structures.

    Raises:
        DecodeError: If the body is not JSON, has no ``data`` object, or
            the payload does not validate
    """
    document = _load_document(raw)
    data = document.get(DATA_KEY)
    if not isinstance(data, dict):
        raise DecodeError("Response has no 'data' object")

    try:
        payload = payload_type.model_validate(data)
    except ValidationError as e:
        raise DecodeError(f"Invalid {payload_type.__name__} payload: {e}") from e

    return envelope_cls(
        payload=payload,
        links=_attempt(links_type, data),
        meta=_attempt(meta_type, data),
        extra=_attempt(extra_type, data)
    )


def encode_envelope(envelope: Envelope) -> bytes:
    """Merge payload, links, meta and extra into one ``data`` object."""
    data = _dump(envelope.payload)
    for component in (envelope.links, envelope.meta, envelope.extra):
        if component is not None:
            data.update(_dump(component))
    return json.dumps({DATA_KEY: data}, separators=(',', ':')).encode('utf-8')


def decode_list_envelope(raw: bytes, item_type: Type[P],
                         links_type: Optional[Type[BaseModel]] = None,
                         meta_type: Optional[Type[BaseModel]] = None,
                         envelope_cls: Type[ListEnvelope] = ListEnvelope) -> ListEnvelope[P]:
    """
    Decode a ``data`` array and its sibling ``links`` and ``meta``.

    Raises:
        DecodeError: If ``data`` is not an array or any item does not validate
    """
    document = _load_document(raw)
    data = document.get(DATA_KEY)
    if not isinstance(data, list):
        raise DecodeError("Response has no 'data' array")

    items = []
    for index, value in enumerate(data):
        try:
            items.append(item_type.model_validate(value))
        except ValidationError as e:
            raise DecodeError(f"Invalid {item_type.__name__} at index {index}: {e}") from e

    return envelope_cls(
        items=items,
        links=_attempt(links_type, document.get(LINKS_KEY)),
        meta=_attempt(meta_type, document.get(META_KEY))
    )


def encode_list_envelope(envelope: ListEnvelope) -> bytes:
    document: Dict[str, Any] = {DATA_KEY: [_dump(item) for item in envelope.items]}
    if envelope.links is not None:
        document[LINKS_KEY] = _dump(envelope.links)
    if envelope.meta is not None:
        document[META_KEY] = _dump(envelope.meta)
    return json.dumps(document, separators=(',', ':')).encode('utf-8')
