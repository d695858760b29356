"""JSON:API v1.1 document codec."""

from .codec import CodecOptions, JSONAPICodec, marshal, unmarshal
from .core.document import CONTENT_TYPE, JSONAPIDocumentBuilder
from .core.errors import (
    ContractError,
    DecodeError,
    EncodeError,
    JSONAPIError,
    JSONAPIErrorBuilder,
)
from .parsers.base import JSONAPIParser
from .schemas.resource import (
    Document,
    ErrorObject,
    ErrorSource,
    RelationshipObject,
    ResourceIdentifier,
    ResourceObject,
)
from .serializers.base import JSONAPISerializer

__all__ = [
    "CONTENT_TYPE",
    "CodecOptions",
    "ContractError",
    "DecodeError",
    "Document",
    "EncodeError",
    "ErrorObject",
    "ErrorSource",
    "JSONAPICodec",
    "JSONAPIDocumentBuilder",
    "JSONAPIError",
    "JSONAPIErrorBuilder",
    "JSONAPIParser",
    "JSONAPISerializer",
    "RelationshipObject",
    "ResourceIdentifier",
    "ResourceObject",
    "marshal",
    "unmarshal",
]
