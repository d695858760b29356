"""Core JSON:API document, capability and error helpers."""

from .document import CONTENT_TYPE, JSONAPIDocumentBuilder
from .errors import (
    ContractError,
    DecodeError,
    EncodeError,
    JSONAPIError,
    JSONAPIErrorBuilder,
)

__all__ = [
    "CONTENT_TYPE",
    "ContractError",
    "DecodeError",
    "EncodeError",
    "JSONAPIDocumentBuilder",
    "JSONAPIError",
    "JSONAPIErrorBuilder",
]
