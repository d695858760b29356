"""Pydantic schemas for JSON:API documents."""

from .resource import (
    Document,
    ErrorObject,
    ErrorSource,
    RelationshipObject,
    ResourceIdentifier,
    ResourceObject,
)

__all__ = [
    "Document",
    "ErrorObject",
    "ErrorSource",
    "RelationshipObject",
    "ResourceIdentifier",
    "ResourceObject",
]
