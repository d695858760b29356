"""Parse JSON:API documents and project them onto target values."""

from __future__ import annotations

import logging
from collections.abc import MutableSequence
from typing import Any, Callable

from pydantic import ValidationError

from jsonapi_codec.core.capabilities import (
    AcceptsAttributes,
    AcceptsID,
    AcceptsRelationships,
    AcceptsType,
    RelationshipData,
)
from jsonapi_codec.core.errors import ContractError, DecodeError
from jsonapi_codec.schemas.resource import Document, ResourceObject
from jsonapi_codec.serializers.attributes import decode_attributes

logger = logging.getLogger(__name__)

Factory = Callable[[], Any]


class JSONAPIParser:
    """Decode documents and populate targets from their resource objects."""

    def parse(self, payload: bytes | str) -> Document:
        """Decode raw JSON into a Document.

        ``data`` becomes a single resource for an object and a list for an
        array; ``null`` and a missing member both decode to ``None``.
        """
        try:
            return Document.model_validate_json(payload)
        except ValidationError as exc:
            raise DecodeError(
                f"Invalid JSON:API document: {exc}", document=Document()
            ) from exc

    def project(
        self,
        data: ResourceObject | list[ResourceObject],
        destination: Any,
        *,
        factory: Factory | None = None,
    ) -> None:
        """Project primary data onto a record or, for collections, a list."""
        if isinstance(data, list):
            self.project_many(data, destination, factory=factory)
        elif isinstance(destination, MutableSequence):
            raise ContractError(
                "A single resource cannot be projected onto a collection target."
            )
        else:
            self.project_one(data, destination)

    def project_many(
        self,
        resources: list[ResourceObject],
        destination: Any,
        *,
        factory: Factory | None = None,
    ) -> None:
        """Build one fresh element per resource and append them in document order.

        The destination is only extended once every element is projected, so a
        failure leaves it untouched.
        """
        if not isinstance(destination, MutableSequence):
            raise ContractError(
                f"A resource collection cannot be projected onto "
                f"{type(destination).__name__}; pass a list."
            )
        if factory is None:
            raise ContractError(
                "An element factory is required to unmarshal a resource collection."
            )
        items = []
        for resource in resources:
            item = factory()
            self.project_one(resource, item)
            items.append(item)
        destination.extend(items)
        logger.debug("Projected %d resource(s) onto collection", len(items))

    def project_one(self, resource: ResourceObject, target: Any) -> None:
        """Populate attributes, identity and relationships of one target."""
        if not isinstance(target, AcceptsID):
            raise ContractError(
                f"{type(target).__name__} must define set_id() to be unmarshalled."
            )
        if resource.attributes:
            if isinstance(target, AcceptsAttributes):
                target.set_attributes(dict(resource.attributes))
            else:
                decode_attributes(target, resource.attributes)
        target.set_id(resource.id)
        if isinstance(target, AcceptsType):
            target.set_type(resource.type)
        if resource.relationships and isinstance(target, AcceptsRelationships):
            target.set_relationships(self.relationship_identifiers(resource))

    def relationship_identifiers(
        self, resource: ResourceObject
    ) -> dict[str, RelationshipData]:
        """Map relationship names to one identifier or a list of identifiers.

        Relationships without data (``null`` or missing) are left out; an
        empty to-many stays an empty list.
        """
        identifiers: dict[str, RelationshipData] = {}
        for name, relationship in (resource.relationships or {}).items():
            if relationship.data is None:
                continue
            if isinstance(relationship.data, list):
                identifiers[name] = list(relationship.data)
            else:
                identifiers[name] = relationship.data
        return identifiers
