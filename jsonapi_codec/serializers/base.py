"""Serialize capability-bearing values into JSON:API resource objects."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from jsonapi_codec.core.capabilities import (
    HasAttributes,
    HasMeta,
    HasRelationships,
    Identifiable,
    is_sequence,
)
from jsonapi_codec.core.errors import ContractError, EncodeError
from jsonapi_codec.schemas.resource import (
    RelationshipObject,
    ResourceIdentifier,
    ResourceObject,
)
from jsonapi_codec.serializers.attributes import encode_attributes, encode_value

logger = logging.getLogger(__name__)


class JSONAPISerializer:
    """Encode records into resource objects.

    The same encoding applies to a single primary resource, every element of
    a collection and every included item.
    """

    def __init__(
        self, *, sort_to_many: bool = False, null_empty_to_one: bool = True
    ) -> None:
        self.sort_to_many = sort_to_many
        self.null_empty_to_one = null_empty_to_one

    def to_resource(self, value: Any) -> ResourceObject:
        """Serialize one record into a JSON:API resource object."""
        identifier = self.to_identifier(value)
        raw_relationships = (
            value.get_relationships() if isinstance(value, HasRelationships) else None
        )
        resource = ResourceObject(type=identifier.type, id=identifier.id)
        attributes = self.get_attributes(value, exclude=raw_relationships or ())
        if attributes:
            resource.attributes = attributes
        meta = self.get_meta(value)
        if meta is not None:
            resource.meta = meta
        if raw_relationships:
            resource.relationships = self.get_relationships(raw_relationships)
        return resource

    def to_many(self, values: Iterable[Any]) -> list[ResourceObject]:
        """Serialize a collection, preserving its order."""
        return [self.to_resource(value) for value in values]

    def to_identifier(self, value: Any) -> ResourceIdentifier:
        """Return the resource identifier of an Identifiable value."""
        if isinstance(value, ResourceIdentifier):
            return value
        if not isinstance(value, Identifiable):
            raise ContractError(
                f"{type(value).__name__} must define get_id() and get_type() "
                "to be serialized as a resource."
            )
        return ResourceIdentifier(type=value.get_type(), id=value.get_id())

    def get_attributes(
        self, value: Any, *, exclude: Iterable[str] = ()
    ) -> dict[str, Any]:
        """Return JSON:API attributes for the value."""
        if isinstance(value, HasAttributes):
            encoded = encode_value(dict(value.get_attributes()))
            if not isinstance(encoded, dict):
                raise EncodeError(
                    f"get_attributes() of {type(value).__name__} must return a mapping."
                )
            return encoded
        return encode_attributes(value, exclude=exclude)

    def get_meta(self, value: Any) -> Any:
        """Return the encoded meta of a HasMeta value, or None when empty."""
        if not isinstance(value, HasMeta):
            return None
        meta = encode_value(value.get_meta())
        if meta is None or meta == {}:
            return None
        return meta

    def get_relationships(
        self, relationships: Mapping[str, Any]
    ) -> dict[str, RelationshipObject]:
        """Return relationship objects keyed by relationship name."""
        return {
            name: self.relationship_object(payload)
            for name, payload in relationships.items()
        }

    def relationship_object(self, payload: Any) -> RelationshipObject:
        """Wrap a related record (to-one) or sequence (to-many).

        The shape follows the runtime value: a sequence of any length becomes
        an array, anything else a single identifier.
        """
        if isinstance(payload, RelationshipObject):
            return payload
        if payload is None:
            return RelationshipObject(data=None)
        if is_sequence(payload):
            identifiers = [self.to_identifier(item) for item in payload]
            if self.sort_to_many:
                identifiers.sort(key=lambda identifier: identifier.id)
            return RelationshipObject(data=identifiers)
        identifier = self.to_identifier(payload)
        if not identifier.id and self.null_empty_to_one:
            logger.debug(
                "Emitting null to-one relationship for %s without id", identifier.type
            )
            return RelationshipObject(data=None)
        return RelationshipObject(data=identifier)
