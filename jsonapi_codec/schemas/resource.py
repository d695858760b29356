"""Pydantic models for JSON:API v1.1 documents."""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    SerializerFunctionWrapHandler,
    field_validator,
    model_serializer,
)


def _is_empty(value: Any) -> bool:
    return value is None or value == {}


def _sniff_one_or_many(value: Any) -> Any:
    if value is None or isinstance(value, (BaseModel, dict, list)):
        return value
    raise ValueError("data must be an object, an array or null")


class ResourceIdentifier(BaseModel):
    """Resource identifier object: type + id."""

    model_config = ConfigDict(frozen=True)

    type: str
    id: str = ""

    def get_id(self) -> str:
        return self.id

    def get_type(self) -> str:
        return self.type

    @model_serializer(mode="wrap")
    def omit_empty_members(
        self, handler: SerializerFunctionWrapHandler
    ) -> Dict[str, Any]:
        payload = handler(self)
        if not payload.get("id"):
            payload.pop("id", None)
        return payload


class RelationshipObject(BaseModel):
    """Relationship object whose data is one identifier, many, or null.

    The shape is decided by the wire value (object vs array), never by a
    per-relationship declaration. ``data`` is always serialized, so an unset
    to-one relationship travels as ``null`` and an empty to-many as ``[]``.
    """

    data: Optional[Union[ResourceIdentifier, List[ResourceIdentifier]]] = None
    meta: Any = None

    @field_validator("data", mode="before")
    @classmethod
    def sniff_data_shape(cls, value: Any) -> Any:
        return _sniff_one_or_many(value)

    @property
    def is_to_many(self) -> bool:
        return isinstance(self.data, list)

    @model_serializer(mode="wrap")
    def omit_empty_members(
        self, handler: SerializerFunctionWrapHandler
    ) -> Dict[str, Any]:
        payload = handler(self)
        if _is_empty(payload.get("meta")):
            payload.pop("meta", None)
        return payload


class ResourceObject(BaseModel):
    """Resource object with attributes, meta and relationships."""

    type: str
    id: str = ""
    attributes: Optional[Dict[str, Any]] = None
    meta: Any = None
    relationships: Optional[Dict[str, RelationshipObject]] = None

    @property
    def identifier(self) -> ResourceIdentifier:
        return ResourceIdentifier(type=self.type, id=self.id)

    @model_serializer(mode="wrap")
    def omit_empty_members(
        self, handler: SerializerFunctionWrapHandler
    ) -> Dict[str, Any]:
        payload = handler(self)
        if not payload.get("id"):
            payload.pop("id", None)
        for key in ("attributes", "meta", "relationships"):
            if _is_empty(payload.get(key)):
                payload.pop(key, None)
        return payload


class ErrorSource(BaseModel):
    """Reference to the part of the request document that caused an error."""

    pointer: Optional[str] = None
    parameter: Optional[str] = None

    @model_serializer(mode="wrap")
    def omit_empty_members(
        self, handler: SerializerFunctionWrapHandler
    ) -> Dict[str, Any]:
        return {key: value for key, value in handler(self).items() if value}


class ErrorObject(BaseModel):
    """JSON:API error object (https://jsonapi.org/format/#error-objects)."""

    id: Optional[str] = None
    status: Optional[str] = None
    title: Optional[str] = None
    code: Optional[str] = None
    detail: Optional[str] = None
    source: Optional[ErrorSource] = None
    meta: Any = None

    @model_serializer(mode="wrap")
    def omit_empty_members(
        self, handler: SerializerFunctionWrapHandler
    ) -> Dict[str, Any]:
        return {key: value for key, value in handler(self).items() if value}


class Document(BaseModel):
    """Top-level JSON:API document.

    ``data`` is written whenever it was explicitly set, including ``null`` and
    ``[]``; a document that never received data (an error document) omits the
    member entirely.
    """

    data: Optional[Union[ResourceObject, List[ResourceObject]]] = None
    errors: Optional[List[ErrorObject]] = None
    included: Optional[List[ResourceObject]] = None
    meta: Any = None

    @field_validator("data", mode="before")
    @classmethod
    def sniff_data_shape(cls, value: Any) -> Any:
        return _sniff_one_or_many(value)

    @property
    def is_collection(self) -> bool:
        return isinstance(self.data, list)

    def resources(self) -> Iterator[ResourceObject]:
        """Iterate over the primary resources, whatever the data shape."""
        if isinstance(self.data, list):
            yield from self.data
        elif self.data is not None:
            yield self.data

    @model_serializer(mode="wrap")
    def omit_empty_members(
        self, handler: SerializerFunctionWrapHandler
    ) -> Dict[str, Any]:
        payload = handler(self)
        if "data" not in self.model_fields_set:
            payload.pop("data", None)
        for key in ("errors", "included"):
            if not payload.get(key):
                payload.pop(key, None)
        if _is_empty(payload.get("meta")):
            payload.pop("meta", None)
        return payload
