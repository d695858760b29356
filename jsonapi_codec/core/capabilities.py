"""Capability protocols recognised by the marshal and unmarshal pipelines.

A value opts into a codec feature by exposing the matching methods; no base
class is involved. Every check is independent, so one value may satisfy
several protocols, and checks are repeated at each nesting level (primary
data, included items, relationship values).
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Callable, Iterable, Mapping, Protocol, runtime_checkable

from jsonapi_codec.schemas.resource import ErrorObject, ResourceIdentifier

RelationshipData = ResourceIdentifier | list[ResourceIdentifier]
Projector = Callable[..., None]


@runtime_checkable
class Identifiable(Protocol):
    """Exposes the resource identity used to marshal it."""

    def get_id(self) -> str: ...

    def get_type(self) -> str: ...


@runtime_checkable
class AcceptsID(Protocol):
    """Receives the resource id while unmarshalling."""

    def set_id(self, id: str) -> None: ...


@runtime_checkable
class AcceptsType(Protocol):
    """Receives the resource type while unmarshalling."""

    def set_type(self, type_: str) -> None: ...


@runtime_checkable
class HasAttributes(Protocol):
    """Supplies its attributes instead of the generic field encoder."""

    def get_attributes(self) -> Mapping[str, Any]: ...


@runtime_checkable
class AcceptsAttributes(Protocol):
    """Consumes decoded attributes instead of the generic field decoder."""

    def set_attributes(self, attributes: dict[str, Any]) -> None: ...


@runtime_checkable
class HasRelationships(Protocol):
    """Maps relationship names to a related record (to-one) or sequence (to-many)."""

    def get_relationships(self) -> Mapping[str, Any]: ...


@runtime_checkable
class AcceptsRelationships(Protocol):
    """Resolves decoded relationship identifiers onto its own fields."""

    def set_relationships(self, relationships: dict[str, RelationshipData]) -> None: ...


@runtime_checkable
class HasIncluded(Protocol):
    """Side-loads related values into the document's ``included`` member."""

    def get_included(self) -> Iterable[Any]: ...


@runtime_checkable
class HasMeta(Protocol):
    def get_meta(self) -> Any: ...


@runtime_checkable
class WrapsData(Protocol):
    """Carries the primary data behind an accessor."""

    def get_data(self) -> Any: ...


@runtime_checkable
class AcceptsData(Protocol):
    """Chooses where decoded primary data lands.

    ``set_data`` receives a projector and calls it with the destination,
    either a single record or a list, plus an optional element ``factory``
    used to create list items.
    """

    def set_data(self, projector: Projector) -> None: ...


@runtime_checkable
class HasErrors(Protocol):
    def get_errors(self) -> Iterable[ErrorObject | Mapping[str, Any]]: ...


@runtime_checkable
class AcceptsErrors(Protocol):
    def set_errors(self, errors: list[ErrorObject]) -> None: ...


def is_sequence(value: Any) -> bool:
    """Return True if the value has the to-many / collection shape."""
    return isinstance(value, Sequence) and not isinstance(
        value, (str, bytes, bytearray)
    )


def is_error_list(value: Any) -> bool:
    """Return True for a non-empty sequence made only of error objects."""
    return (
        is_sequence(value)
        and len(value) > 0
        and all(isinstance(item, ErrorObject) for item in value)
    )
