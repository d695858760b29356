"""Structured value codec for resource attributes and meta.

Pydantic is the generic JSON layer: models are dumped and validated through
their own schema, so ``Field(alias=...)`` and ``Field(exclude=True)`` play the
role of field tags. Dataclass fields are encoded one by one and validated
against their own annotation on decode; any other object contributes its
public instance attributes.
"""

from __future__ import annotations

import dataclasses
import typing
from typing import Any, Iterable, Mapping

from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic.errors import PydanticSchemaGenerationError
from pydantic_core import to_jsonable_python

from jsonapi_codec.core.errors import DecodeError, EncodeError

RESERVED_MEMBERS = frozenset({"id", "type"})


def _is_dataclass_instance(value: Any) -> bool:
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def encode_attributes(value: Any, *, exclude: Iterable[str] = ()) -> dict[str, Any]:
    """Encode the non-identity, non-relationship fields of ``value``."""
    excluded = RESERVED_MEMBERS | set(exclude)
    try:
        if isinstance(value, BaseModel):
            names = excluded & set(type(value).model_fields)
            encoded = value.model_dump(mode="json", by_alias=True, exclude=names)
        elif _is_dataclass_instance(value):
            encoded = to_jsonable_python(
                {
                    field.name: getattr(value, field.name)
                    for field in dataclasses.fields(value)
                    if field.name not in excluded
                },
                by_alias=True,
            )
        elif hasattr(value, "__dict__"):
            encoded = to_jsonable_python(
                {
                    key: item
                    for key, item in vars(value).items()
                    if not key.startswith("_") and key not in excluded
                }
            )
        else:
            return {}
    except (ValueError, PydanticSchemaGenerationError) as exc:
        raise EncodeError(
            f"Cannot encode attributes of {type(value).__name__}: {exc}"
        ) from exc
    if not isinstance(encoded, dict):
        raise EncodeError(
            f"Attributes of {type(value).__name__} must encode to an object."
        )
    return {key: item for key, item in encoded.items() if key not in excluded}


def encode_value(value: Any) -> Any:
    """Encode an opaque value (meta, explicit attributes) into JSON-ready data."""
    try:
        return to_jsonable_python(value, by_alias=True)
    except ValueError as exc:
        raise EncodeError(f"Cannot encode {type(value).__name__}: {exc}") from exc


def decode_attributes(target: Any, attributes: Mapping[str, Any]) -> None:
    """Assign decoded ``attributes`` onto the matching fields of ``target``."""
    try:
        if isinstance(target, BaseModel):
            _decode_model(target, attributes)
        elif _is_dataclass_instance(target):
            _decode_dataclass(target, attributes)
        else:
            _decode_object(target, attributes)
    except (ValidationError, PydanticSchemaGenerationError) as exc:
        raise DecodeError(
            f"Cannot decode attributes into {type(target).__name__}: {exc}"
        ) from exc


def _field_key(name: str, field: Any) -> str:
    if isinstance(field.validation_alias, str):
        return field.validation_alias
    return field.alias or name


def _decode_model(target: BaseModel, attributes: Mapping[str, Any]) -> None:
    model = type(target)
    payload: dict[str, Any] = {}
    assigned: list[str] = []
    for name, field in model.model_fields.items():
        key = _field_key(name, field)
        if key in attributes and name not in RESERVED_MEMBERS:
            payload[key] = attributes[key]
            assigned.append(name)
        else:
            payload[key] = getattr(target, name)
    if not assigned:
        return
    decoded = model.model_validate(payload)
    for name in assigned:
        setattr(target, name, getattr(decoded, name))


def _field_types(cls: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(cls)
    except (NameError, TypeError):
        return {}


def _decode_dataclass(target: Any, attributes: Mapping[str, Any]) -> None:
    # Each assigned field is validated on its own; fields that are not
    # attributes (relationships, arbitrary objects) are never rebuilt.
    hints = _field_types(type(target))
    for field in dataclasses.fields(target):
        if field.name not in attributes or field.name in RESERVED_MEMBERS:
            continue
        adapter = TypeAdapter(hints.get(field.name, Any))
        setattr(target, field.name, adapter.validate_python(attributes[field.name]))


def _decode_object(target: Any, attributes: Mapping[str, Any]) -> None:
    for key, value in attributes.items():
        if key.startswith("_") or key in RESERVED_MEMBERS:
            continue
        if not hasattr(target, key) or callable(getattr(type(target), key, None)):
            continue
        setattr(target, key, value)
