"""Expose SQLAlchemy mapped instances to the JSON:API codec."""

from __future__ import annotations

from typing import Any

from pydantic import TypeAdapter, ValidationError
from sqlalchemy import Column
from sqlalchemy.inspection import inspect
from sqlalchemy.orm.attributes import NO_VALUE

from jsonapi_codec.core.errors import ContractError, DecodeError


class SQLAlchemyResource:
    """Wrap a mapped instance so it can be marshalled and unmarshalled.

    The type defaults to the table name, the id is the single primary key and
    attributes are the remaining non-foreign-key columns. Relationships are
    reported only when already loaded; the wrapper never triggers a lazy load.
    """

    def __init__(self, instance: Any, *, type_: str | None = None) -> None:
        self.instance = instance
        self.type_ = type_ or getattr(
            instance, "__tablename__", type(instance).__name__.lower()
        )

    def get_id(self) -> str:
        """Return the primary key as a string."""
        value = getattr(self.instance, self._key_for(self._primary_key()), None)
        return "" if value is None else str(value)

    def get_type(self) -> str:
        return self.type_

    def get_attributes(self) -> dict[str, Any]:
        """Return column values, excluding primary and foreign keys."""
        return {
            key: getattr(self.instance, key) for key in self._attribute_columns()
        }

    def get_relationships(self) -> dict[str, Any]:
        """Return loaded relationships wrapped as resources."""
        state = inspect(self.instance)
        relationships: dict[str, Any] = {}
        for relationship in inspect(type(self.instance)).relationships:
            if state.attrs[relationship.key].loaded_value is NO_VALUE:
                continue
            related = getattr(self.instance, relationship.key)
            if relationship.uselist:
                relationships[relationship.key] = [
                    type(self)(item) for item in related
                ]
            else:
                relationships[relationship.key] = (
                    None if related is None else type(self)(related)
                )
        return relationships

    def set_id(self, id: str) -> None:
        """Assign the primary key, converted to the column's Python type."""
        if not id:
            return
        column = self._primary_key()
        setattr(self.instance, self._key_for(column), self._coerce(column, id))

    def set_type(self, type_: str) -> None:
        if type_ != self.type_:
            raise ValueError(
                f"Resource type {type_!r} does not match {self.type_!r}."
            )

    def set_attributes(self, attributes: dict[str, Any]) -> None:
        """Assign decoded attributes onto mapped, non-key columns."""
        columns = self._attribute_columns()
        try:
            for key, value in attributes.items():
                if key in columns:
                    setattr(self.instance, key, self._coerce(columns[key], value))
        except ValidationError as exc:
            raise DecodeError(
                f"Cannot decode attributes into {type(self.instance).__name__}: {exc}"
            ) from exc

    def _primary_key(self) -> Column:
        columns = inspect(type(self.instance)).primary_key
        if len(columns) != 1:
            raise ContractError(
                f"{type(self.instance).__name__} needs exactly one primary key column."
            )
        return columns[0]

    def _key_for(self, column: Column) -> str:
        return inspect(type(self.instance)).get_property_by_column(column).key

    def _attribute_columns(self) -> dict[str, Column]:
        columns: dict[str, Column] = {}
        for prop in inspect(type(self.instance)).column_attrs:
            if any(column.primary_key or column.foreign_keys for column in prop.columns):
                continue
            columns[prop.key] = prop.columns[0]
        return columns

    def _coerce(self, column: Column, value: Any) -> Any:
        if value is None:
            return None
        try:
            python_type = column.type.python_type
        except NotImplementedError:
            return value
        return TypeAdapter(python_type).validate_python(value)
