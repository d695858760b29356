"""Codec exceptions and JSON:API error object helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from jsonapi_codec.schemas.resource import ErrorObject, ErrorSource

if TYPE_CHECKING:
    from jsonapi_codec.schemas.resource import Document


class JSONAPIError(Exception):
    """Base class for every failure raised by the codec."""


class EncodeError(JSONAPIError):
    """A value could not be converted into its JSON:API representation."""


class DecodeError(JSONAPIError):
    """A payload could not be decoded or projected onto its target.

    ``document`` holds whatever was decoded before the failure, so callers can
    still inspect ``errors`` or ``meta`` of a document whose data was rejected.
    """

    def __init__(self, message: str, *, document: Document | None = None) -> None:
        super().__init__(message)
        self.document = document


class ContractError(JSONAPIError, TypeError):
    """A value claims a capability it cannot honour."""


class JSONAPIErrorBuilder:
    """Build JSON:API error objects."""

    def error_object(
        self,
        *,
        id: str | None = None,
        status: str | None = None,
        code: str | None = None,
        title: str | None = None,
        detail: str | None = None,
        pointer: str | None = None,
        parameter: str | None = None,
        meta: dict[str, Any] | None = None,
    ) -> ErrorObject:
        """Return a JSON:API error object."""
        source = None
        if pointer is not None or parameter is not None:
            source = ErrorSource(pointer=pointer, parameter=parameter)
        error = ErrorObject(
            id=id,
            status=status,
            code=code,
            title=title,
            detail=detail,
            source=source,
            meta=meta,
        )
        if not error.model_dump():
            raise ValueError("Error object must include at least one field.")
        return error
