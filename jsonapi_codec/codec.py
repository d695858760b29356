"""Marshal and unmarshal entry points for JSON:API documents."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from pydantic import BaseModel, ConfigDict, ValidationError

from jsonapi_codec.core.capabilities import (
    AcceptsData,
    AcceptsErrors,
    HasErrors,
    HasIncluded,
    WrapsData,
    is_error_list,
    is_sequence,
)
from jsonapi_codec.core.document import JSONAPIDocumentBuilder
from jsonapi_codec.core.errors import DecodeError, EncodeError
from jsonapi_codec.parsers.base import Factory, JSONAPIParser
from jsonapi_codec.schemas.resource import Document, ErrorObject, ResourceObject
from jsonapi_codec.serializers.base import JSONAPISerializer

logger = logging.getLogger(__name__)


class CodecOptions(BaseModel):
    """Output choices where JSON:API leaves the encoder free."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    sort_included: bool = False
    sort_to_many: bool = False
    null_empty_to_one: bool = True


class JSONAPICodec:
    """Translate between capability-bearing values and JSON:API documents."""

    serializer_class: type[JSONAPISerializer] = JSONAPISerializer
    parser_class: type[JSONAPIParser] = JSONAPIParser
    document_builder_class: type[JSONAPIDocumentBuilder] = JSONAPIDocumentBuilder

    def __init__(self, options: CodecOptions | None = None, **overrides: Any) -> None:
        if options is None:
            options = CodecOptions(**overrides)
        elif overrides:
            options = CodecOptions(**{**options.model_dump(), **overrides})
        self.options = options

    def get_serializer(self) -> JSONAPISerializer:
        """Instantiate the serializer."""
        return self.serializer_class(
            sort_to_many=self.options.sort_to_many,
            null_empty_to_one=self.options.null_empty_to_one,
        )

    def get_parser(self) -> JSONAPIParser:
        """Instantiate the parser."""
        return self.parser_class()

    def get_document_builder(self) -> JSONAPIDocumentBuilder:
        """Instantiate the document builder."""
        return self.document_builder_class(sort_included=self.options.sort_included)

    def marshal(self, value: Any) -> bytes:
        """Serialize a value into JSON:API document bytes."""
        return self.build_document(value).model_dump_json().encode("utf-8")

    def build_document(self, value: Any) -> Document:
        """Assemble the Document for a value.

        Error lists (or values exposing errors) short-circuit into an error
        document. Otherwise the primary data is the value itself or, for a
        WrapsData wrapper, whatever ``get_data()`` returns; meta and included
        are still looked up on the outermost value first.
        """
        serializer = self.get_serializer()
        builder = self.get_document_builder()

        if is_error_list(value):
            return builder.build_error(value)
        if isinstance(value, HasErrors):
            errors = self._coerce_errors(value.get_errors())
            if errors:
                return builder.build_error(errors, meta=serializer.get_meta(value))

        payload = value.get_data() if isinstance(value, WrapsData) else value
        outer_meta = serializer.get_meta(value)

        if is_sequence(payload):
            elements = list(payload)
            resources = serializer.to_many(elements)
            included = self._collect_included(serializer, value, elements)
            document = builder.build_collection(
                resources, included=included, meta=outer_meta
            )
        else:
            elements = [] if payload is None else [payload]
            resource = None if payload is None else serializer.to_resource(payload)
            included = self._collect_included(serializer, value, elements)
            document = builder.build_single(
                resource, included=included, meta=outer_meta
            )
        logger.debug(
            "Built document with %d primary and %d included resource(s)",
            len(elements),
            len(document.included or []),
        )
        return document

    def parse(self, payload: bytes | str) -> Document:
        """Decode JSON:API document bytes without projecting them."""
        return self.get_parser().parse(payload)

    def unmarshal(
        self, payload: bytes | str, target: Any, *, factory: Factory | None = None
    ) -> Document:
        """Decode a document and populate ``target`` in place.

        Returns the decoded Document so callers can inspect ``errors``,
        ``meta`` and ``included``. ``factory`` builds fresh elements when the
        document holds a collection and ``target`` is a list.
        """
        parser = self.get_parser()
        document = parser.parse(payload)

        if document.errors and isinstance(target, AcceptsErrors):
            target.set_errors(list(document.errors))
            return document
        if document.data is None:
            return document

        data = document.data
        try:
            if isinstance(target, AcceptsData):

                def projector(
                    destination: Any, factory: Factory | None = factory
                ) -> None:
                    parser.project(data, destination, factory=factory)

                target.set_data(projector)
            else:
                parser.project(data, target, factory=factory)
        except DecodeError as exc:
            exc.document = document
            raise
        return document

    def _collect_included(
        self, serializer: JSONAPISerializer, value: Any, elements: list[Any]
    ) -> list[ResourceObject]:
        sources = [value] + [element for element in elements if element is not value]
        included: list[ResourceObject] = []
        for source in sources:
            if isinstance(source, HasIncluded):
                included.extend(serializer.to_many(source.get_included() or ()))
        return included

    def _coerce_errors(
        self, errors: Iterable[ErrorObject | Mapping[str, Any]] | None
    ) -> list[ErrorObject]:
        try:
            return [
                error
                if isinstance(error, ErrorObject)
                else ErrorObject.model_validate(error)
                for error in errors or ()
            ]
        except ValidationError as exc:
            raise EncodeError(f"Invalid error object: {exc}") from exc


_default_codec = JSONAPICodec()


def marshal(value: Any) -> bytes:
    """Serialize a value into a JSON:API document using the default options."""
    return _default_codec.marshal(value)


def unmarshal(
    payload: bytes | str, target: Any, *, factory: Factory | None = None
) -> Document:
    """Populate ``target`` from a JSON:API document using the default options."""
    return _default_codec.unmarshal(payload, target, factory=factory)
