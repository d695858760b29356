"""JSON:API document construction."""

from __future__ import annotations

from typing import Any, Iterable

from jsonapi_codec.schemas.resource import (
    Document,
    ErrorObject,
    ResourceIdentifier,
    ResourceObject,
)

CONTENT_TYPE = "application/vnd.api+json"


class JSONAPIDocumentBuilder:
    """Build JSON:API v1.1 documents from serialized resources."""

    def __init__(self, *, sort_included: bool = False) -> None:
        self.sort_included = sort_included

    def build_single(
        self,
        resource: ResourceObject | None,
        *,
        included: Iterable[ResourceObject] | None = None,
        meta: Any = None,
    ) -> Document:
        """Return a JSON:API document for a single resource object (or null)."""
        document = Document(data=resource)
        exclude = [resource.identifier] if resource is not None else []
        self._finish(document, included, meta, exclude)
        return document

    def build_collection(
        self,
        resources: Iterable[ResourceObject],
        *,
        included: Iterable[ResourceObject] | None = None,
        meta: Any = None,
    ) -> Document:
        """Return a JSON:API document for a collection of resources."""
        data = list(resources)
        document = Document(data=data)
        self._finish(document, included, meta, [item.identifier for item in data])
        return document

    def build_error(
        self, errors: Iterable[ErrorObject], *, meta: Any = None
    ) -> Document:
        """Return a JSON:API error document; it never carries data."""
        document = Document(errors=list(errors))
        if meta is not None:
            document.meta = meta
        return document

    def merge_included(
        self,
        resources: Iterable[ResourceObject],
        *,
        exclude: Iterable[ResourceIdentifier] = (),
    ) -> list[ResourceObject]:
        """Deduplicate included resources by (type, id), first occurrence wins."""
        seen: set[tuple[str, str]] = {(item.type, item.id) for item in exclude}
        included: list[ResourceObject] = []
        for resource in resources:
            key = (resource.type, resource.id)
            if key in seen:
                continue
            seen.add(key)
            included.append(resource)
        if self.sort_included:
            included.sort(key=lambda item: (item.type, item.id))
        return included

    def _finish(
        self,
        document: Document,
        included: Iterable[ResourceObject] | None,
        meta: Any,
        exclude: list[ResourceIdentifier],
    ) -> None:
        if included:
            merged = self.merge_included(included, exclude=exclude)
            if merged:
                document.included = merged
        if meta is not None:
            document.meta = meta
