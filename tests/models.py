"""Record types exercising the codec capabilities in tests."""

from __future__ import annotations

import dataclasses
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from jsonapi_codec import ErrorObject, ResourceIdentifier


class Author(BaseModel):
    id: str = ""
    name: str = ""

    def get_id(self) -> str:
        return self.id

    def get_type(self) -> str:
        return "authors"

    def set_id(self, id: str) -> None:
        self.id = id


class Reader(BaseModel):
    id: str = ""
    name: str = ""

    def get_id(self) -> str:
        return self.id

    def get_type(self) -> str:
        return "people"


class Book(BaseModel):
    """Book with a to-one author relationship."""

    id: str = ""
    type: str = "books"
    title: str = ""
    author: Author | None = None

    def get_id(self) -> str:
        return self.id

    def get_type(self) -> str:
        return "books"

    def get_relationships(self) -> dict[str, Any]:
        if self.author is None:
            return {}
        return {"author": self.author}

    def set_id(self, id: str) -> None:
        self.id = id

    def set_type(self, type_: str) -> None:
        self.type = type_

    def set_relationships(self, relationships: dict[str, Any]) -> None:
        if "author" in relationships:
            self.author = Author(id=relationships["author"].id)


class BookWithReaders(BaseModel):
    """Book with a to-many readers relationship."""

    id: str = ""
    title: str = ""
    year: str = ""
    readers: list[Reader] = Field(default_factory=list)

    def get_id(self) -> str:
        return self.id

    def get_type(self) -> str:
        return "books"

    def get_relationships(self) -> dict[str, Any]:
        return {"readers": self.readers}

    def set_id(self, id: str) -> None:
        self.id = id

    def set_relationships(self, relationships: dict[str, Any]) -> None:
        self.readers = [
            Reader(id=identifier.id) for identifier in relationships.get("readers", [])
        ]


class Tag:
    """Plain object whose only state is private."""

    def __init__(self, id: str = "") -> None:
        self._id = id

    def get_id(self) -> str:
        return self._id

    def get_type(self) -> str:
        return "tags"


class Note:
    """Plain object decoded through setattr."""

    def __init__(self) -> None:
        self.id = ""
        self.text = ""
        self.pinned = False

    def set_id(self, id: str) -> None:
        self.id = id


@dataclasses.dataclass
class Comment:
    id: str = ""
    body: str = ""
    likes: int = 0

    def get_id(self) -> str:
        return self.id

    def get_type(self) -> str:
        return "comments"

    def set_id(self, id: str) -> None:
        self.id = id


@dataclasses.dataclass
class TaggedComment:
    """Dataclass with a plain object relationship field."""

    id: str = ""
    body: str = ""
    tag: Optional[Tag] = None

    def get_id(self) -> str:
        return self.id

    def get_type(self) -> str:
        return "comments"

    def get_relationships(self) -> dict[str, Any]:
        return {"tag": self.tag}

    def set_id(self, id: str) -> None:
        self.id = id


class Article(BaseModel):
    """Resource carrying its own meta."""

    id: str = ""
    title: str = ""
    views: int = 0

    def get_id(self) -> str:
        return self.id

    def get_type(self) -> str:
        return "articles"

    def get_meta(self) -> dict[str, Any]:
        return {"views": self.views} if self.views else {}


class PickyBook(Book):
    """Book that rejects ids it does not like."""

    def set_id(self, id: str) -> None:
        if id == "0":
            raise ValueError("id 0 is reserved")
        self.id = id


class CatalogAuthor(BaseModel):
    id: str = Field(default="", exclude=True)
    first_name: str
    last_name: str

    def get_id(self) -> str:
        return self.id

    def get_type(self) -> str:
        return "authors"


class CatalogBook(BaseModel):
    """Book that wraps itself and side-loads its author."""

    id: str = Field(default="", exclude=True)
    author_id: str = Field(default="", exclude=True)
    title: str
    publication_date: datetime

    def get_id(self) -> str:
        return self.id

    def get_type(self) -> str:
        return "books"

    def get_data(self) -> CatalogBook:
        return self

    def get_relationships(self) -> dict[str, Any]:
        return {"author": ResourceIdentifier(type="authors", id=self.author_id)}

    def get_included(self) -> list[CatalogAuthor]:
        return [author for author in AUTHORS if author.id == self.author_id]


class FeaturedBook(Book):
    """Book that wraps itself and carries meta."""

    def get_data(self) -> FeaturedBook:
        return self

    def get_meta(self) -> dict[str, Any]:
        return {"count": 1}


class CatalogBooks(list):
    """Collection type with document meta."""

    def get_meta(self) -> dict[str, Any]:
        return {"count": len(self)}


class BookPage:
    """View wrapper carrying meta and included next to plain data."""

    def __init__(self, data: Any, *, meta: Any = None, included: Any = ()) -> None:
        self.data = data
        self.meta = meta
        self.included = list(included)

    def get_data(self) -> Any:
        return self.data

    def get_meta(self) -> Any:
        return self.meta

    def get_included(self) -> list[Any]:
        return self.included


class ValidationErrors:
    """Marshal-side error container."""

    def __init__(self, errors: list[Any]) -> None:
        self.errors = errors

    def get_errors(self) -> list[Any]:
        return self.errors


class BookEnvelope:
    """Unmarshal-side wrapper storing its payload under its own field name."""

    def __init__(self) -> None:
        self.payload = Book()
        self.errors: list[ErrorObject] = []

    def set_data(self, to: Any) -> None:
        to(self.payload)

    def set_errors(self, errors: list[ErrorObject]) -> None:
        self.errors = errors


class BookShelf(list):
    """Collection target that supplies its own element factory."""

    def set_data(self, to: Any) -> None:
        to(self, factory=Book)


AUTHORS = [
    CatalogAuthor(id="1", first_name="Alan A. A.", last_name="Donovan"),
    CatalogAuthor(id="2", first_name="Lex", last_name="Sheehan"),
    CatalogAuthor(id="3", first_name="William", last_name="Kennedy"),
]
