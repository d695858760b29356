"""Tests for the SQLAlchemy capability adapter."""

from typing import List, Optional

import pytest
from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from jsonapi_codec import marshal, unmarshal
from jsonapi_codec.sqlalchemy import SQLAlchemyResource


class Base(DeclarativeBase):
    pass


class Writer(Base):
    __tablename__ = "writers"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(50))
    novels: Mapped[List["Novel"]] = relationship(back_populates="writer")


class Novel(Base):
    __tablename__ = "novels"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(100))
    writer_id: Mapped[Optional[int]] = mapped_column(ForeignKey("writers.id"))
    writer: Mapped[Optional["Writer"]] = relationship(back_populates="novels")


def test_marshal_mapped_instance_with_loaded_relationship():
    novel = Novel(id=7, title="Dune", writer=Writer(id=1, name="Frank"))
    assert marshal(SQLAlchemyResource(novel)) == (
        b'{"data":{"type":"novels","id":"7","attributes":{"title":"Dune"},'
        b'"relationships":{"writer":{"data":{"type":"writers","id":"1"}}}}}'
    )


def test_unloaded_relationships_are_skipped():
    writer = Writer(id=2, name="Bo")
    assert marshal(SQLAlchemyResource(writer)) == (
        b'{"data":{"type":"writers","id":"2","attributes":{"name":"Bo"}}}'
    )


def test_loaded_to_many_relationship():
    writer = Writer(id=3, name="Ann")
    writer.novels = [Novel(id=10, title="A"), Novel(id=11, title="B")]
    resource = SQLAlchemyResource(writer)
    relationships = resource.get_relationships()
    assert [item.get_id() for item in relationships["novels"]] == ["10", "11"]


def test_custom_type_name():
    resource = SQLAlchemyResource(Writer(id=4, name="X"), type_="people")
    assert resource.get_type() == "people"


def test_unmarshal_into_mapped_instance():
    resource = SQLAlchemyResource(Novel())
    unmarshal(
        b'{"data":{"type":"novels","id":"9",'
        b'"attributes":{"title":"Emma","writer_id":5,"unknown":1}}}',
        resource,
    )
    novel = resource.instance
    assert novel.id == 9
    assert novel.title == "Emma"
    assert novel.writer_id is None


def test_unmarshal_collection_of_mapped_instances():
    resources: list[SQLAlchemyResource] = []
    unmarshal(
        b'{"data":[{"type":"writers","id":"1","attributes":{"name":"A"}},'
        b'{"type":"writers","id":"2","attributes":{"name":"B"}}]}',
        resources,
        factory=lambda: SQLAlchemyResource(Writer()),
    )
    assert [(item.instance.id, item.instance.name) for item in resources] == [
        (1, "A"),
        (2, "B"),
    ]


def test_mismatched_type_is_rejected():
    with pytest.raises(ValueError, match="does not match"):
        unmarshal(b'{"data":{"type":"writers","id":"1"}}', SQLAlchemyResource(Novel()))
