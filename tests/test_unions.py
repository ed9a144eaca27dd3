import pytest

from django_gqlgraph.schema import build_types
from django_gqlgraph.types import (
    EmptyUnion,
    MissingResolveType,
    MissingType,
    SchemaBuilder,
    TypeMismatch,
    enum_type,
    object_type,
    union_type,
)

from .conftest import resolve_as

user = object_type("User", lambda t: t.string("name"))
post = object_type("Post", lambda t: t.string("title"))


def test_members_keep_declaration_order() -> None:
    search = union_type(
        "SearchResult", lambda t: (t.members("Post", user), t.resolve_type(resolve_as("User")))
    )

    type_map = build_types([search, user, post])

    assert [member.name for member in type_map["SearchResult"].types] == ["Post", "User"]


def test_members_may_be_registered_after_the_union() -> None:
    builder = SchemaBuilder()
    builder.add_type(
        union_type(
            "SearchResult", lambda t: (t.members("User"), t.resolve_type(resolve_as("User")))
        )
    )
    builder.resolve("SearchResult")
    builder.add_type(user)
    builder.finalize()

    type_map = builder.expand()

    assert type_map["SearchResult"].types == [type_map["User"]]


def test_type_resolver_is_attached() -> None:
    resolve_type = resolve_as("User")
    search = union_type("SearchResult", lambda t: (t.members(user), t.resolve_type(resolve_type)))

    type_map = build_types([search])

    assert type_map["SearchResult"].resolve_type is resolve_type


def test_union_without_resolve_type(builder: SchemaBuilder) -> None:
    builder.add_type(union_type("SearchResult", lambda t: t.members(user)))

    with pytest.raises(MissingResolveType) as excinfo:
        builder.finalize()

    assert excinfo.value.name == "SearchResult"


def test_union_without_members_call(builder: SchemaBuilder) -> None:
    builder.add_type(union_type("SearchResult", lambda t: t.resolve_type(resolve_as("User"))))
    builder.finalize()

    with pytest.raises(EmptyUnion) as excinfo:
        builder.expand()

    assert excinfo.value.name == "SearchResult"


def test_union_with_empty_members(builder: SchemaBuilder) -> None:
    builder.add_type(
        union_type("SearchResult", lambda t: (t.members(), t.resolve_type(resolve_as("User"))))
    )
    builder.finalize()

    with pytest.raises(EmptyUnion):
        builder.expand()


def test_non_object_member(builder: SchemaBuilder) -> None:
    builder.add_type(enum_type("Status", ["ACTIVE"]))
    builder.add_type(
        union_type(
            "SearchResult", lambda t: (t.members(user, "Status"), t.resolve_type(resolve_as("User")))
        )
    )
    builder.finalize()

    with pytest.raises(TypeMismatch) as excinfo:
        builder.expand()

    assert excinfo.value.name == "Status"
    assert excinfo.value.expected == "an object type"


def test_unknown_member(builder: SchemaBuilder) -> None:
    builder.add_type(user)
    builder.add_type(
        union_type("SearchResult", lambda t: (t.members("Usr"), t.resolve_type(resolve_as("User"))))
    )
    builder.finalize()

    with pytest.raises(MissingType) as excinfo:
        builder.expand()

    assert excinfo.value.suggestions == ["User"]
