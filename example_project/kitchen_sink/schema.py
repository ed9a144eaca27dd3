from django_gqlgraph.types import (
    NonNullConfig,
    arg,
    enum_type,
    extend_type,
    input_object_type,
    interface_type,
    object_type,
    string_arg,
)


def _define_bar(t):
    t.boolean("ok")
    t.resolve_type(lambda value, info, abstract_type: "Foo" if "name" in value else "TestObj")


Bar = interface_type("Bar", _define_bar)


def _define_baz(t):
    t.boolean("ok")
    t.field("a", Bar)
    t.resolve_type(lambda value, info, abstract_type: "TestObj")


Baz = interface_type("Baz", _define_baz)


def _define_foo(t):
    t.implements(Bar, "Node")
    t.string("name")
    t.field("status", "Status", nullable=True)


Foo = object_type("Foo", _define_foo)


def _define_test_obj(t):
    t.implements(Bar)
    t.string("item")


TestObj = object_type("TestObj", _define_test_obj)

Status = enum_type("Status", ["DRAFT", "PUBLISHED"], description="Publication state")


def _define_filter(t):
    t.string("name")
    t.field("status", "Status", list_=True)
    t.int("limit", default=10)


FooFilter = input_object_type("FooFilter", _define_filter)


def _define_query(t):
    t.field("bar", Bar, resolve=lambda root, info: {"ok": True, "name": "foo"})
    t.field(
        "foos",
        Foo,
        list_=True,
        args={"filter": arg(FooFilter), "after": string_arg(nullable=True)},
        resolve=lambda root, info, **kwargs: [],
    )


Query = object_type("Query", _define_query, nullability=NonNullConfig(output=True))


def _define_query_extension(t):
    t.field("foo", Foo, nullable=True, args={"id": arg("ID", required=True)})


QueryExtension = extend_type("Query", _define_query_extension)

types = [Query, QueryExtension, Bar, Baz, Foo, TestObj, Status, FooFilter]
