"""Resolvers referenced by dotted path from ``types.yaml``."""


def resolve_node(value, info, abstract_type):
    return value.get("__typename", "Foo")


def resolve_search_result(value, info, abstract_type):
    return "Foo" if "name" in value else "TestObj"


def serialize_date(value):
    return value.isoformat()
