"""Core package for django-gqlgraph.

Type authors declare descriptors with the factories re-exported here; the
builder in :mod:`django_gqlgraph.types.builder` resolves them into
graphql-core types and :mod:`django_gqlgraph.schema` assembles the schema.
"""

from .types import (
    BuilderConfig,
    NonNullConfig,
    SchemaBuilder,
    arg,
    enum_type,
    extend_input_type,
    extend_type,
    input_object_type,
    interface_type,
    object_type,
    scalar_type,
    union_type,
)

__all__ = [
    "BuilderConfig",
    "NonNullConfig",
    "SchemaBuilder",
    "arg",
    "enum_type",
    "extend_input_type",
    "extend_type",
    "input_object_type",
    "interface_type",
    "object_type",
    "scalar_type",
    "union_type",
]
