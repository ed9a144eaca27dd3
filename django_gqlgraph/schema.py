"""Schema assembly, compilation and publishing helpers."""

from __future__ import annotations

import hashlib
import logging
from typing import Any, Dict, Optional

from graphql import (
    GraphQLBoolean,
    GraphQLField,
    GraphQLNamedType,
    GraphQLNonNull,
    GraphQLObjectType,
    GraphQLSchema,
    is_object_type,
    print_schema,
)

from .artifacts import ArtifactWriter
from .types import BuilderConfig, SchemaBuilder, TypeMismatch

logger = logging.getLogger(__name__)

ROOT_TYPE_NAMES = ("Query", "Mutation", "Subscription")


def build_types(
    types: Any, config: Optional[BuilderConfig] = None
) -> Dict[str, GraphQLNamedType]:
    """Build ``types`` with a fresh builder and return the finalized type map.

    Every deferred field and member computation is run once, so a map is
    only returned when the whole graph is valid.
    """

    builder = SchemaBuilder(config)
    builder.add_types(types)
    builder.finalize()
    return builder.expand()


def make_schema(types: Any, config: Optional[BuilderConfig] = None) -> GraphQLSchema:
    """Build ``types`` into a schema rooted at Query/Mutation/Subscription."""

    type_map = build_types(types, config)
    roots = {name: type_map.get(name) for name in ROOT_TYPE_NAMES}

    if roots["Query"] is None:
        logger.warning("You should define a root `Query` type for your schema")
        roots["Query"] = GraphQLObjectType(
            name="Query",
            fields={
                "ok": GraphQLField(
                    GraphQLNonNull(GraphQLBoolean), resolve=lambda *_: True
                )
            },
        )

    for name, root in roots.items():
        if root is not None and not is_object_type(root):
            raise TypeMismatch(name, "an object type", type(root).__name__)

    return GraphQLSchema(
        query=roots["Query"],
        mutation=roots["Mutation"],
        subscription=roots["Subscription"],
        types=list(type_map.values()),
    )


def compile_schema(schema: GraphQLSchema) -> tuple[str, str]:
    """Return the SDL and its SHA256 hex digest."""

    sdl = print_schema(schema)
    digest = hashlib.sha256(sdl.encode("utf-8")).hexdigest()
    return sdl, digest


def publish_schema(
    writer: ArtifactWriter, *, schema: Optional[GraphQLSchema] = None
) -> str:
    """Compile and hand the current schema to ``writer``."""

    from . import conf

    active_schema = schema if schema is not None else conf.get_schema()
    sdl, digest = compile_schema(active_schema)
    writer.write_schema(sdl, digest)
    return digest
