"""Configuration helpers for django-gqlgraph.

Settings are read here and turned into explicit values; the builder itself
never looks at Django settings.

Example::

    GQLGRAPH = {
        "types": ["myapp.schema.types"],
        "types_file": BASE_DIR / "types.yaml",
        "nullability": {"output": True, "input": False},
        "artifact_writer": "myapp.artifacts.S3Writer",
    }
"""

from __future__ import annotations

import os
from typing import Any, Dict, List, MutableMapping, Optional

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string
from graphql import GraphQLNamedType, GraphQLSchema

from .artifacts import ArtifactWriter
from .loaders import load_type_file
from .schema import build_types, make_schema
from .types import BuilderConfig, NonNullConfig

_TYPE_MAP_CACHE: Optional[Dict[str, GraphQLNamedType]] = None
_SCHEMA_CACHE: Optional[GraphQLSchema] = None


def get_type_map() -> Dict[str, GraphQLNamedType]:
    """Return the cached, fully built type map for the configured types."""

    global _TYPE_MAP_CACHE

    if _TYPE_MAP_CACHE is not None:
        return _TYPE_MAP_CACHE

    _TYPE_MAP_CACHE = build_types(get_configured_types(), get_builder_config())
    return _TYPE_MAP_CACHE


def get_schema() -> GraphQLSchema:
    """Return the cached :class:`GraphQLSchema` built from Django settings."""

    global _SCHEMA_CACHE

    if _SCHEMA_CACHE is not None:
        return _SCHEMA_CACHE

    _SCHEMA_CACHE = make_schema(get_configured_types(), get_builder_config())
    return _SCHEMA_CACHE


def reset_schema_cache() -> None:
    """Clear the cached type map and schema. Primarily intended for tests."""

    global _TYPE_MAP_CACHE, _SCHEMA_CACHE
    _TYPE_MAP_CACHE = None
    _SCHEMA_CACHE = None


def get_builder_config() -> BuilderConfig:
    config = _get_gqlgraph_settings()
    nullability = config.get("nullability") or {}
    if not isinstance(nullability, MutableMapping):
        raise ImproperlyConfigured("settings.GQLGRAPH['nullability'] must be a mapping.")
    unknown = set(nullability) - {"output", "input"}
    if unknown:
        raise ImproperlyConfigured(
            f"settings.GQLGRAPH['nullability'] has unsupported keys {sorted(unknown)!r}."
        )
    for key, value in nullability.items():
        if not isinstance(value, bool):
            raise ImproperlyConfigured(
                f"settings.GQLGRAPH['nullability'][{key!r}] must be a boolean."
            )
    return BuilderConfig(
        nullability=NonNullConfig(
            output=nullability.get("output"), input=nullability.get("input")
        )
    )


def get_configured_types() -> List[Any]:
    """Collect descriptors from the YAML file first, then dotted paths."""

    config = _get_gqlgraph_settings()
    collected: List[Any] = []

    types_file = config.get("types_file")
    if types_file:
        if not os.path.exists(types_file):
            raise ImproperlyConfigured(
                f"settings.GQLGRAPH['types_file'] {str(types_file)!r} does not exist."
            )
        collected.extend(load_type_file(types_file))

    paths = config.get("types", [])
    if isinstance(paths, str) or not isinstance(paths, (list, tuple)):
        raise ImproperlyConfigured("settings.GQLGRAPH['types'] must be a list of dotted paths.")
    for path in paths:
        try:
            collected.append(import_string(path))
        except ImportError as exc:
            raise ImproperlyConfigured(f"Could not import types {path!r}: {exc}") from exc

    if not collected:
        raise ImproperlyConfigured("No type definitions available from types_file or types.")
    return collected


def get_artifact_writer() -> ArtifactWriter:
    """Instantiate the writer configured in ``GQLGRAPH['artifact_writer']``."""

    path = _get_gqlgraph_settings().get("artifact_writer")
    if not path:
        raise ImproperlyConfigured(
            "settings.GQLGRAPH['artifact_writer'] must be configured to publish schemas."
        )
    try:
        writer_class = import_string(path)
    except ImportError as exc:
        raise ImproperlyConfigured(f"Could not import artifact writer {path!r}: {exc}") from exc
    return writer_class()


def _get_gqlgraph_settings() -> MutableMapping[str, Any]:
    value = getattr(settings, "GQLGRAPH", None)
    if value is None:
        raise ImproperlyConfigured("settings.GQLGRAPH must be defined.")
    if not isinstance(value, MutableMapping):
        raise ImproperlyConfigured("settings.GQLGRAPH must be a mapping.")
    return value
