from collections.abc import Iterator

import pytest

import django_gqlgraph.conf as conf
from django_gqlgraph.artifacts import MemoryArtifactWriter
from django_gqlgraph.types import SchemaBuilder


def resolve_as(type_name: str):
    """Build a ``resolve_type`` callback that always answers ``type_name``."""

    def resolve_type(value, info, abstract_type):
        return type_name

    return resolve_type


@pytest.fixture
def builder() -> SchemaBuilder:
    return SchemaBuilder()


@pytest.fixture
def memory_writer() -> MemoryArtifactWriter:
    return MemoryArtifactWriter()


@pytest.fixture
def reset_schema() -> Iterator[None]:
    conf.reset_schema_cache()
    yield
    conf.reset_schema_cache()
