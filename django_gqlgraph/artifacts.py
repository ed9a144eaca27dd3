"""Boundary for writing generated schema artifacts."""

from __future__ import annotations

import itertools
from typing import Protocol


class ArtifactWriter(Protocol):
    """Protocol describing the contract for schema artifact writers."""

    def write_schema(self, sdl: str, digest: str) -> str:
        """Persist the schema definition and return a writer-specific token."""


class MemoryArtifactWriter(ArtifactWriter):
    """Recording writer that keeps every published schema in memory."""

    _counter = itertools.count(1)

    def __init__(self) -> None:
        self.schemas: list[tuple[str, str]] = []

    def write_schema(self, sdl: str, digest: str) -> str:
        self.schemas.append((sdl, digest))
        return f"memory-schema-{next(self._counter)}"
