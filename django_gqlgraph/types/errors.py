"""Errors raised while registering and resolving type descriptors."""

from __future__ import annotations

from typing import Sequence


class TypeGraphError(ValueError):
    """Base error raised when a type configuration is invalid."""


class MissingType(TypeGraphError):
    """Raised when a referenced type name was never registered."""

    def __init__(self, name: str, suggestions: Sequence[str] = ()) -> None:
        self.name = name
        self.suggestions = list(suggestions)
        hint = ""
        if self.suggestions:
            hint = f" or mean {', '.join(self.suggestions)}"
        super().__init__(
            f"Missing type {name!r}, did you forget to import a type{hint}?"
        )


class AlreadyDefined(TypeGraphError):
    """Raised when two distinct definitions share a type name.

    Also raised when an extension targets a predefined graphql-core type.
    """

    def __init__(self, name: str, predefined: bool = False) -> None:
        self.name = name
        self.predefined = predefined
        if predefined:
            message = (
                f"{name!r} is a predefined graphql-core type and cannot be "
                "extended, add the fields where that type is constructed"
            )
        else:
            message = (
                f"{name!r} was already defined and imported as a type, "
                "use extend_type() to add fields to an existing type"
            )
        super().__init__(message)


class CircularDependency(TypeGraphError):
    """Raised when a type is requested while it is still being built."""

    def __init__(self, chain: Sequence[str]) -> None:
        self.chain = list(chain)
        super().__init__(
            "Circular dependency detected while building types "
            + " -> ".join(self.chain)
        )


class MissingResolveType(TypeGraphError):
    """Raised when an interface or union has no ``resolve_type``."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"Missing resolve_type for the abstract type {name!r}, "
            "be sure to add one in the definition block for the type"
        )


class EmptyUnion(TypeGraphError):
    """Raised when a union resolves to zero member types."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Union {name!r} must have at least one member type")


class MissingFieldType(TypeGraphError):
    """Raised when a field definition lacks a type reference."""

    def __init__(self, type_name: str, field_name: str) -> None:
        self.type_name = type_name
        self.field_name = field_name
        super().__init__(f"Missing required type for {type_name}.{field_name}")


class ConflictingNullability(TypeGraphError):
    """Raised when ``nullable`` and ``required`` are both set."""

    def __init__(self, type_name: str, field_name: str) -> None:
        self.type_name = type_name
        self.field_name = field_name
        super().__init__(
            f"Cannot set both nullable & required on {type_name}.{field_name}"
        )


class TypeMismatch(TypeGraphError):
    """Raised when a name resolves to a kind unfit for its role."""

    def __init__(self, name: str, expected: str, actual: str) -> None:
        self.name = name
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected {name!r} to be {expected}, saw {actual}")


class UnknownFieldModification(TypeGraphError):
    """Raised when ``modify`` targets a field no interface provides."""

    def __init__(self, type_name: str, field_name: str) -> None:
        self.type_name = type_name
        self.field_name = field_name
        super().__init__(
            f"{type_name} modifies field {field_name!r}, which is not "
            "inherited from any implemented interface"
        )


class TypeFileError(TypeGraphError):
    """Raised when a declarative type file is malformed."""
