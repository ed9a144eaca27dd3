"""Type descriptors and the lazy builder that resolves them."""

from .builder import BUILTIN_SCALARS, BuilderConfig, SchemaBuilder
from .definitions import (
    ArgDef,
    EnumTypeDef,
    ExtendTypeDef,
    InputFieldDef,
    InputObjectTypeDef,
    InterfaceTypeDef,
    NonNullConfig,
    ObjectTypeDef,
    OutputFieldDef,
    ScalarTypeDef,
    TypeKind,
    UnionTypeDef,
    arg,
    boolean_arg,
    enum_type,
    extend_input_type,
    extend_type,
    float_arg,
    id_arg,
    input_object_type,
    int_arg,
    interface_type,
    object_type,
    scalar_type,
    string_arg,
    union_type,
)
from .errors import (
    AlreadyDefined,
    CircularDependency,
    ConflictingNullability,
    EmptyUnion,
    MissingFieldType,
    MissingResolveType,
    MissingType,
    TypeFileError,
    TypeGraphError,
    TypeMismatch,
    UnknownFieldModification,
)

__all__ = [
    "BUILTIN_SCALARS",
    "BuilderConfig",
    "SchemaBuilder",
    "ArgDef",
    "EnumTypeDef",
    "ExtendTypeDef",
    "InputFieldDef",
    "InputObjectTypeDef",
    "InterfaceTypeDef",
    "NonNullConfig",
    "ObjectTypeDef",
    "OutputFieldDef",
    "ScalarTypeDef",
    "TypeKind",
    "UnionTypeDef",
    "arg",
    "boolean_arg",
    "enum_type",
    "extend_input_type",
    "extend_type",
    "float_arg",
    "id_arg",
    "input_object_type",
    "int_arg",
    "interface_type",
    "object_type",
    "scalar_type",
    "string_arg",
    "union_type",
    "AlreadyDefined",
    "CircularDependency",
    "ConflictingNullability",
    "EmptyUnion",
    "MissingFieldType",
    "MissingResolveType",
    "MissingType",
    "TypeFileError",
    "TypeGraphError",
    "TypeMismatch",
    "UnknownFieldModification",
]
