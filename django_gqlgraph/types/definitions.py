"""Declarative type descriptors and the definition blocks that populate them.

Descriptors are plain, immutable records. Object, interface, union and input
object descriptors carry a ``definition`` callback which the builder invokes
once, with the matching definition block, when the type is first built. The
block only collects what the callback declares; nothing is resolved here.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import (
    Any,
    Callable,
    ClassVar,
    Dict,
    Iterable,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Union,
)

from graphql import Undefined, assert_name


class TypeKind(str, enum.Enum):
    """Closed set of descriptor kinds understood by the builder."""

    OBJECT = "object"
    INTERFACE = "interface"
    UNION = "union"
    ENUM = "enum"
    SCALAR = "scalar"
    INPUT_OBJECT = "input_object"
    EXTEND = "extend"


ListSpec = Union[None, bool, Sequence[bool]]
Resolver = Callable[..., Any]
TypeResolver = Callable[..., Any]


@dataclass(frozen=True)
class NonNullConfig:
    """Non-null defaults for output fields and input fields/arguments."""

    output: Optional[bool] = None
    input: Optional[bool] = None


# ---------------------------------------------------------------- fields/args
@dataclass(frozen=True)
class ArgDef:
    type_: Any
    list_: ListSpec = None
    nullable: Optional[bool] = None
    required: Optional[bool] = None
    default: Any = Undefined
    description: Optional[str] = None


@dataclass(frozen=True)
class OutputFieldDef:
    name: str
    type_: Any
    list_: ListSpec = None
    nullable: Optional[bool] = None
    required: Optional[bool] = None
    args: Mapping[str, ArgDef] = field(default_factory=dict)
    resolve: Optional[Resolver] = None
    description: Optional[str] = None
    deprecation: Optional[str] = None


@dataclass(frozen=True)
class InputFieldDef:
    name: str
    type_: Any
    list_: ListSpec = None
    nullable: Optional[bool] = None
    required: Optional[bool] = None
    default: Any = Undefined
    description: Optional[str] = None


@dataclass(frozen=True)
class FieldModificationDef:
    """Changes applied to a field inherited from an interface."""

    field: str
    type_: Any = None
    list_: ListSpec = None
    nullable: Optional[bool] = None
    required: Optional[bool] = None
    resolve: Optional[Resolver] = None
    description: Optional[str] = None

    @property
    def changes_type(self) -> bool:
        return any(
            value is not None
            for value in (self.type_, self.list_, self.nullable, self.required)
        )


# ------------------------------------------------------------------- blocks
class InputDefinitionBlock:
    """Collects the fields declared by an input object definition."""

    def __init__(self, type_name: str) -> None:
        self.type_name = type_name
        self.fields: List[InputFieldDef] = []

    def field(
        self,
        name: str,
        type_: Any = None,
        *,
        list_: ListSpec = None,
        nullable: Optional[bool] = None,
        required: Optional[bool] = None,
        default: Any = Undefined,
        description: Optional[str] = None,
    ) -> None:
        self.fields.append(
            InputFieldDef(
                name=name,
                type_=type_,
                list_=list_,
                nullable=nullable,
                required=required,
                default=default,
                description=description,
            )
        )

    def string(self, name: str, **options: Any) -> None:
        self.field(name, "String", **options)

    def int(self, name: str, **options: Any) -> None:
        self.field(name, "Int", **options)

    def float(self, name: str, **options: Any) -> None:
        self.field(name, "Float", **options)

    def boolean(self, name: str, **options: Any) -> None:
        self.field(name, "Boolean", **options)

    def id(self, name: str, **options: Any) -> None:
        self.field(name, "ID", **options)


class OutputDefinitionBlock:
    """Collects output fields; shared by objects, interfaces and extensions."""

    def __init__(self, type_name: str) -> None:
        self.type_name = type_name
        self.fields: List[OutputFieldDef] = []

    def field(
        self,
        name: str,
        type_: Any = None,
        *,
        list_: ListSpec = None,
        nullable: Optional[bool] = None,
        required: Optional[bool] = None,
        args: Optional[Mapping[str, ArgDef]] = None,
        resolve: Optional[Resolver] = None,
        description: Optional[str] = None,
        deprecation: Optional[str] = None,
    ) -> None:
        self.fields.append(
            OutputFieldDef(
                name=name,
                type_=type_,
                list_=list_,
                nullable=nullable,
                required=required,
                args=dict(args or {}),
                resolve=resolve,
                description=description,
                deprecation=deprecation,
            )
        )

    def string(self, name: str, **options: Any) -> None:
        self.field(name, "String", **options)

    def int(self, name: str, **options: Any) -> None:
        self.field(name, "Int", **options)

    def float(self, name: str, **options: Any) -> None:
        self.field(name, "Float", **options)

    def boolean(self, name: str, **options: Any) -> None:
        self.field(name, "Boolean", **options)

    def id(self, name: str, **options: Any) -> None:
        self.field(name, "ID", **options)


class ObjectDefinitionBlock(OutputDefinitionBlock):
    def __init__(self, type_name: str) -> None:
        super().__init__(type_name)
        self.interfaces: List[Any] = []
        self.modifications: Dict[str, List[FieldModificationDef]] = {}

    def implements(self, *interfaces: Any) -> None:
        """Declare interfaces by name or descriptor."""

        self.interfaces.extend(flatten_refs(interfaces))

    def modify(self, field_name: str, **changes: Any) -> None:
        """Override parts of a field inherited from an interface."""

        modification = FieldModificationDef(field=field_name, **changes)
        self.modifications.setdefault(field_name, []).append(modification)


class InterfaceDefinitionBlock(OutputDefinitionBlock):
    def __init__(self, type_name: str) -> None:
        super().__init__(type_name)
        self.type_resolver: Optional[TypeResolver] = None

    def resolve_type(self, fn: TypeResolver) -> None:
        self.type_resolver = fn


class UnionDefinitionBlock:
    def __init__(self, type_name: str) -> None:
        self.type_name = type_name
        self.member_refs: Optional[List[Any]] = None
        self.type_resolver: Optional[TypeResolver] = None

    def members(self, *members: Any) -> None:
        """All object types in the union, as names or descriptors."""

        self.member_refs = flatten_refs(members)

    def resolve_type(self, fn: TypeResolver) -> None:
        self.type_resolver = fn


# -------------------------------------------------------------- descriptors
@dataclass(frozen=True, eq=False)
class ObjectTypeDef:
    name: str
    definition: Callable[[ObjectDefinitionBlock], None]
    description: Optional[str] = None
    nullability: Optional[NonNullConfig] = None
    default_resolver: Optional[Resolver] = None

    kind: ClassVar[TypeKind] = TypeKind.OBJECT


@dataclass(frozen=True, eq=False)
class InterfaceTypeDef:
    name: str
    definition: Callable[[InterfaceDefinitionBlock], None]
    description: Optional[str] = None
    nullability: Optional[NonNullConfig] = None

    kind: ClassVar[TypeKind] = TypeKind.INTERFACE


@dataclass(frozen=True, eq=False)
class UnionTypeDef:
    name: str
    definition: Callable[[UnionDefinitionBlock], None]
    description: Optional[str] = None

    kind: ClassVar[TypeKind] = TypeKind.UNION


@dataclass(frozen=True, eq=False)
class InputObjectTypeDef:
    name: str
    definition: Callable[[InputDefinitionBlock], None]
    description: Optional[str] = None
    nullability: Optional[NonNullConfig] = None

    kind: ClassVar[TypeKind] = TypeKind.INPUT_OBJECT


@dataclass(frozen=True, eq=False)
class EnumTypeDef:
    name: str
    values: Any
    description: Optional[str] = None

    kind: ClassVar[TypeKind] = TypeKind.ENUM


@dataclass(frozen=True, eq=False)
class ScalarTypeDef:
    name: str
    serialize: Optional[Callable[[Any], Any]] = None
    parse_value: Optional[Callable[[Any], Any]] = None
    parse_literal: Optional[Callable[..., Any]] = None
    description: Optional[str] = None

    kind: ClassVar[TypeKind] = TypeKind.SCALAR


@dataclass(frozen=True, eq=False)
class ExtendTypeDef:
    """Fields to merge into the type called ``name``."""

    name: str
    fields: Tuple[Union[OutputFieldDef, InputFieldDef], ...] = ()

    kind: ClassVar[TypeKind] = TypeKind.EXTEND

    @property
    def is_input(self) -> bool:
        return any(isinstance(f, InputFieldDef) for f in self.fields)


NamedTypeDef = Union[
    ObjectTypeDef,
    InterfaceTypeDef,
    UnionTypeDef,
    InputObjectTypeDef,
    EnumTypeDef,
    ScalarTypeDef,
]
TypeDef = Union[NamedTypeDef, ExtendTypeDef]

TYPE_DEF_CLASSES = (
    ObjectTypeDef,
    InterfaceTypeDef,
    UnionTypeDef,
    InputObjectTypeDef,
    EnumTypeDef,
    ScalarTypeDef,
    ExtendTypeDef,
)


def is_type_def(value: Any) -> bool:
    return isinstance(value, TYPE_DEF_CLASSES)


# ---------------------------------------------------------------- factories
def object_type(
    name: str,
    definition: Callable[[ObjectDefinitionBlock], None],
    *,
    description: Optional[str] = None,
    nullability: Optional[NonNullConfig] = None,
    default_resolver: Optional[Resolver] = None,
) -> ObjectTypeDef:
    return ObjectTypeDef(
        name=assert_name(name),
        definition=definition,
        description=description,
        nullability=nullability,
        default_resolver=default_resolver,
    )


def interface_type(
    name: str,
    definition: Callable[[InterfaceDefinitionBlock], None],
    *,
    description: Optional[str] = None,
    nullability: Optional[NonNullConfig] = None,
) -> InterfaceTypeDef:
    return InterfaceTypeDef(
        name=assert_name(name),
        definition=definition,
        description=description,
        nullability=nullability,
    )


def union_type(
    name: str,
    definition: Callable[[UnionDefinitionBlock], None],
    *,
    description: Optional[str] = None,
) -> UnionTypeDef:
    return UnionTypeDef(
        name=assert_name(name), definition=definition, description=description
    )


def input_object_type(
    name: str,
    definition: Callable[[InputDefinitionBlock], None],
    *,
    description: Optional[str] = None,
    nullability: Optional[NonNullConfig] = None,
) -> InputObjectTypeDef:
    return InputObjectTypeDef(
        name=assert_name(name),
        definition=definition,
        description=description,
        nullability=nullability,
    )


def enum_type(
    name: str, values: Any, *, description: Optional[str] = None
) -> EnumTypeDef:
    """Define an enum from a mapping, a Python ``Enum`` or a list of names."""

    if isinstance(values, Mapping):
        values = dict(values)
    elif not (isinstance(values, type) and issubclass(values, enum.Enum)):
        values = {member: member for member in values}
    return EnumTypeDef(name=assert_name(name), values=values, description=description)


def scalar_type(
    name: str,
    *,
    serialize: Optional[Callable[[Any], Any]] = None,
    parse_value: Optional[Callable[[Any], Any]] = None,
    parse_literal: Optional[Callable[..., Any]] = None,
    description: Optional[str] = None,
) -> ScalarTypeDef:
    return ScalarTypeDef(
        name=assert_name(name),
        serialize=serialize,
        parse_value=parse_value,
        parse_literal=parse_literal,
        description=description,
    )


def extend_type(
    name: str, definition: Callable[[OutputDefinitionBlock], None]
) -> ExtendTypeDef:
    """Add output fields to an object or interface defined elsewhere."""

    block = OutputDefinitionBlock(name)
    definition(block)
    return ExtendTypeDef(name=assert_name(name), fields=tuple(block.fields))


def extend_input_type(
    name: str, definition: Callable[[InputDefinitionBlock], None]
) -> ExtendTypeDef:
    """Add input fields to an input object defined elsewhere."""

    block = InputDefinitionBlock(name)
    definition(block)
    return ExtendTypeDef(name=assert_name(name), fields=tuple(block.fields))


def arg(
    type_: Any,
    *,
    list_: ListSpec = None,
    nullable: Optional[bool] = None,
    required: Optional[bool] = None,
    default: Any = Undefined,
    description: Optional[str] = None,
) -> ArgDef:
    return ArgDef(
        type_=type_,
        list_=list_,
        nullable=nullable,
        required=required,
        default=default,
        description=description,
    )


def string_arg(**options: Any) -> ArgDef:
    return arg("String", **options)


def int_arg(**options: Any) -> ArgDef:
    return arg("Int", **options)


def float_arg(**options: Any) -> ArgDef:
    return arg("Float", **options)


def boolean_arg(**options: Any) -> ArgDef:
    return arg("Boolean", **options)


def id_arg(**options: Any) -> ArgDef:
    return arg("ID", **options)


def flatten_refs(refs: Iterable[Any]) -> List[Any]:
    """Allow ``implements([A, B])`` as well as ``implements(A, B)``."""

    result: List[Any] = []
    for ref in refs:
        if isinstance(ref, (list, tuple)):
            result.extend(flatten_refs(ref))
        else:
            result.append(ref)
    return result
