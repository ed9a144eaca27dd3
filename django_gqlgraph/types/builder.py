"""Lazy builder turning type descriptors into ``graphql-core`` named types.

Enum and scalar types are built synchronously. Object, interface, union and
input object types run their definition callback when built, but their
fields, interfaces and members are handed to graphql-core as thunks which
only resolve referenced names once a consumer asks for them. That is what
makes mutually recursive types safe, so the in-progress guard below only
has to catch names that are needed again while they are still being built.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import ModuleType
from typing import (
    Any,
    Callable,
    Dict,
    Iterable,
    List,
    Mapping,
    MutableMapping,
    Optional,
    TypeVar,
    Union,
)

from graphql import (
    GraphQLArgument,
    GraphQLBoolean,
    GraphQLEnumType,
    GraphQLField,
    GraphQLFloat,
    GraphQLID,
    GraphQLInputField,
    GraphQLInputObjectType,
    GraphQLInt,
    GraphQLInterfaceType,
    GraphQLNamedType,
    GraphQLObjectType,
    GraphQLScalarType,
    GraphQLString,
    GraphQLUnionType,
    get_named_type,
    is_enum_type,
    is_input_object_type,
    is_input_type,
    is_interface_type,
    is_named_type,
    is_non_null_type,
    is_object_type,
    is_output_type,
    is_union_type,
)

from .definitions import (
    ArgDef,
    EnumTypeDef,
    ExtendTypeDef,
    FieldModificationDef,
    InputDefinitionBlock,
    InputFieldDef,
    InputObjectTypeDef,
    InterfaceDefinitionBlock,
    InterfaceTypeDef,
    NamedTypeDef,
    NonNullConfig,
    ObjectDefinitionBlock,
    ObjectTypeDef,
    OutputFieldDef,
    ScalarTypeDef,
    TypeKind,
    UnionDefinitionBlock,
    UnionTypeDef,
    is_type_def,
)
from .errors import (
    AlreadyDefined,
    CircularDependency,
    EmptyUnion,
    MissingFieldType,
    MissingResolveType,
    MissingType,
    TypeMismatch,
    UnknownFieldModification,
)
from .utils import suggestion_list
from .wrapping import decorate_type, input_non_null, output_non_null, rewrap_type

logger = logging.getLogger(__name__)

T = TypeVar("T")
Thunk = Callable[[], T]
FieldMap = Dict[str, GraphQLField]
InputFieldMap = Dict[str, GraphQLInputField]

BUILTIN_SCALARS: Mapping[str, GraphQLScalarType] = {
    "String": GraphQLString,
    "Int": GraphQLInt,
    "Float": GraphQLFloat,
    "Boolean": GraphQLBoolean,
    "ID": GraphQLID,
}


@dataclass(frozen=True)
class BuilderConfig:
    """Explicit configuration for one :class:`SchemaBuilder`."""

    nullability: NonNullConfig = field(default_factory=NonNullConfig)


class SchemaBuilder:
    """Registry of pending descriptors and the named types built from them.

    One instance owns its maps for the duration of a single build; concurrent
    builds must use separate instances.
    """

    BUILDERS: Mapping[TypeKind, str] = {
        TypeKind.OBJECT: "_build_object_type",
        TypeKind.INTERFACE: "_build_interface_type",
        TypeKind.UNION: "_build_union_type",
        TypeKind.ENUM: "_build_enum_type",
        TypeKind.SCALAR: "_build_scalar_type",
        TypeKind.INPUT_OBJECT: "_build_input_object_type",
    }

    def __init__(self, config: Optional[BuilderConfig] = None) -> None:
        self._config = config or BuilderConfig()
        self._pending: Dict[str, NamedTypeDef] = {}
        self._final: Dict[str, GraphQLNamedType] = {}
        self._predefined: Dict[str, GraphQLNamedType] = {}
        self._extensions: Dict[str, List[ExtendTypeDef]] = {}
        # Ordered set of names currently being built.
        self._in_progress: Dict[str, None] = {}
        self._deferred: Dict[str, Dict[str, Thunk[Any]]] = {}

    # --------------------------------------------------------------------- API
    @property
    def config(self) -> BuilderConfig:
        return self._config

    def add_type(self, type_def: Union[NamedTypeDef, ExtendTypeDef, GraphQLNamedType]) -> None:
        """Register a descriptor, an extension or an already built type."""

        if isinstance(type_def, ExtendTypeDef):
            self._extensions.setdefault(type_def.name, []).append(type_def)
            logger.debug("Registered extension of %r", type_def.name)
            return

        if not (is_type_def(type_def) or is_named_type(type_def)):
            raise TypeError(f"Expected a type definition, got {type_def!r}")

        name = type_def.name
        if self._pending.get(name) is type_def or self._final.get(name) is type_def:
            # Allow importing the same exact type more than once.
            return
        if name in self._pending or name in self._final:
            raise AlreadyDefined(name)
        if name in BUILTIN_SCALARS:
            if type_def is BUILTIN_SCALARS[name]:
                return
            raise AlreadyDefined(name)

        if is_named_type(type_def):
            self._predefined[name] = type_def
            self._final[name] = type_def
            logger.debug("Registered predefined type %r", name)
        else:
            self._pending[name] = type_def
            logger.debug("Registered %s type %r", type_def.kind.value, name)

    def add_types(self, types: Any) -> None:
        """Register descriptors found in nested lists, mappings or modules."""

        if types is None:
            return
        if is_type_def(types) or is_named_type(types):
            self.add_type(types)
        elif isinstance(types, ModuleType):
            for attr, value in vars(types).items():
                if attr.startswith("_"):
                    continue
                if is_type_def(value) or is_named_type(value):
                    self.add_type(value)
        elif isinstance(types, Mapping):
            for value in types.values():
                self.add_types(value)
        elif isinstance(types, Iterable) and not isinstance(types, (str, bytes)):
            for value in types:
                self.add_types(value)
        else:
            raise TypeError(f"Cannot add {types!r} as a type")

    def finalize(self) -> Dict[str, GraphQLNamedType]:
        """Build every pending type and return the complete name -> type map."""

        for name in list(self._pending):
            # Types may already exist, built while resolving another type.
            if name not in self._final:
                self.resolve(name)
            self._in_progress.clear()
        # Targets first reached from a thunk are only known after expand().
        self._check_extensions(require_targets=False)
        logger.info(
            "Finalized %d types (%d predefined)", len(self._final), len(self._predefined)
        )
        return dict(self._final)

    def expand(self) -> Dict[str, GraphQLNamedType]:
        """Invoke every deferred computation once, as a consumer would.

        Returns the complete map, including types first reached by a thunk.

        graphql-core wraps errors raised inside thunks in ``TypeError``;
        expanding first surfaces them as the builder's own errors.
        """

        expanded: set[str] = set()
        while True:
            names = [name for name in self._deferred if name not in expanded]
            if not names:
                self._check_extensions()
                return dict(self._final)
            for name in names:
                for thunk in self._deferred[name].values():
                    thunk()
                self._in_progress.clear()
                expanded.add(name)

    def resolve(self, ref: Any) -> GraphQLNamedType:
        """Return the named type for a name, descriptor or named type."""

        if is_type_def(ref) or is_named_type(ref):
            if isinstance(ref, ExtendTypeDef):
                raise TypeError(f"Cannot resolve the extension of {ref.name!r}")
            self.add_type(ref)
            ref = ref.name

        builtin = BUILTIN_SCALARS.get(ref)
        if builtin is not None:
            return builtin
        cached = self._final.get(ref)
        if cached is not None:
            return cached
        if ref in self._in_progress:
            raise CircularDependency(list(self._in_progress))

        type_def = self._pending.get(ref)
        if type_def is None:
            raise MissingType(ref, self._suggestions(ref))

        self._in_progress[ref] = None
        try:
            named_type = getattr(self, self.BUILDERS[type_def.kind])(type_def)
        finally:
            self._in_progress.pop(ref, None)
        self._final[ref] = named_type
        return named_type

    def get_object_type(self, ref: Any) -> GraphQLObjectType:
        return self._expect(ref, is_object_type, "an object type")

    def get_interface(self, ref: Any) -> GraphQLInterfaceType:
        return self._expect(ref, is_interface_type, "an interface type")

    def get_union(self, ref: Any) -> GraphQLUnionType:
        return self._expect(ref, is_union_type, "a union type")

    def get_enum(self, ref: Any) -> GraphQLEnumType:
        return self._expect(ref, is_enum_type, "an enum type")

    def get_input_object_type(self, ref: Any) -> GraphQLInputObjectType:
        return self._expect(ref, is_input_object_type, "an input object type")

    def get_input_type(self, ref: Any) -> GraphQLNamedType:
        return self._expect(ref, is_input_type, "a possible input type")

    def get_output_type(self, ref: Any) -> GraphQLNamedType:
        return self._expect(ref, is_output_type, "a valid output type")

    # ------------------------------------------------------------ type builders
    def _build_object_type(self, config: ObjectTypeDef) -> GraphQLObjectType:
        logger.debug("Building object type %r", config.name)
        block = ObjectDefinitionBlock(config.name)
        config.definition(block)
        fields = list(block.fields)
        interfaces = list(block.interfaces)
        modifications = {name: list(mods) for name, mods in block.modifications.items()}

        def build_interfaces() -> List[GraphQLInterfaceType]:
            return [self.get_interface(ref) for ref in interfaces]

        def build_fields() -> FieldMap:
            field_map: FieldMap = {}
            for interface in build_interfaces():
                for name, interface_field in self._field_map(interface).items():
                    field_map[name] = self._inherit_field(interface_field, config)
            for name, changes in modifications.items():
                if name not in field_map:
                    raise UnknownFieldModification(config.name, name)
                for modification in changes:
                    field_map[name] = self._modify_field(
                        field_map[name], modification, config
                    )
            for field_def in fields:
                field_map[field_def.name] = self._build_output_field(field_def, config)
            self._apply_extensions(config, field_map)
            return field_map

        self._defer(config.name, fields=build_fields, interfaces=build_interfaces)
        return GraphQLObjectType(
            name=config.name,
            fields=build_fields,
            interfaces=build_interfaces,
            description=config.description,
        )

    def _build_interface_type(self, config: InterfaceTypeDef) -> GraphQLInterfaceType:
        logger.debug("Building interface type %r", config.name)
        block = InterfaceDefinitionBlock(config.name)
        config.definition(block)
        if block.type_resolver is None:
            raise MissingResolveType(config.name)
        fields = list(block.fields)

        def build_fields() -> FieldMap:
            field_map: FieldMap = {
                field_def.name: self._build_output_field(field_def, config)
                for field_def in fields
            }
            self._apply_extensions(config, field_map)
            return field_map

        self._defer(config.name, fields=build_fields)
        return GraphQLInterfaceType(
            name=config.name,
            fields=build_fields,
            resolve_type=block.type_resolver,
            description=config.description,
        )

    def _build_union_type(self, config: UnionTypeDef) -> GraphQLUnionType:
        logger.debug("Building union type %r", config.name)
        block = UnionDefinitionBlock(config.name)
        config.definition(block)
        if block.type_resolver is None:
            raise MissingResolveType(config.name)
        members = list(block.member_refs or ())

        def build_members() -> List[GraphQLObjectType]:
            member_types = [self.get_object_type(ref) for ref in members]
            if not member_types:
                raise EmptyUnion(config.name)
            return member_types

        self._defer(config.name, types=build_members)
        return GraphQLUnionType(
            name=config.name,
            types=build_members,
            resolve_type=block.type_resolver,
            description=config.description,
        )

    def _build_enum_type(self, config: EnumTypeDef) -> GraphQLEnumType:
        return GraphQLEnumType(
            name=config.name, values=config.values, description=config.description
        )

    def _build_scalar_type(self, config: ScalarTypeDef) -> GraphQLScalarType:
        return GraphQLScalarType(
            name=config.name,
            serialize=config.serialize,
            parse_value=config.parse_value,
            parse_literal=config.parse_literal,
            description=config.description,
        )

    def _build_input_object_type(
        self, config: InputObjectTypeDef
    ) -> GraphQLInputObjectType:
        logger.debug("Building input object type %r", config.name)
        block = InputDefinitionBlock(config.name)
        config.definition(block)
        fields = list(block.fields)

        def build_fields() -> InputFieldMap:
            field_map: InputFieldMap = {
                field_def.name: self._build_input_field(field_def, config)
                for field_def in fields
            }
            self._apply_extensions(config, field_map)
            return field_map

        self._defer(config.name, fields=build_fields)
        return GraphQLInputObjectType(
            name=config.name, fields=build_fields, description=config.description
        )

    # ------------------------------------------------------------------ fields
    def _build_output_field(
        self,
        field_def: OutputFieldDef,
        config: Union[ObjectTypeDef, InterfaceTypeDef],
    ) -> GraphQLField:
        if field_def.type_ is None:
            raise MissingFieldType(config.name, field_def.name)
        return GraphQLField(
            decorate_type(
                self.get_output_type(field_def.type_),
                field_def.list_,
                output_non_null(
                    config.name,
                    field_def,
                    config.nullability,
                    self._config.nullability,
                ),
            ),
            args=self._build_args(field_def.name, field_def.args, config),
            resolve=self._get_resolver(field_def.resolve, config),
            description=field_def.description,
            deprecation_reason=field_def.deprecation,
        )

    def _build_input_field(
        self, field_def: InputFieldDef, config: InputObjectTypeDef
    ) -> GraphQLInputField:
        if field_def.type_ is None:
            raise MissingFieldType(config.name, field_def.name)
        return GraphQLInputField(
            decorate_type(
                self.get_input_type(field_def.type_),
                field_def.list_,
                input_non_null(
                    config.name,
                    field_def.name,
                    field_def,
                    config.nullability,
                    self._config.nullability,
                ),
            ),
            default_value=field_def.default,
            description=field_def.description,
        )

    def _build_args(
        self,
        field_name: str,
        args: Mapping[str, ArgDef],
        config: Union[ObjectTypeDef, InterfaceTypeDef],
    ) -> Dict[str, GraphQLArgument]:
        all_args: Dict[str, GraphQLArgument] = {}
        for arg_name, arg_def in args.items():
            qualified = f"{field_name}({arg_name})"
            if arg_def.type_ is None:
                raise MissingFieldType(config.name, qualified)
            all_args[arg_name] = GraphQLArgument(
                decorate_type(
                    self.get_input_type(arg_def.type_),
                    arg_def.list_,
                    input_non_null(
                        config.name,
                        qualified,
                        arg_def,
                        config.nullability,
                        self._config.nullability,
                    ),
                ),
                default_value=arg_def.default,
                description=arg_def.description,
            )
        return all_args

    def _inherit_field(self, interface_field: GraphQLField, config: ObjectTypeDef) -> GraphQLField:
        return GraphQLField(
            interface_field.type,
            args={name: arg for name, arg in interface_field.args.items()},
            resolve=self._get_resolver(interface_field.resolve, config),
            subscribe=interface_field.subscribe,
            description=interface_field.description,
            deprecation_reason=interface_field.deprecation_reason,
            extensions=dict(interface_field.extensions),
        )

    def _modify_field(
        self,
        inherited: GraphQLField,
        modification: FieldModificationDef,
        config: ObjectTypeDef,
    ) -> GraphQLField:
        type_ = inherited.type
        if modification.changes_type:
            if modification.type_ is not None:
                base = self.get_output_type(modification.type_)
            else:
                base = get_named_type(inherited.type)
            if modification.nullable is None and modification.required is None:
                non_null = is_non_null_type(inherited.type)
            else:
                non_null = output_non_null(
                    config.name,
                    modification,
                    config.nullability,
                    self._config.nullability,
                )
            if modification.list_ is not None:
                type_ = decorate_type(base, modification.list_, non_null)
            else:
                # Keep the inherited list levels around the new base.
                type_ = rewrap_type(inherited.type, base, non_null)
        return GraphQLField(
            type_,
            args=dict(inherited.args),
            resolve=modification.resolve or inherited.resolve,
            subscribe=inherited.subscribe,
            description=(
                modification.description
                if modification.description is not None
                else inherited.description
            ),
            deprecation_reason=inherited.deprecation_reason,
            extensions=dict(inherited.extensions),
        )

    def _apply_extensions(
        self,
        config: Union[ObjectTypeDef, InterfaceTypeDef, InputObjectTypeDef],
        field_map: MutableMapping[str, Any],
    ) -> None:
        is_input = isinstance(config, InputObjectTypeDef)
        for extension in self._extensions.get(config.name, ()):
            for field_def in extension.fields:
                if isinstance(field_def, InputFieldDef) != is_input:
                    raise TypeMismatch(
                        config.name,
                        "an input object type" if not is_input else "an object or interface type",
                        config.kind.value,
                    )
                if is_input:
                    field_map[field_def.name] = self._build_input_field(field_def, config)
                else:
                    field_map[field_def.name] = self._build_output_field(field_def, config)

    @staticmethod
    def _get_resolver(
        resolve: Optional[Callable[..., Any]],
        config: Union[ObjectTypeDef, InterfaceTypeDef],
    ) -> Optional[Callable[..., Any]]:
        if resolve is not None:
            return resolve
        if isinstance(config, ObjectTypeDef):
            return config.default_resolver
        return None

    # --------------------------------------------------------------- internals
    def _defer(self, name: str, **thunks: Thunk[Any]) -> None:
        self._deferred[name] = thunks

    def _field_map(self, interface: GraphQLInterfaceType) -> FieldMap:
        thunk = self._deferred.get(interface.name, {}).get("fields")
        if thunk is None:
            # Predefined interface: graphql-core owns its fields.
            return dict(interface.fields)
        return thunk()

    def _expect(self, ref: Any, predicate: Callable[[Any], bool], expected: str) -> Any:
        named_type = self.resolve(ref)
        if not predicate(named_type):
            raise TypeMismatch(named_type.name, expected, type(named_type).__name__)
        return named_type

    def _suggestions(self, name: str) -> List[str]:
        candidates = [*self._in_progress, *self._final, *self._pending]
        return suggestion_list(name, candidates)

    def _check_extensions(self, require_targets: bool = True) -> None:
        for name, extensions in self._extensions.items():
            if name in self._predefined:
                raise AlreadyDefined(name, predefined=True)
            target = BUILTIN_SCALARS.get(name) or self._final.get(name)
            if target is None:
                if not require_targets:
                    continue
                raise MissingType(name, self._suggestions(name))
            is_input = any(extension.is_input for extension in extensions)
            if is_input and not is_input_object_type(target):
                raise TypeMismatch(name, "an input object type", type(target).__name__)
            if not is_input and not (is_object_type(target) or is_interface_type(target)):
                raise TypeMismatch(
                    name, "an object or interface type", type(target).__name__
                )


def _check_dispatch() -> None:
    unhandled = set(TypeKind) - {TypeKind.EXTEND} - set(SchemaBuilder.BUILDERS)
    if unhandled:
        raise RuntimeError(
            "SchemaBuilder has no builder for kinds: "
            + ", ".join(sorted(kind.value for kind in unhandled))
        )


_check_dispatch()
