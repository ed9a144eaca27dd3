"""Load type descriptors from declarative YAML documents.

A document has two optional sections::

    types:
      Node:
        kind: interface
        resolve_type: myapp.resolvers.resolve_node
        fields:
          id: ID
      User:
        kind: object
        implements: [Node]
        fields:
          name: {type: String, nullable: true}
          friends: {type: User, list: [true]}
        modify:
          id: {description: Primary key}
    extend:
      Query:
        fields:
          me: User

Callables (resolvers, ``resolve_type``, scalar hooks) are dotted import
paths. Field values may be a bare type name instead of a mapping. Object
types may list ``modify`` entries for fields inherited from interfaces,
using the output field keys except ``args`` and ``deprecation``.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

import yaml
from django.utils.module_loading import import_string
from graphql import Undefined

from .types.definitions import (
    ArgDef,
    ExtendTypeDef,
    InputDefinitionBlock,
    InputFieldDef,
    NonNullConfig,
    OutputFieldDef,
    TypeDef,
    TypeKind,
    enum_type,
    input_object_type,
    interface_type,
    object_type,
    scalar_type,
    union_type,
)
from .types.errors import TypeFileError

_OUTPUT_FIELD_KEYS = frozenset(
    {"type", "list", "nullable", "required", "args", "resolve", "description", "deprecation"}
)
_INPUT_FIELD_KEYS = frozenset(
    {"type", "list", "nullable", "required", "default", "description"}
)
_MODIFY_KEYS = frozenset(
    {"type", "list", "nullable", "required", "resolve", "description"}
)


def load_type_file(path: str) -> List[TypeDef]:
    """Read ``path`` and return the descriptors it declares."""

    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise TypeFileError(f"{path}: invalid YAML: {exc}") from exc
    return descriptors_from_mapping(data or {}, source=path)


def descriptors_from_mapping(
    data: Mapping[str, Any], *, source: str = "<mapping>"
) -> List[TypeDef]:
    if not isinstance(data, Mapping):
        raise TypeFileError(f"{source}: document must be a mapping.")

    types = _section(data, "types", source)
    extensions = _section(data, "extend", source)

    result: List[TypeDef] = []
    for name, cfg in types.items():
        if not isinstance(cfg, Mapping):
            raise TypeFileError(f"{source}: types.{name} must be a mapping.")
        result.append(_build_type(str(name), cfg, source))
    for name, cfg in extensions.items():
        if not isinstance(cfg, Mapping):
            raise TypeFileError(f"{source}: extend.{name} must be a mapping.")
        result.append(_build_extension(str(name), cfg, source))
    return result


# ---------------------------------------------------------------- builders
def _build_type(name: str, cfg: Mapping[str, Any], source: str) -> TypeDef:
    try:
        kind = TypeKind(cfg.get("kind", "object"))
    except ValueError as exc:
        raise TypeFileError(
            f"{source}: types.{name} uses unsupported kind {cfg.get('kind')!r}."
        ) from exc
    where = f"{source}: types.{name}"
    description = cfg.get("description")

    if kind is TypeKind.OBJECT:
        fields = _output_fields(cfg, where)
        interfaces = _string_list(cfg, "implements", where)
        modifications = _modifications(cfg, where)

        def define_object(t) -> None:
            t.fields.extend(fields)
            t.implements(*interfaces)
            for field_name, changes in modifications:
                t.modify(field_name, **changes)

        return object_type(
            name,
            define_object,
            description=description,
            nullability=_nullability(cfg, where),
            default_resolver=_callable(cfg, "default_resolver", where),
        )

    if kind is TypeKind.INTERFACE:
        fields = _output_fields(cfg, where)
        resolve_type = _callable(cfg, "resolve_type", where)

        def define_interface(t) -> None:
            t.fields.extend(fields)
            if resolve_type is not None:
                t.resolve_type(resolve_type)

        return interface_type(
            name,
            define_interface,
            description=description,
            nullability=_nullability(cfg, where),
        )

    if kind is TypeKind.UNION:
        members = _string_list(cfg, "members", where)
        resolve_type = _callable(cfg, "resolve_type", where)

        def define_union(t) -> None:
            t.members(*members)
            if resolve_type is not None:
                t.resolve_type(resolve_type)

        return union_type(name, define_union, description=description)

    if kind is TypeKind.INPUT_OBJECT:
        input_fields = _input_fields(cfg, where)

        def define_input(t: InputDefinitionBlock) -> None:
            t.fields.extend(input_fields)

        return input_object_type(
            name,
            define_input,
            description=description,
            nullability=_nullability(cfg, where),
        )

    if kind is TypeKind.ENUM:
        values = cfg.get("values")
        if not isinstance(values, (Mapping, list)):
            raise TypeFileError(f"{where}.values must be a mapping or a list.")
        return enum_type(name, values, description=description)

    if kind is TypeKind.SCALAR:
        return scalar_type(
            name,
            serialize=_callable(cfg, "serialize", where),
            parse_value=_callable(cfg, "parse_value", where),
            parse_literal=_callable(cfg, "parse_literal", where),
            description=description,
        )

    raise TypeFileError(f"{where}: declare extensions under the 'extend' section.")


def _build_extension(name: str, cfg: Mapping[str, Any], source: str) -> ExtendTypeDef:
    where = f"{source}: extend.{name}"
    if "fields" in cfg and "input_fields" in cfg:
        raise TypeFileError(f"{where} cannot extend both fields and input_fields.")
    if "input_fields" in cfg:
        fields = _input_fields(cfg, where, key="input_fields")
    else:
        fields = _output_fields(cfg, where)
    return ExtendTypeDef(name=name, fields=tuple(fields))


# ------------------------------------------------------------------ fields
def _output_fields(cfg: Mapping[str, Any], where: str) -> List[OutputFieldDef]:
    fields: List[OutputFieldDef] = []
    for field_name, field_cfg in _section(cfg, "fields", where).items():
        options = _field_options(field_cfg, _OUTPUT_FIELD_KEYS, f"{where}.{field_name}")
        fields.append(
            OutputFieldDef(
                name=str(field_name),
                type_=options.get("type"),
                list_=_list_spec(options, f"{where}.{field_name}"),
                nullable=options.get("nullable"),
                required=options.get("required"),
                args=_args(options, f"{where}.{field_name}"),
                resolve=_callable(options, "resolve", f"{where}.{field_name}"),
                description=options.get("description"),
                deprecation=options.get("deprecation"),
            )
        )
    return fields


def _modifications(cfg: Mapping[str, Any], where: str) -> List[Tuple[str, Dict[str, Any]]]:
    modifications: List[Tuple[str, Dict[str, Any]]] = []
    for field_name, field_cfg in _section(cfg, "modify", where).items():
        field_where = f"{where}.modify.{field_name}"
        options = _field_options(field_cfg, _MODIFY_KEYS, field_where)
        modifications.append(
            (
                str(field_name),
                {
                    "type_": options.get("type"),
                    "list_": _list_spec(options, field_where),
                    "nullable": options.get("nullable"),
                    "required": options.get("required"),
                    "resolve": _callable(options, "resolve", field_where),
                    "description": options.get("description"),
                },
            )
        )
    return modifications


def _input_fields(
    cfg: Mapping[str, Any], where: str, key: str = "fields"
) -> List[InputFieldDef]:
    fields: List[InputFieldDef] = []
    for field_name, field_cfg in _section(cfg, key, where).items():
        options = _field_options(field_cfg, _INPUT_FIELD_KEYS, f"{where}.{field_name}")
        fields.append(
            InputFieldDef(
                name=str(field_name),
                type_=options.get("type"),
                list_=_list_spec(options, f"{where}.{field_name}"),
                nullable=options.get("nullable"),
                required=options.get("required"),
                default=options.get("default", Undefined),
                description=options.get("description"),
            )
        )
    return fields


def _args(options: Mapping[str, Any], where: str) -> Dict[str, ArgDef]:
    args: Dict[str, ArgDef] = {}
    for arg_name, arg_cfg in _section(options, "args", where).items():
        arg_options = _field_options(arg_cfg, _INPUT_FIELD_KEYS, f"{where}({arg_name})")
        args[str(arg_name)] = ArgDef(
            type_=arg_options.get("type"),
            list_=_list_spec(arg_options, f"{where}({arg_name})"),
            nullable=arg_options.get("nullable"),
            required=arg_options.get("required"),
            default=arg_options.get("default", Undefined),
            description=arg_options.get("description"),
        )
    return args


def _field_options(value: Any, allowed: frozenset, where: str) -> Mapping[str, Any]:
    if isinstance(value, str):
        return {"type": value}
    if not isinstance(value, Mapping):
        raise TypeFileError(f"{where} must be a type name or a mapping.")
    unknown = set(value) - allowed
    if unknown:
        raise TypeFileError(f"{where} has unsupported keys {sorted(unknown)!r}.")
    return value


def _list_spec(options: Mapping[str, Any], where: str) -> Any:
    value = options.get("list")
    if value is None or isinstance(value, bool):
        return value or None
    if isinstance(value, list) and all(isinstance(item, bool) for item in value):
        return tuple(value)
    raise TypeFileError(f"{where}.list must be a boolean or a list of booleans.")


# ----------------------------------------------------------------- helpers
def _section(cfg: Mapping[str, Any], key: str, where: str) -> Mapping[str, Any]:
    section = cfg.get(key) or {}
    if not isinstance(section, Mapping):
        raise TypeFileError(f"{where}: {key!r} must be a mapping.")
    return section


def _string_list(cfg: Mapping[str, Any], key: str, where: str) -> List[str]:
    value = cfg.get(key) or []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise TypeFileError(f"{where}.{key} must be a list of type names.")
    return value


def _nullability(cfg: Mapping[str, Any], where: str) -> Optional[NonNullConfig]:
    value = cfg.get("nullability")
    if value is None:
        return None
    if not isinstance(value, Mapping) or set(value) - {"output", "input"}:
        raise TypeFileError(f"{where}.nullability accepts only 'output' and 'input'.")
    return NonNullConfig(output=value.get("output"), input=value.get("input"))


def _callable(
    cfg: Mapping[str, Any], key: str, where: str
) -> Optional[Callable[..., Any]]:
    path = cfg.get(key)
    if path is None:
        return None
    if not isinstance(path, str):
        raise TypeFileError(f"{where}.{key} must be a dotted import path.")
    try:
        return import_string(path)
    except ImportError as exc:
        raise TypeFileError(f"{where}.{key}: could not import {path!r}: {exc}") from exc
