"""List/non-null wrapping and the layered nullability policy."""

from __future__ import annotations

from typing import Optional, Union

from graphql import GraphQLList, GraphQLNonNull, GraphQLType

from .definitions import (
    ArgDef,
    FieldModificationDef,
    InputFieldDef,
    ListSpec,
    NonNullConfig,
    OutputFieldDef,
)
from .errors import ConflictingNullability


def first_defined(*values: Optional[bool]) -> bool:
    for value in values:
        if value is not None:
            return value
    return False


def decorate_type(type_: GraphQLType, list_: ListSpec, non_null: bool) -> GraphQLType:
    """Apply the list spec, then the outer non-null wrapper."""

    if list_:
        type_ = decorate_list(type_, list_)
    return GraphQLNonNull(type_) if non_null else type_


def decorate_list(type_: GraphQLType, list_: ListSpec) -> GraphQLType:
    """Wrap ``type_`` in one list level per entry of ``list_``.

    ``True`` is shorthand for ``[True]``: a single list of non-null items.
    For a sequence, entry ``i`` describes the items of the ``i``-th list
    level counted from the innermost one, ``True`` making them non-null.
    """

    if list_ is True:
        return GraphQLList(GraphQLNonNull(type_))
    for items_non_null in list_ or ():
        if items_non_null:
            type_ = GraphQLNonNull(type_)
        type_ = GraphQLList(type_)
    return type_


def rewrap_type(wrapped: GraphQLType, base: GraphQLType, non_null: bool) -> GraphQLType:
    """Put ``base`` inside the list levels of ``wrapped``, then set the outer non-null."""

    if isinstance(wrapped, GraphQLNonNull):
        wrapped = wrapped.of_type
    inner = _replace_named_type(wrapped, base)
    return GraphQLNonNull(inner) if non_null else inner


def _replace_named_type(wrapped: GraphQLType, base: GraphQLType) -> GraphQLType:
    if isinstance(wrapped, GraphQLNonNull):
        return GraphQLNonNull(_replace_named_type(wrapped.of_type, base))
    if isinstance(wrapped, GraphQLList):
        return GraphQLList(_replace_named_type(wrapped.of_type, base))
    return base


def output_non_null(
    type_name: str,
    field: Union[OutputFieldDef, FieldModificationDef],
    type_config: Optional[NonNullConfig],
    global_config: NonNullConfig,
) -> bool:
    explicit = _explicit_non_null(type_name, _field_name(field), field)
    if explicit is not None:
        return explicit
    # Non-null by default
    return first_defined(
        type_config.output if type_config else None, global_config.output, True
    )


def input_non_null(
    type_name: str,
    field_name: str,
    field: Union[InputFieldDef, ArgDef],
    type_config: Optional[NonNullConfig],
    global_config: NonNullConfig,
) -> bool:
    explicit = _explicit_non_null(type_name, field_name, field)
    if explicit is not None:
        return explicit
    # Nullable by default
    return first_defined(
        type_config.input if type_config else None, global_config.input, False
    )


def _explicit_non_null(type_name: str, field_name: str, field) -> Optional[bool]:
    nullable, required = field.nullable, field.required
    if nullable is not None and required is not None:
        raise ConflictingNullability(type_name, field_name)
    if nullable is not None:
        return not nullable
    if required is not None:
        return required
    return None


def _field_name(field: Union[OutputFieldDef, FieldModificationDef]) -> str:
    if isinstance(field, FieldModificationDef):
        return field.field
    return field.name
