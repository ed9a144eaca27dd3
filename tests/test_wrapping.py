import pytest
from graphql import GraphQLString

from django_gqlgraph.types import ConflictingNullability, NonNullConfig
from django_gqlgraph.types.definitions import ArgDef, InputFieldDef, OutputFieldDef
from django_gqlgraph.types.wrapping import (
    decorate_type,
    first_defined,
    input_non_null,
    output_non_null,
)


def test_first_defined_skips_none() -> None:
    assert first_defined(None, False, True) is False
    assert first_defined(None, None) is False
    assert first_defined(None, True) is True


@pytest.mark.parametrize(
    "list_, non_null, expected",
    [
        (None, False, "String"),
        (None, True, "String!"),
        (True, False, "[String!]"),
        (True, True, "[String!]!"),
        ([True], True, "[String!]!"),
        ([False], False, "[String]"),
        ([True, False], False, "[[String!]]"),
        ([False, True], False, "[[String]!]"),
        ([True, True], True, "[[String!]!]!"),
    ],
)
def test_decorate_type(list_, non_null, expected) -> None:
    assert str(decorate_type(GraphQLString, list_, non_null)) == expected


def test_empty_list_spec_adds_no_list() -> None:
    assert str(decorate_type(GraphQLString, [], False)) == "String"


def test_output_fields_are_non_null_by_default() -> None:
    field = OutputFieldDef(name="name", type_="String")

    assert output_non_null("User", field, None, NonNullConfig()) is True


def test_output_nullability_precedence() -> None:
    field = OutputFieldDef(name="name", type_="String")
    nullable_everywhere = NonNullConfig(output=False)

    assert output_non_null("User", field, None, nullable_everywhere) is False
    assert output_non_null("User", field, NonNullConfig(output=True), nullable_everywhere) is True
    assert (
        output_non_null(
            "User",
            OutputFieldDef(name="name", type_="String", nullable=False),
            NonNullConfig(output=False),
            nullable_everywhere,
        )
        is True
    )
    assert (
        output_non_null(
            "User",
            OutputFieldDef(name="name", type_="String", required=False),
            None,
            NonNullConfig(),
        )
        is False
    )


def test_input_fields_and_args_are_nullable_by_default() -> None:
    field = InputFieldDef(name="name", type_="String")
    argument = ArgDef(type_="ID")

    assert input_non_null("Filter", "name", field, None, NonNullConfig()) is False
    assert input_non_null("Query", "user(id)", argument, None, NonNullConfig()) is False


def test_input_nullability_precedence() -> None:
    argument = ArgDef(type_="ID")
    required_everywhere = NonNullConfig(input=True)

    assert input_non_null("Query", "user(id)", argument, None, required_everywhere) is True
    assert (
        input_non_null(
            "Query", "user(id)", argument, NonNullConfig(input=False), required_everywhere
        )
        is False
    )
    assert (
        input_non_null(
            "Query",
            "user(id)",
            ArgDef(type_="ID", required=True),
            NonNullConfig(input=False),
            NonNullConfig(),
        )
        is True
    )


def test_output_config_does_not_affect_inputs() -> None:
    field = InputFieldDef(name="name", type_="String")

    assert input_non_null("Filter", "name", field, NonNullConfig(output=True), NonNullConfig()) is False


def test_nullable_and_required_conflict() -> None:
    field = OutputFieldDef(name="name", type_="String", nullable=True, required=False)

    with pytest.raises(ConflictingNullability) as excinfo:
        output_non_null("User", field, None, NonNullConfig())

    assert excinfo.value.type_name == "User"
    assert excinfo.value.field_name == "name"
    assert str(excinfo.value) == "Cannot set both nullable & required on User.name"


def test_conflict_on_argument_uses_qualified_name() -> None:
    argument = ArgDef(type_="ID", nullable=False, required=True)

    with pytest.raises(ConflictingNullability) as excinfo:
        input_non_null("Query", "user(id)", argument, None, NonNullConfig())

    assert excinfo.value.field_name == "user(id)"
