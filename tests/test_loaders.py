import pytest
from graphql import Undefined

from django_gqlgraph.loaders import descriptors_from_mapping, load_type_file
from django_gqlgraph.schema import build_types
from django_gqlgraph.types import (
    EnumTypeDef,
    ExtendTypeDef,
    InputFieldDef,
    ObjectTypeDef,
    TypeFileError,
)

from .conftest import resolve_as

resolve_user = resolve_as("User")


def upper(value):
    return str(value).upper()


DOCUMENT = """
types:
  Node:
    kind: interface
    resolve_type: tests.test_loaders.resolve_user
    fields:
      id: ID
  User:
    implements: [Node]
    nullability: {output: false}
    fields:
      name: {type: String, required: true}
      nickname: String
      friends:
        type: User
        list: [true, false]
        args:
          first: {type: Int, default: 10}
    modify:
      id: {nullable: true, description: Primary key}
  Shout:
    kind: scalar
    serialize: tests.test_loaders.upper
  Role:
    kind: enum
    values: [ADMIN, MEMBER]
  UserFilter:
    kind: input_object
    fields:
      role: Role
extend:
  User:
    fields:
      motto: {type: Shout, description: Says it loud}
  UserFilter:
    input_fields:
      limit: {type: Int, default: 20}
"""


def test_load_type_file(tmp_path) -> None:
    path = tmp_path / "types.yaml"
    path.write_text(DOCUMENT)

    type_map = build_types(load_type_file(path))

    user = type_map["User"]
    assert list(user.fields) == ["id", "name", "nickname", "friends", "motto"]
    assert str(user.fields["id"].type) == "ID"
    assert user.fields["id"].description == "Primary key"
    assert str(type_map["Node"].fields["id"].type) == "ID!"
    assert str(user.fields["name"].type) == "String!"
    assert str(user.fields["nickname"].type) == "String"
    assert str(user.fields["friends"].type) == "[[User!]]"
    assert user.fields["friends"].args["first"].default_value == 10
    assert user.fields["motto"].description == "Says it loud"
    assert type_map["Node"].resolve_type is resolve_user
    assert type_map["Shout"].serialize is upper
    assert list(type_map["Role"].values) == ["ADMIN", "MEMBER"]
    assert list(type_map["UserFilter"].fields) == ["role", "limit"]
    assert type_map["UserFilter"].fields["limit"].default_value == 20


def test_empty_file_declares_nothing(tmp_path) -> None:
    path = tmp_path / "types.yaml"
    path.write_text("")

    assert load_type_file(path) == []


def test_invalid_yaml(tmp_path) -> None:
    path = tmp_path / "types.yaml"
    path.write_text("types: [unclosed\n")

    with pytest.raises(TypeFileError) as excinfo:
        load_type_file(path)

    assert "invalid YAML" in str(excinfo.value)


def test_descriptor_kinds() -> None:
    descriptors = descriptors_from_mapping(
        {
            "types": {"User": {"fields": {"name": "String"}}, "Role": {"kind": "enum", "values": {"A": 1}}},
            "extend": {"User": {"fields": {"age": "Int"}}},
        }
    )

    user, role, extension = descriptors
    assert isinstance(user, ObjectTypeDef)
    assert isinstance(role, EnumTypeDef)
    assert role.values == {"A": 1}
    assert isinstance(extension, ExtendTypeDef)
    assert not extension.is_input


def test_input_field_extension() -> None:
    (extension,) = descriptors_from_mapping(
        {"extend": {"UserFilter": {"input_fields": {"limit": "Int"}}}}
    )

    (limit,) = extension.fields
    assert isinstance(limit, InputFieldDef)
    assert limit.default is Undefined
    assert extension.is_input


@pytest.mark.parametrize(
    "document, message",
    [
        ([], "document must be a mapping"),
        ({"types": ["User"]}, "'types' must be a mapping"),
        ({"types": {"User": "String"}}, "types.User must be a mapping"),
        ({"types": {"User": {"kind": "table"}}}, "unsupported kind 'table'"),
        ({"types": {"User": {"kind": "extend"}}}, "'extend' section"),
        ({"types": {"User": {"fields": {"name": {"type": "String", "size": 3}}}}}, "unsupported keys ['size']"),
        ({"types": {"User": {"fields": {"name": 3}}}}, "must be a type name or a mapping"),
        ({"types": {"User": {"fields": {"tags": {"type": "String", "list": "yes"}}}}}, "list must be"),
        ({"types": {"User": {"implements": "Node"}}}, "implements must be a list"),
        ({"types": {"User": {"nullability": {"outputs": True}}}}, "accepts only"),
        ({"types": {"Role": {"kind": "enum"}}}, "values must be a mapping or a list"),
        ({"types": {"Node": {"kind": "interface", "resolve_type": 3}}}, "dotted import path"),
        ({"extend": {"User": {"fields": {}, "input_fields": {}}}}, "cannot extend both"),
        ({"types": {"User": {"modify": {"id": {"args": {}}}}}}, "unsupported keys ['args']"),
        ({"types": {"User": {"modify": ["id"]}}}, "'modify' must be a mapping"),
    ],
)
def test_malformed_documents(document, message) -> None:
    with pytest.raises(TypeFileError) as excinfo:
        descriptors_from_mapping(document, source="types.yaml")

    assert message in str(excinfo.value)


def test_unimportable_callable() -> None:
    with pytest.raises(TypeFileError) as excinfo:
        descriptors_from_mapping(
            {"types": {"Date": {"kind": "scalar", "serialize": "tests.missing.serialize"}}}
        )

    assert "could not import 'tests.missing.serialize'" in str(excinfo.value)
