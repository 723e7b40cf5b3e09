import pytest

from gqlxp.gql import (
    EnumDef,
    GraphQLSchema,
    InputObjectDef,
    NotFoundError,
    ObjectDef,
    SchemaResolver,
    UnionDef,
)
from gqlxp.navigation import GQLType


@pytest.fixture()
def resolver(full_schema: GraphQLSchema) -> SchemaResolver:
    return SchemaResolver(full_schema)


def test_resolve_type_dispatches_by_kind(resolver: SchemaResolver) -> None:
    assert isinstance(resolver.resolve_type("Post"), ObjectDef)
    assert isinstance(resolver.resolve_type("SearchItem"), UnionDef)
    assert isinstance(resolver.resolve_type("PostFilter"), InputObjectDef)
    assert isinstance(resolver.resolve_type("Role"), EnumDef)


def test_builtin_and_unknown_types_both_fail_but_are_distinguishable(resolver: SchemaResolver) -> None:
    with pytest.raises(NotFoundError) as builtin:
        resolver.resolve_type("String")
    with pytest.raises(NotFoundError) as unknown:
        resolver.resolve_type("TrulyUnknownType")

    assert builtin.value.is_builtin is True
    assert unknown.value.is_builtin is False
    assert unknown.value.name == "TrulyUnknownType"
    assert isinstance(unknown.value, LookupError)


def test_resolve_field_and_argument_types(resolver: SchemaResolver, full_schema: GraphQLSchema) -> None:
    search = full_schema.query["search"]

    assert resolver.resolve_field_type(search).name == "SearchItem"
    assert resolver.resolve_argument_type(search.arguments[1]).name == "PostFilter"
    with pytest.raises(NotFoundError):
        resolver.resolve_argument_type(search.arguments[0])
    assert resolver.type_name_for_display(search.arguments[0]) == "String!"


def test_resolve_directive_accepts_at_prefix(resolver: SchemaResolver) -> None:
    assert resolver.resolve_directive("@cache").name == "cache"
    assert resolver.resolve_directive("cache").name == "cache"

    with pytest.raises(NotFoundError) as exc_info:
        resolver.resolve_directive("@unknownDirective")
    assert exc_info.value.kind == "directive"
    assert exc_info.value.is_builtin is False


def test_resolve_usages_returns_copy_or_empty(resolver: SchemaResolver, full_schema: GraphQLSchema) -> None:
    usages = resolver.resolve_usages("Role")
    usages.clear()

    assert len(full_schema.usages["Role"]) == 2
    assert resolver.resolve_usages("NeverReferenced") == []


def test_resolve_query_or_mutation_field(user_schema: GraphQLSchema) -> None:
    resolver = SchemaResolver(user_schema)

    assert resolver.resolve_query_or_mutation_field("Query", "user").name == "user"
    assert resolver.resolve_query_or_mutation_field(GQLType.MUTATION, "createUser").name == "createUser"

    with pytest.raises(NotFoundError) as exc_info:
        resolver.resolve_query_or_mutation_field(GQLType.QUERY, "missing")
    assert exc_info.value.kind == "Query field"


def test_resolve_query_or_mutation_field_rejects_other_categories(user_schema: GraphQLSchema) -> None:
    resolver = SchemaResolver(user_schema)

    with pytest.raises(ValueError, match="got 'Object'"):
        resolver.resolve_query_or_mutation_field(GQLType.OBJECT, "user")
    with pytest.raises(ValueError):
        resolver.resolve_query_or_mutation_field("Subscription", "user")
