from pathlib import Path

import pytest
from sqlalchemy import text

from gqlxp.gql import GraphQLSchema, parse_schema
from gqlxp.search import indexer as indexer_module
from gqlxp.search import (
    IndexUnavailableError,
    SchemaSearchEngine,
    SearchError,
    SearchQueryError,
    extract_documents,
    prepare_match_query,
)
from gqlxp.search.searcher import bm25_weights

RANKING_SCHEMA = '''
type Query {
  accounts: [Account]
  invoices: [Invoice]
}

type Account {
  "The user who owns this account"
  owner: String
  balance: Float
}

type User {
  id: ID!
}

type Invoice {
  total: Float
  paid: Boolean
}

type Product {
  sku: String
}
'''


@pytest.fixture()
def engine(index_dir: Path) -> SchemaSearchEngine:
    return SchemaSearchEngine(index_dir)


def _paths(results) -> list:
    return [r.path for r in results]


def test_extract_documents_covers_every_entity(full_schema: GraphQLSchema) -> None:
    docs = extract_documents("blog", full_schema)

    assert len(docs) == 25
    assert all(doc.schema_id == "blog" for doc in docs)
    by_path = {doc.path: doc for doc in docs}
    assert by_path["Query.search"].kind == "Field"
    assert by_path["Post"].kind == "Object"
    assert by_path["Post.title"].kind == "Field"
    assert by_path["PostFilter"].kind == "InputObject"
    assert by_path["PostFilter.since"].kind == "Field"
    assert by_path["Entity.createdAt"].kind == "Field"
    assert by_path["SearchItem"].kind == "Union"
    assert by_path["DateTime"].kind == "Scalar"
    assert by_path["@cache"].kind == "Directive"
    assert by_path["@cache"].name == "cache"
    assert by_path["@cache"].description == "Controls response caching"


def test_extract_documents_user_schema(user_schema: GraphQLSchema) -> None:
    paths = [doc.path for doc in extract_documents("users", user_schema)]

    assert paths == [
        "Query.user",
        "Query.users",
        "Mutation.createUser",
        "User",
        "User.id",
        "User.email",
        "User.friends",
        "UserInput",
        "UserInput.email",
    ]


def test_prepare_match_query_quotes_tokens_and_keeps_prefix() -> None:
    assert prepare_match_query("user email") == '"user" OR "email"'
    assert prepare_match_query("auth*") == '"auth"*'
    assert prepare_match_query("O'Brien & co") == '"O" OR "Brien" OR "co"'


def test_prepare_match_query_rejects_symbol_only_query() -> None:
    with pytest.raises(SearchQueryError):
        prepare_match_query("!!! &&")
    with pytest.raises(ValueError):
        prepare_match_query("")


def test_bm25_weights_follow_column_order() -> None:
    assert bm25_weights() == "0.0, 1.5, 2.0, 1.5, 1.0"


def test_concrete_scenario_surfaces_type_and_root_field(engine: SchemaSearchEngine) -> None:
    schema = parse_schema(
        "type Query { user(id: ID!): User } "
        "type User { id: ID! name: String! friends: [User!]! }"
    )
    engine.index("scenario", schema)

    results = engine.search("scenario", "user")

    paths = _paths(results)
    assert "User" in paths
    assert "Query.user" in paths
    user_type = next(r for r in results if r.path == "User")
    assert user_type.kind == "Object"
    assert user_type.name == "User"


def test_name_match_ranks_above_description_match(engine: SchemaSearchEngine) -> None:
    engine.index("ranking", parse_schema(RANKING_SCHEMA))

    results = engine.search("ranking", "user")

    paths = _paths(results)
    assert "Account.owner" in paths
    assert paths.index("User") < paths.index("Account.owner")
    scores = [r.score for r in results]
    assert scores == sorted(scores, reverse=True)


def test_search_matches_kind_and_prefix(engine: SchemaSearchEngine, full_schema: GraphQLSchema) -> None:
    engine.index("blog", full_schema)

    directives = engine.search("blog", "directive")
    prefixed = engine.search("blog", "creat*")

    assert _paths(directives)[0] == "@cache"
    assert set(_paths(prefixed)) >= {"Post.createdAt", "Entity.createdAt"}


def test_search_respects_limit(engine: SchemaSearchEngine, full_schema: GraphQLSchema) -> None:
    engine.index("blog", full_schema)

    assert len(engine.search("blog", "id", limit=2)) == 2
    with pytest.raises(ValueError):
        engine.search("blog", "id", limit=0)


def test_reindex_is_idempotent(engine: SchemaSearchEngine, full_schema: GraphQLSchema) -> None:
    first_count = engine.index("blog", full_schema)
    first = _paths(engine.search("blog", "post"))

    second_count = engine.index("blog", full_schema)
    second = _paths(engine.search("blog", "post"))

    assert first_count == second_count == 25
    assert engine.document_count("blog") == 25
    assert sorted(first) == sorted(second)


def test_index_replaces_previous_contents(engine: SchemaSearchEngine, full_schema: GraphQLSchema) -> None:
    engine.index("swap", full_schema)
    engine.index("swap", parse_schema("type Widget { id: ID }"))

    assert engine.search("swap", "post") == []
    widget_paths = _paths(engine.search("swap", "widget"))
    assert widget_paths[0] == "Widget"
    assert set(widget_paths) == {"Widget", "Widget.id"}
    assert engine.document_count("swap") == 2


def test_search_without_index_raises(engine: SchemaSearchEngine) -> None:
    assert engine.exists("missing") is False
    assert engine.document_count("missing") is None

    with pytest.raises(IndexUnavailableError) as exc_info:
        engine.search("missing", "user")
    assert exc_info.value.schema_id == "missing"


def test_remove_deletes_index_and_tolerates_missing(engine: SchemaSearchEngine, user_schema: GraphQLSchema) -> None:
    engine.index("users", user_schema)
    assert engine.exists("users") is True

    engine.remove("users")
    engine.remove("users")

    assert engine.exists("users") is False


def test_indexes_are_namespaced_by_schema_id(engine: SchemaSearchEngine, user_schema: GraphQLSchema, full_schema: GraphQLSchema) -> None:
    engine.index("users", user_schema)
    engine.index("blog", full_schema)

    assert engine.search("users", "post") == []
    assert engine.search("blog", "email") == []


def test_empty_schema_indexes_zero_documents(engine: SchemaSearchEngine) -> None:
    assert engine.index("empty", parse_schema("# nothing here")) == 0
    assert engine.exists("empty") is True
    assert engine.search("empty", "anything") == []


def test_search_or_index_builds_missing_index(engine: SchemaSearchEngine, user_schema: GraphQLSchema) -> None:
    results = engine.search_or_index("users", user_schema, "email")

    assert engine.exists("users") is True
    assert set(_paths(results)) == {"User.email", "UserInput.email"}


def test_schema_id_must_not_contain_path_separators(engine: SchemaSearchEngine) -> None:
    with pytest.raises(ValueError):
        engine.exists("../escape")
    with pytest.raises(ValueError):
        engine.exists("")


def test_schema_id_with_url_characters(engine: SchemaSearchEngine, index_dir: Path, user_schema: GraphQLSchema) -> None:
    engine.index("api?v2#beta", user_schema)

    assert engine.exists("api?v2#beta") is True
    assert [p.name for p in index_dir.iterdir()] == ["api?v2#beta.db"]
    assert "User.email" in _paths(engine.search("api?v2#beta", "email"))


def test_failed_index_leaves_no_partial_file(
    engine: SchemaSearchEngine, user_schema: GraphQLSchema, monkeypatch
) -> None:
    monkeypatch.setattr(
        indexer_module,
        "INSERT_DOCUMENT",
        text("INSERT INTO no_such_table (schema_id) VALUES (:schema_id)"),
    )

    with pytest.raises(SearchError):
        engine.index("users", user_schema)

    assert engine.exists("users") is False
