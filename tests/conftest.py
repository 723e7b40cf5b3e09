from pathlib import Path

import pytest

from gqlxp.gql import GraphQLSchema, parse_schema

USER_SCHEMA = '''
type Query {
  "Fetch one user by ID"
  user(id: ID!): User
  users(first: Int = 10): [User!]!
}

type Mutation {
  createUser(input: UserInput): User
}

"A registered account"
type User {
  id: ID!
  email: String
  friends: [User]
}

input UserInput {
  email: String!
}
'''

FULL_SCHEMA = '''
scalar DateTime

enum Role {
  ADMIN
  "Regular member"
  MEMBER @deprecated(reason: "use ADMIN")
}

enum CacheControl {
  PUBLIC
  PRIVATE
}

interface Node {
  id: ID!
}

interface Entity implements Node {
  id: ID!
  createdAt: DateTime
}

type Post implements Node & Entity {
  id: ID!
  createdAt: DateTime
  title: String!
  author: Author
}

type Author implements Node {
  id: ID!
  name: String
  role: Role
  posts(limit: Int = 5): [Post!]!
}

union SearchItem = Post | Author

input PostFilter {
  role: Role
  since: DateTime
}

"Controls response caching"
directive @cache(control: CacheControl, maxAge: Int = 60) repeatable on FIELD_DEFINITION | OBJECT

type Query {
  search(term: String!, filter: PostFilter): [SearchItem!]! @cache(control: PUBLIC)
  node(id: ID!): Node
}
'''


@pytest.fixture()
def user_schema() -> GraphQLSchema:
    return parse_schema(USER_SCHEMA)


@pytest.fixture()
def full_schema() -> GraphQLSchema:
    return parse_schema(FULL_SCHEMA)


@pytest.fixture()
def index_dir(tmp_path: Path) -> Path:
    return tmp_path / "indexes"


@pytest.fixture()
def full_schema_source() -> str:
    return FULL_SCHEMA
