"""Resolve references in a parsed schema to their definitions."""

from __future__ import annotations

from typing import List, Union

from .types import Argument, DirectiveDef, Field, GraphQLSchema, TypeDef, Usage

BUILTIN_SCALARS = frozenset({"String", "Int", "Float", "Boolean", "ID"})


class NotFoundError(LookupError):
    """Raised when a name does not resolve to a user-defined definition.

    Built-in scalars raise this too; ``is_builtin`` lets callers tell them
    apart from names that are genuinely missing from the schema.
    """

    def __init__(self, name: str, kind: str = "type"):
        self.name = name
        self.kind = kind
        super().__init__(f"{kind} {name!r} not found in schema")

    @property
    def is_builtin(self) -> bool:
        return self.kind == "type" and self.name in BUILTIN_SCALARS


class SchemaResolver:
    """Resolve type, field, argument and directive references in one schema."""

    def __init__(self, schema: GraphQLSchema) -> None:
        self.schema = schema

    def resolve_type(self, type_name: str) -> TypeDef:
        type_def = self.schema.type_def(type_name)
        if type_def is None:
            raise NotFoundError(type_name)
        return type_def

    def resolve_field_type(self, field_def: Field) -> TypeDef:
        return self.resolve_type(field_def.type_name)

    def resolve_argument_type(self, arg: Argument) -> TypeDef:
        return self.resolve_type(arg.type_name)

    def resolve_directive(self, directive_name: str) -> DirectiveDef:
        name = directive_name.lstrip("@")
        try:
            return self.schema.directives[name]
        except KeyError:
            raise NotFoundError(name, kind="directive") from None

    def resolve_usages(self, type_name: str) -> List[Usage]:
        """Return every recorded usage of a type; empty when there are none."""
        return list(self.schema.usages.get(type_name, ()))

    def resolve_query_or_mutation_field(self, category: str, field_name: str) -> Field:
        """Resolve a root field; Query and Mutation are not type definitions.

        ``category`` may be a ``GQLType``, whose str value is used.
        """
        category_name = getattr(category, "value", category)
        if category_name == "Query":
            fields = self.schema.query
        elif category_name == "Mutation":
            fields = self.schema.mutation
        else:
            raise ValueError(f"Expected Query or Mutation category, got {category_name!r}")
        try:
            return fields[field_name]
        except KeyError:
            raise NotFoundError(field_name, kind=f"{category_name} field") from None

    def type_name_for_display(self, ref: Union[Field, Argument]) -> str:
        """Raw SDL type string, used where a type does not resolve."""
        return ref.type_string
