"""GraphQL schema model, usage index and type resolution."""

from .parse import ParseError, parse_schema
from .resolver import BUILTIN_SCALARS, NotFoundError, SchemaResolver
from .types import (
    AppliedDirective,
    Argument,
    DirectiveDef,
    EnumDef,
    EnumValue,
    Field,
    GraphQLSchema,
    InputObjectDef,
    InterfaceDef,
    ObjectDef,
    ScalarDef,
    TypeDef,
    TypeKind,
    TypeRef,
    TypeRefKind,
    UnionDef,
    Usage,
)
from .usages import build_usage_index

__all__ = [
    "AppliedDirective",
    "Argument",
    "BUILTIN_SCALARS",
    "DirectiveDef",
    "EnumDef",
    "EnumValue",
    "Field",
    "GraphQLSchema",
    "InputObjectDef",
    "InterfaceDef",
    "NotFoundError",
    "ObjectDef",
    "ParseError",
    "ScalarDef",
    "SchemaResolver",
    "TypeDef",
    "TypeKind",
    "TypeRef",
    "TypeRefKind",
    "UnionDef",
    "Usage",
    "build_usage_index",
    "parse_schema",
]
