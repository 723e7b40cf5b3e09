"""Parse GraphQL SDL text into a ``GraphQLSchema``."""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional, Union

from graphql import GraphQLSyntaxError, parse, print_ast
from graphql.language import (
    DirectiveNode,
    DirectiveDefinitionNode,
    DocumentNode,
    EnumTypeDefinitionNode,
    FieldDefinitionNode,
    InputObjectTypeDefinitionNode,
    InputValueDefinitionNode,
    InterfaceTypeDefinitionNode,
    ListTypeNode,
    NamedTypeNode,
    NonNullTypeNode,
    ObjectTypeDefinitionNode,
    ScalarTypeDefinitionNode,
    StringValueNode,
    TypeNode,
    UnionTypeDefinitionNode,
)

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
    TypeRef,
    UnionDef,
)
from .usages import build_usage_index

logger = logging.getLogger(__name__)

COMMENT_PATTERN = re.compile(r"#[^\n]*")

QUERY_TYPE_NAME = "Query"
MUTATION_TYPE_NAME = "Mutation"


class ParseError(Exception):
    """Raised when schema source text is not valid SDL."""

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        self.message = message
        self.line = line
        self.column = column
        location = f" (line {line}, column {column})" if line is not None else ""
        super().__init__(f"Failed to parse schema: {message}{location}")


def parse_schema(content: Union[str, bytes]) -> GraphQLSchema:
    """Parse SDL text and build the schema model with its usage index.

    Raises:
        ParseError: If the content cannot be decoded or is not valid SDL.
    """
    text = _decode(content)
    if _is_blank(text):
        logger.debug("Schema source has no definitions")
        return GraphQLSchema()

    try:
        document = parse(text, no_location=True)
    except GraphQLSyntaxError as exc:
        line = column = None
        if exc.locations:
            line, column = exc.locations[0].line, exc.locations[0].column
        raise ParseError(exc.message, line, column) from exc

    schema = build_schema_model(document)
    schema.usages = build_usage_index(schema)
    logger.debug(
        "Schema parsed",
        extra={
            "types_count": len(schema.type_defs()),
            "query_fields": len(schema.query),
            "mutation_fields": len(schema.mutation),
            "directives_count": len(schema.directives),
        },
    )
    return schema


def build_schema_model(document: DocumentNode) -> GraphQLSchema:
    """Group the document's type-system definitions by category."""
    schema = GraphQLSchema()

    for node in document.definitions:
        if isinstance(node, ObjectTypeDefinitionNode):
            name = node.name.value
            if name == QUERY_TYPE_NAME:
                for field_def in _convert_fields(node.fields):
                    schema.query[field_def.name] = field_def
            elif name == MUTATION_TYPE_NAME:
                for field_def in _convert_fields(node.fields):
                    schema.mutation[field_def.name] = field_def
            else:
                schema.objects[name] = ObjectDef(
                    name=name,
                    description=_description(node.description),
                    fields=_convert_fields(node.fields),
                    interfaces=_names(node.interfaces),
                    directives=_convert_directives(node.directives),
                )
        elif isinstance(node, InterfaceTypeDefinitionNode):
            schema.interfaces[node.name.value] = InterfaceDef(
                name=node.name.value,
                description=_description(node.description),
                fields=_convert_fields(node.fields),
                interfaces=_names(node.interfaces),
                directives=_convert_directives(node.directives),
            )
        elif isinstance(node, UnionTypeDefinitionNode):
            schema.unions[node.name.value] = UnionDef(
                name=node.name.value,
                description=_description(node.description),
                types=_names(node.types),
                directives=_convert_directives(node.directives),
            )
        elif isinstance(node, EnumTypeDefinitionNode):
            schema.enums[node.name.value] = EnumDef(
                name=node.name.value,
                description=_description(node.description),
                values=[
                    EnumValue(
                        name=value.name.value,
                        description=_description(value.description),
                        directives=_convert_directives(value.directives),
                    )
                    for value in node.values or ()
                ],
                directives=_convert_directives(node.directives),
            )
        elif isinstance(node, ScalarTypeDefinitionNode):
            schema.scalars[node.name.value] = ScalarDef(
                name=node.name.value,
                description=_description(node.description),
                directives=_convert_directives(node.directives),
            )
        elif isinstance(node, InputObjectTypeDefinitionNode):
            schema.inputs[node.name.value] = InputObjectDef(
                name=node.name.value,
                description=_description(node.description),
                fields=_convert_input_values(node.fields),
                directives=_convert_directives(node.directives),
            )
        elif isinstance(node, DirectiveDefinitionNode):
            schema.directives[node.name.value] = DirectiveDef(
                name=node.name.value,
                description=_description(node.description),
                locations=[location.value for location in node.locations or ()],
                arguments=_convert_input_values(node.arguments),
                repeatable=bool(node.repeatable),
            )
        else:
            logger.debug("Skipping unsupported definition", extra={"node_kind": node.kind})

    return schema


def convert_type(node: TypeNode) -> TypeRef:
    if isinstance(node, NonNullTypeNode):
        return TypeRef.non_null(convert_type(node.type))
    if isinstance(node, ListTypeNode):
        return TypeRef.list_of(convert_type(node.type))
    if isinstance(node, NamedTypeNode):
        return TypeRef.named(node.name.value)
    raise ParseError(f"Unsupported type node: {node.kind}")


def _decode(content: Union[str, bytes]) -> str:
    if isinstance(content, str):
        return content.lstrip("\ufeff")
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise ParseError(f"Schema source is not valid UTF-8: {exc.reason}") from exc


def _is_blank(text: str) -> bool:
    # Commas are insignificant in GraphQL, same as whitespace.
    return not COMMENT_PATTERN.sub("", text).strip(" \t\r\n,")


def _description(node: Optional[StringValueNode]) -> str:
    if node is None:
        return ""
    return node.value


def _names(nodes: Optional[Iterable[NamedTypeNode]]) -> List[str]:
    return [named.name.value for named in nodes or ()]


def _convert_fields(nodes: Optional[Iterable[FieldDefinitionNode]]) -> List[Field]:
    return [
        Field(
            name=node.name.value,
            type=convert_type(node.type),
            description=_description(node.description),
            arguments=_convert_input_values(node.arguments),
            directives=_convert_directives(node.directives),
        )
        for node in nodes or ()
    ]


def _convert_input_values(nodes: Optional[Iterable[InputValueDefinitionNode]]) -> List[Argument]:
    return [
        Argument(
            name=node.name.value,
            type=convert_type(node.type),
            description=_description(node.description),
            default_value=print_ast(node.default_value) if node.default_value is not None else None,
            directives=_convert_directives(node.directives),
        )
        for node in nodes or ()
    ]


def _convert_directives(nodes: Optional[Iterable[DirectiveNode]]) -> List[AppliedDirective]:
    return [
        AppliedDirective(
            name=node.name.value,
            arguments={arg.name.value: print_ast(arg.value) for arg in node.arguments or ()},
        )
        for node in nodes or ()
    ]
