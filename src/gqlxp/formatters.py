"""Render a single type, root field or directive as JSON or markdown.

Targets are addressed as ``Query.<field>``, ``Mutation.<field>``,
``@<directive>`` or a bare type name.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, TypeVar, Union

from pydantic import BaseModel

from gqlxp.gql.resolver import NotFoundError, SchemaResolver
from gqlxp.gql.types import (
    AppliedDirective,
    Argument,
    DirectiveDef,
    EnumDef,
    Field,
    GraphQLSchema,
    InputObjectDef,
    InterfaceDef,
    ObjectDef,
    TypeDef,
    UnionDef,
    Usage,
)

ROOT_CATEGORIES = ("Query", "Mutation")


class JSONDirectiveUsage(BaseModel):
    name: str
    arguments: Optional[Dict[str, str]] = None


class JSONArgument(BaseModel):
    name: str
    type: str
    description: Optional[str] = None
    default_value: Optional[str] = None
    directives: Optional[List[JSONDirectiveUsage]] = None


class JSONField(BaseModel):
    name: str
    type: str
    description: Optional[str] = None
    arguments: Optional[List[JSONArgument]] = None
    directives: Optional[List[JSONDirectiveUsage]] = None


class JSONEnumValue(BaseModel):
    name: str
    description: Optional[str] = None


class JSONUsage(BaseModel):
    parent_type: str
    parent_kind: str
    field_name: Optional[str] = None
    path: str


class JSONTypeDef(BaseModel):
    name: str
    kind: str
    description: Optional[str] = None
    fields: Optional[List[JSONField]] = None
    input_fields: Optional[List[JSONArgument]] = None
    interfaces: Optional[List[str]] = None
    possible_types: Optional[List[str]] = None
    enum_values: Optional[List[JSONEnumValue]] = None
    directives: Optional[List[JSONDirectiveUsage]] = None
    usages: Optional[List[JSONUsage]] = None


class JSONRootField(JSONField):
    category: str


class JSONDirective(BaseModel):
    name: str
    description: Optional[str] = None
    locations: Optional[List[str]] = None
    arguments: Optional[List[JSONArgument]] = None
    repeatable: bool = False


T = TypeVar("T")


def _text(value: str) -> Optional[str]:
    return value or None


def _items(values: Sequence[T]) -> Optional[List[T]]:
    """Empty sections are dropped from the JSON output."""
    return list(values) or None


def _directive_views(directives: List[AppliedDirective]) -> Optional[List[JSONDirectiveUsage]]:
    return _items([JSONDirectiveUsage(name=d.name, arguments=dict(d.arguments) or None) for d in directives])


def _argument_view(arg: Argument) -> JSONArgument:
    return JSONArgument(
        name=arg.name,
        type=arg.type_string,
        description=_text(arg.description),
        default_value=arg.default_value,
        directives=_directive_views(arg.directives),
    )


def _field_view(field_def: Field) -> JSONField:
    return JSONField(
        name=field_def.name,
        type=field_def.type_string,
        description=_text(field_def.description),
        arguments=_items([_argument_view(arg) for arg in field_def.arguments]),
        directives=_directive_views(field_def.directives),
    )


def _usage_view(usage: Usage) -> JSONUsage:
    return JSONUsage(
        parent_type=usage.parent_type,
        parent_kind=usage.parent_kind,
        field_name=_text(usage.field_name),
        path=usage.path,
    )


def _type_view(type_def: TypeDef, usages: List[Usage]) -> JSONTypeDef:
    view = JSONTypeDef(
        name=type_def.name,
        kind=type_def.kind.value,
        description=_text(type_def.description),
        directives=_directive_views(type_def.directives),
        usages=_items([_usage_view(u) for u in usages]),
    )
    if isinstance(type_def, (ObjectDef, InterfaceDef)):
        view.fields = _items([_field_view(f) for f in type_def.fields])
        view.interfaces = _items(type_def.interfaces)
    elif isinstance(type_def, InputObjectDef):
        view.input_fields = _items([_argument_view(f) for f in type_def.fields])
    elif isinstance(type_def, UnionDef):
        view.possible_types = _items(type_def.types)
    elif isinstance(type_def, EnumDef):
        view.enum_values = _items(
            [JSONEnumValue(name=v.name, description=_text(v.description)) for v in type_def.values]
        )
    return view


def _directive_view(directive: DirectiveDef) -> JSONDirective:
    return JSONDirective(
        name=directive.name,
        description=_text(directive.description),
        locations=_items(directive.locations),
        arguments=_items([_argument_view(arg) for arg in directive.arguments]),
        repeatable=directive.repeatable,
    )


def _lookup(
    resolver: SchemaResolver, target: str
) -> Union[DirectiveDef, tuple[str, Field], TypeDef]:
    if target.startswith("@"):
        return resolver.resolve_directive(target)
    category, dot, field_name = target.partition(".")
    if dot and category in ROOT_CATEGORIES:
        return category, resolver.resolve_query_or_mutation_field(category, field_name)
    if dot:
        raise NotFoundError(target)
    return resolver.resolve_type(target)


def to_json(schema: GraphQLSchema, target: str, include_usages: bool = False) -> str:
    """Render ``target`` as indented JSON.

    Usages are only included for type targets and only when asked for.

    Raises:
        NotFoundError: If ``target`` names nothing in the schema.
    """
    resolver = SchemaResolver(schema)
    found = _lookup(resolver, target)
    view: BaseModel
    if isinstance(found, DirectiveDef):
        view = _directive_view(found)
    elif isinstance(found, tuple):
        category, field_def = found
        view = JSONRootField(category=category, **_field_view(field_def).model_dump())
    else:
        usages = resolver.resolve_usages(found.name) if include_usages else []
        view = _type_view(found, usages)
    return view.model_dump_json(indent=2, exclude_none=True)


def _field_line(resolver: SchemaResolver, field_def: Union[Field, Argument]) -> str:
    try:
        resolved = resolver.resolve_type(field_def.type_name)
        type_label = f"`{field_def.type_string}` ({resolved.kind.value})"
    except NotFoundError:
        type_label = f"`{resolver.type_name_for_display(field_def)}`"
    line = f"- `{field_def.name}`: {type_label}"
    if field_def.description:
        line += f" - {field_def.description}"
    return line


def to_markdown(schema: GraphQLSchema, target: str) -> str:
    """Render ``target`` as a markdown document."""
    resolver = SchemaResolver(schema)
    found = _lookup(resolver, target)
    lines: List[str] = []

    if isinstance(found, DirectiveDef):
        lines.append(f"# @{found.name}")
        if found.description:
            lines += ["", found.description]
        lines += ["", "```graphql", f"directive {found.signature()}", "```"]
        if found.arguments:
            lines += ["", "## Arguments", ""]
            lines += [_field_line(resolver, arg) for arg in found.arguments]
        return "\n".join(lines) + "\n"

    if isinstance(found, tuple):
        category, field_def = found
        lines.append(f"# {category}.{field_def.name}")
        if field_def.description:
            lines += ["", field_def.description]
        lines += ["", "```graphql", field_def.signature(), "```"]
        if field_def.arguments:
            lines += ["", "## Arguments", ""]
            lines += [_field_line(resolver, arg) for arg in field_def.arguments]
        return "\n".join(lines) + "\n"

    type_def = found
    lines.append(f"# {type_def.name}")
    lines += ["", f"*{type_def.kind.value}*"]
    if type_def.description:
        lines += ["", type_def.description]
    if isinstance(type_def, (ObjectDef, InterfaceDef)):
        if type_def.interfaces:
            lines += ["", "Implements: " + ", ".join(f"`{name}`" for name in type_def.interfaces)]
        if type_def.fields:
            lines += ["", "## Fields", ""]
            lines += [_field_line(resolver, f) for f in type_def.fields]
    elif isinstance(type_def, InputObjectDef) and type_def.fields:
        lines += ["", "## Fields", ""]
        lines += [_field_line(resolver, f) for f in type_def.fields]
    elif isinstance(type_def, UnionDef) and type_def.types:
        lines += ["", "## Members", ""]
        lines += [f"- `{name}`" for name in type_def.types]
    elif isinstance(type_def, EnumDef) and type_def.values:
        lines += ["", "## Values", ""]
        for value in type_def.values:
            line = f"- `{value.name}`"
            if value.description:
                line += f" - {value.description}"
            lines.append(line)

    usages = resolver.resolve_usages(type_def.name)
    if usages:
        lines += ["", "## Used by", ""]
        lines += [f"- `{usage.path}` ({usage.parent_kind})" for usage in usages]
    return "\n".join(lines) + "\n"
