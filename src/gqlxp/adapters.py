"""Adapt schema definitions into browsable list items and panels.

Every item receives the ``SchemaResolver`` it needs; nothing here reaches
for a global schema.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from gqlxp.gql.resolver import NotFoundError, SchemaResolver
from gqlxp.gql.types import (
    Argument,
    DirectiveDef,
    EnumDef,
    EnumValue,
    Field,
    InputObjectDef,
    InterfaceDef,
    ObjectDef,
    TypeDef,
    UnionDef,
    Usage,
)
from gqlxp.navigation.panels import ListItem, ListPanel, Panel
from gqlxp.navigation.type_selector import GQLType
from gqlxp.search.models import SearchResult


class FieldItem(ListItem):
    """A field or input value; opens its arguments followed by its result type."""

    def __init__(self, field_def: Field | Argument, resolver: SchemaResolver, parent: str = "") -> None:
        self.field_def = field_def
        self.resolver = resolver
        self.parent = parent

    @property
    def title(self) -> str:
        return self.field_def.signature()

    @property
    def description(self) -> str:
        return self.field_def.description

    @property
    def filter_value(self) -> str:
        return self.field_def.name

    @property
    def type_name(self) -> str:
        return self.field_def.type_name

    @property
    def ref_name(self) -> str:
        return f"{self.parent}.{self.field_def.name}" if self.parent else self.field_def.name

    def open_panel(self) -> Optional[Panel]:
        items: List[ListItem] = []
        if isinstance(self.field_def, Field):
            items.extend(FieldItem(arg, self.resolver) for arg in self.field_def.arguments)
        try:
            items.append(TypeDefItem(self.resolver.resolve_type(self.type_name), self.resolver))
        except NotFoundError:
            # Built-in scalars have nothing further to open
            pass
        if not items:
            return None
        return ListPanel(all_items=items, panel_title=self.field_def.name)


class EnumValueItem(ListItem):
    def __init__(self, value: EnumValue, enum_name: str) -> None:
        self.value = value
        self.enum_name = enum_name

    @property
    def title(self) -> str:
        return self.value.name

    @property
    def description(self) -> str:
        return self.value.description

    @property
    def ref_name(self) -> str:
        return f"{self.enum_name}.{self.value.name}"


class UsageItem(ListItem):
    """A place where a type is used; opens the enclosing definition."""

    def __init__(self, usage: Usage, resolver: SchemaResolver) -> None:
        self.usage = usage
        self.resolver = resolver

    @property
    def title(self) -> str:
        return self.usage.path

    @property
    def description(self) -> str:
        return self.usage.parent_kind

    @property
    def type_name(self) -> str:
        return self.usage.parent_type

    @property
    def ref_name(self) -> str:
        return self.usage.path

    def open_panel(self) -> Optional[Panel]:
        if self.usage.parent_kind in ("Query", "Mutation"):
            try:
                field_def = self.resolver.resolve_query_or_mutation_field(
                    self.usage.parent_kind, self.usage.field_name
                )
            except NotFoundError:
                return None
            return FieldItem(field_def, self.resolver, self.usage.parent_kind).open_panel()
        if self.usage.parent_kind == "Directive":
            try:
                return DirectiveItem(self.resolver.resolve_directive(self.usage.parent_type), self.resolver).open_panel()
            except NotFoundError:
                return None
        try:
            type_def = self.resolver.resolve_type(self.usage.parent_type)
        except NotFoundError:
            return None
        return TypeDefItem(type_def, self.resolver).open_panel()


class TypeDefItem(ListItem):
    def __init__(self, type_def: TypeDef, resolver: SchemaResolver) -> None:
        self.type_def = type_def
        self.resolver = resolver

    @property
    def title(self) -> str:
        return self.type_def.name

    @property
    def description(self) -> str:
        return self.type_def.description

    @property
    def type_name(self) -> str:
        return self.type_def.name

    @property
    def ref_name(self) -> str:
        return self.type_def.name

    def open_panel(self) -> Optional[Panel]:
        type_def = self.type_def
        items: List[ListItem] = []
        if isinstance(type_def, (ObjectDef, InterfaceDef, InputObjectDef)):
            items.extend(FieldItem(f, self.resolver, type_def.name) for f in type_def.fields)
            if isinstance(type_def, (ObjectDef, InterfaceDef)):
                items.extend(self._named_items(type_def.interfaces))
        elif isinstance(type_def, UnionDef):
            items.extend(self._named_items(type_def.types))
        elif isinstance(type_def, EnumDef):
            items.extend(EnumValueItem(value, type_def.name) for value in type_def.values)
        items.extend(UsageItem(usage, self.resolver) for usage in self.resolver.resolve_usages(type_def.name))
        return ListPanel(all_items=items, panel_title=type_def.name)

    def _named_items(self, names: Sequence[str]) -> List[ListItem]:
        items: List[ListItem] = []
        for name in names:
            try:
                items.append(TypeDefItem(self.resolver.resolve_type(name), self.resolver))
            except NotFoundError:
                continue
        return items


class DirectiveItem(ListItem):
    def __init__(self, directive: DirectiveDef, resolver: SchemaResolver) -> None:
        self.directive = directive
        self.resolver = resolver

    @property
    def title(self) -> str:
        return f"@{self.directive.name}"

    @property
    def description(self) -> str:
        return self.directive.description

    @property
    def filter_value(self) -> str:
        return self.directive.name

    @property
    def ref_name(self) -> str:
        return f"@{self.directive.name}"

    def open_panel(self) -> Optional[Panel]:
        items = [FieldItem(arg, self.resolver, f"@{self.directive.name}") for arg in self.directive.arguments]
        return ListPanel(all_items=items, panel_title=f"@{self.directive.name}")


class SearchResultItem(ListItem):
    """A search hit; opens whatever definition its path points at."""

    def __init__(self, result: SearchResult, resolver: SchemaResolver) -> None:
        self.result = result
        self.resolver = resolver

    @property
    def title(self) -> str:
        return self.result.path

    @property
    def description(self) -> str:
        return self.result.description

    @property
    def filter_value(self) -> str:
        return self.result.name

    @property
    def ref_name(self) -> str:
        return self.result.path

    def open_panel(self) -> Optional[Panel]:
        item = item_for_path(self.result.path, self.resolver)
        return item.open_panel() if item else None


def item_for_path(path: str, resolver: SchemaResolver) -> Optional[ListItem]:
    """Return the item for ``Type``, ``Type.field`` or ``@directive``."""
    try:
        if path.startswith("@"):
            return DirectiveItem(resolver.resolve_directive(path), resolver)
        type_name, _, field_name = path.partition(".")
        if type_name in ("Query", "Mutation") and field_name:
            return FieldItem(resolver.resolve_query_or_mutation_field(type_name, field_name), resolver, type_name)
        type_def = resolver.resolve_type(type_name)
    except NotFoundError:
        return None
    if not field_name:
        return TypeDefItem(type_def, resolver)
    fields = getattr(type_def, "fields", [])
    for field_def in fields:
        if field_def.name == field_name:
            return FieldItem(field_def, resolver, type_name)
    return None


def category_panel(gql_type: GQLType, resolver: SchemaResolver) -> ListPanel:
    """Top-level panel listing every definition in a category, sorted by name."""
    schema = resolver.schema
    items: List[ListItem]
    if gql_type is GQLType.QUERY:
        items = [FieldItem(f, resolver, "Query") for f in schema.query.values()]
    elif gql_type is GQLType.MUTATION:
        items = [FieldItem(f, resolver, "Mutation") for f in schema.mutation.values()]
    elif gql_type is GQLType.DIRECTIVE:
        items = [DirectiveItem(d, resolver) for d in schema.directives.values()]
    elif gql_type is GQLType.SEARCH:
        items = []
    else:
        table = {
            GQLType.OBJECT: schema.objects,
            GQLType.INPUT: schema.inputs,
            GQLType.ENUM: schema.enums,
            GQLType.SCALAR: schema.scalars,
            GQLType.INTERFACE: schema.interfaces,
            GQLType.UNION: schema.unions,
        }[gql_type]
        items = [TypeDefItem(t, resolver) for t in table.values()]
    items.sort(key=lambda item: item.filter_value)
    return ListPanel(all_items=items, panel_title=gql_type.value)


def search_results_panel(results: Sequence[SearchResult], resolver: SchemaResolver) -> ListPanel:
    return ListPanel(
        all_items=[SearchResultItem(result, resolver) for result in results],
        panel_title=GQLType.SEARCH.value,
    )
