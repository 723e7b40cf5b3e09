"""Reverse usage index: for every named type, each place that references it.

The index is built in one flat pass over already-parsed field and argument
lists, so self-referencing and mutually recursive types need no cycle
handling. Order within a key is discovery order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Iterable, List

from .types import Argument, Field, Usage

if TYPE_CHECKING:
    from .types import GraphQLSchema

UsageIndex = Dict[str, List[Usage]]


def build_usage_index(schema: "GraphQLSchema") -> UsageIndex:
    """Build the usage index for all types in the schema."""
    usages: UsageIndex = {}

    for field_def in schema.query.values():
        _record_field_usage(usages, field_def, "Query", "Query")
    for field_def in schema.mutation.values():
        _record_field_usage(usages, field_def, "Mutation", "Mutation")
    for obj in schema.objects.values():
        for field_def in obj.fields:
            _record_field_usage(usages, field_def, obj.name, "Object")
    for iface in schema.interfaces.values():
        for field_def in iface.fields:
            _record_field_usage(usages, field_def, iface.name, "Interface")

    # Whole-type references: implementations and union membership
    for obj in schema.objects.values():
        _record_type_references(usages, obj.interfaces, obj.name, "Object")
    for iface in schema.interfaces.values():
        _record_type_references(usages, iface.interfaces, iface.name, "Interface")

    for input_obj in schema.inputs.values():
        for input_field in input_obj.fields:
            _record(
                usages,
                input_field.type_name,
                parent_type=input_obj.name,
                parent_kind="Input",
                field_name=input_field.name,
                path=f"{input_obj.name}.{input_field.name}",
            )

    for union in schema.unions.values():
        _record_type_references(usages, union.types, union.name, "Union")

    for directive in schema.directives.values():
        for arg in directive.arguments:
            _record(
                usages,
                arg.type_name,
                parent_type=directive.name,
                parent_kind="Directive",
                field_name=arg.name,
                path=f"{directive.name}({arg.name}: {arg.type_string})",
            )

    return usages


def _record_field_usage(usages: UsageIndex, field_def: Field, parent_type: str, parent_kind: str) -> None:
    _record(
        usages,
        field_def.type_name,
        parent_type=parent_type,
        parent_kind=parent_kind,
        field_name=field_def.name,
        path=f"{parent_type}.{field_def.name}",
    )
    for arg in field_def.arguments:
        _record_argument_usage(usages, arg, field_def, parent_type, parent_kind)


def _record_argument_usage(
    usages: UsageIndex, arg: Argument, field_def: Field, parent_type: str, parent_kind: str
) -> None:
    _record(
        usages,
        arg.type_name,
        parent_type=parent_type,
        parent_kind=parent_kind,
        field_name=field_def.name,
        path=f"{parent_type}.{field_def.name}({arg.name}: {arg.type_string})",
    )


def _record_type_references(
    usages: UsageIndex, type_names: Iterable[str], parent_type: str, parent_kind: str
) -> None:
    for type_name in type_names:
        _record(
            usages,
            type_name,
            parent_type=parent_type,
            parent_kind=parent_kind,
            field_name="",
            path=parent_type,
        )


def _record(
    usages: UsageIndex,
    type_name: str,
    *,
    parent_type: str,
    parent_kind: str,
    field_name: str,
    path: str,
) -> None:
    if not type_name:
        return
    usages.setdefault(type_name, []).append(
        Usage(
            type_name=type_name,
            parent_type=parent_type,
            parent_kind=parent_kind,
            field_name=field_name,
            path=path,
        )
    )
