"""Cyclic selector over the top-level categories the explorer browses."""

from __future__ import annotations

from enum import Enum
from typing import Tuple


class GQLType(str, Enum):
    QUERY = "Query"
    MUTATION = "Mutation"
    OBJECT = "Object"
    INPUT = "Input"
    ENUM = "Enum"
    SCALAR = "Scalar"
    INTERFACE = "Interface"
    UNION = "Union"
    DIRECTIVE = "Directive"
    SEARCH = "Search"


ALL_TYPES: Tuple[GQLType, ...] = tuple(GQLType)


class TypeSelector:
    def __init__(self, types: Tuple[GQLType, ...] = ALL_TYPES) -> None:
        if not types:
            raise ValueError("TypeSelector requires at least one category")
        self._types = types
        self._selected = types[0]

    def current(self) -> GQLType:
        return self._selected

    def set(self, gql_type: GQLType | str) -> None:
        selected = GQLType(gql_type)
        if selected not in self._types:
            raise ValueError(f"Unknown category: {gql_type!r}")
        self._selected = selected

    def next(self) -> GQLType:
        """Select the next category, wrapping to the first."""
        index = (self._index() + 1) % len(self._types)
        self._selected = self._types[index]
        return self._selected

    def previous(self) -> GQLType:
        """Select the previous category, wrapping to the last."""
        index = (self._index() - 1) % len(self._types)
        self._selected = self._types[index]
        return self._selected

    def all(self) -> Tuple[GQLType, ...]:
        return self._types

    def _index(self) -> int:
        return self._types.index(self._selected)
