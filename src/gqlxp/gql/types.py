"""In-memory model of a parsed GraphQL schema.

Definitions are plain dataclasses detached from the graphql-core AST so the
rest of gqlxp never handles parser nodes directly. Every named type definition
carries an explicit ``kind`` discriminant (see ``TypeKind``), which lets
callers dispatch on a single attribute instead of isinstance chains.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Dict, List, Optional, Union


class TypeKind(str, Enum):
    """Discriminant for named type definitions."""

    OBJECT = "Object"
    INTERFACE = "Interface"
    UNION = "Union"
    ENUM = "Enum"
    SCALAR = "Scalar"
    INPUT_OBJECT = "InputObject"


class TypeRefKind(str, Enum):
    NAMED = "named"
    LIST = "list"
    NON_NULL = "non_null"


@dataclass(frozen=True)
class TypeRef:
    """Declared type of a field or input value, e.g. ``[User!]!``."""

    kind: TypeRefKind
    name: Optional[str] = None
    of_type: Optional["TypeRef"] = None

    @classmethod
    def named(cls, name: str) -> "TypeRef":
        return cls(TypeRefKind.NAMED, name=name)

    @classmethod
    def list_of(cls, of_type: "TypeRef") -> "TypeRef":
        return cls(TypeRefKind.LIST, of_type=of_type)

    @classmethod
    def non_null(cls, of_type: "TypeRef") -> "TypeRef":
        return cls(TypeRefKind.NON_NULL, of_type=of_type)

    def named_type(self) -> str:
        """Return the base type name, stripping any list/non-null wrappers."""
        ref: Optional[TypeRef] = self
        while ref is not None and ref.kind is not TypeRefKind.NAMED:
            ref = ref.of_type
        if ref is None or ref.name is None:
            return ""
        return ref.name

    def __str__(self) -> str:
        if self.kind is TypeRefKind.NAMED:
            return self.name or ""
        if self.kind is TypeRefKind.LIST:
            return f"[{self.of_type}]"
        return f"{self.of_type}!"


@dataclass
class AppliedDirective:
    """A directive applied to a definition, e.g. ``@deprecated(reason: "old")``.

    ``arguments`` maps argument names to their printed literal values.
    """

    name: str
    arguments: Dict[str, str] = field(default_factory=dict)

    def __str__(self) -> str:
        if not self.arguments:
            return f"@{self.name}"
        args = ", ".join(f"{name}: {value}" for name, value in self.arguments.items())
        return f"@{self.name}({args})"


@dataclass
class Argument:
    """An input value: a field/directive argument or an input object field."""

    name: str
    type: TypeRef
    description: str = ""
    default_value: Optional[str] = None
    directives: List[AppliedDirective] = field(default_factory=list)

    @property
    def type_name(self) -> str:
        return self.type.named_type()

    @property
    def type_string(self) -> str:
        return str(self.type)

    def signature(self) -> str:
        if self.default_value is None:
            return f"{self.name}: {self.type}"
        return f"{self.name}: {self.type} = {self.default_value}"


@dataclass
class Field:
    name: str
    type: TypeRef
    description: str = ""
    arguments: List[Argument] = field(default_factory=list)
    directives: List[AppliedDirective] = field(default_factory=list)

    @property
    def type_name(self) -> str:
        return self.type.named_type()

    @property
    def type_string(self) -> str:
        return str(self.type)

    def signature(self) -> str:
        """Return ``name(arg: Type, ...): Type``."""
        if not self.arguments:
            return f"{self.name}: {self.type}"
        args = ", ".join(arg.signature() for arg in self.arguments)
        return f"{self.name}({args}): {self.type}"


@dataclass
class EnumValue:
    name: str
    description: str = ""
    directives: List[AppliedDirective] = field(default_factory=list)


@dataclass
class ObjectDef:
    kind: ClassVar[TypeKind] = TypeKind.OBJECT

    name: str
    description: str = ""
    fields: List[Field] = field(default_factory=list)
    interfaces: List[str] = field(default_factory=list)
    directives: List[AppliedDirective] = field(default_factory=list)


@dataclass
class InterfaceDef:
    kind: ClassVar[TypeKind] = TypeKind.INTERFACE

    name: str
    description: str = ""
    fields: List[Field] = field(default_factory=list)
    interfaces: List[str] = field(default_factory=list)
    directives: List[AppliedDirective] = field(default_factory=list)


@dataclass
class UnionDef:
    kind: ClassVar[TypeKind] = TypeKind.UNION

    name: str
    description: str = ""
    types: List[str] = field(default_factory=list)
    directives: List[AppliedDirective] = field(default_factory=list)


@dataclass
class EnumDef:
    kind: ClassVar[TypeKind] = TypeKind.ENUM

    name: str
    description: str = ""
    values: List[EnumValue] = field(default_factory=list)
    directives: List[AppliedDirective] = field(default_factory=list)


@dataclass
class ScalarDef:
    kind: ClassVar[TypeKind] = TypeKind.SCALAR

    name: str
    description: str = ""
    directives: List[AppliedDirective] = field(default_factory=list)


@dataclass
class InputObjectDef:
    kind: ClassVar[TypeKind] = TypeKind.INPUT_OBJECT

    name: str
    description: str = ""
    fields: List[Argument] = field(default_factory=list)
    directives: List[AppliedDirective] = field(default_factory=list)


@dataclass
class DirectiveDef:
    name: str
    description: str = ""
    locations: List[str] = field(default_factory=list)
    arguments: List[Argument] = field(default_factory=list)
    repeatable: bool = False

    def signature(self) -> str:
        args = ""
        if self.arguments:
            args = "(" + ", ".join(arg.signature() for arg in self.arguments) + ")"
        repeatable = " repeatable" if self.repeatable else ""
        return f"@{self.name}{args}{repeatable} on {' | '.join(self.locations)}"


TypeDef = Union[ObjectDef, InterfaceDef, UnionDef, EnumDef, ScalarDef, InputObjectDef]


@dataclass(frozen=True)
class Usage:
    """One place where a named type is referenced."""

    type_name: str
    parent_type: str
    parent_kind: str
    field_name: str
    path: str


@dataclass
class GraphQLSchema:
    """Parsed schema grouped by category, plus the reverse usage index.

    Built once per document and treated as read-only afterwards.
    """

    query: Dict[str, Field] = field(default_factory=dict)
    mutation: Dict[str, Field] = field(default_factory=dict)
    objects: Dict[str, ObjectDef] = field(default_factory=dict)
    inputs: Dict[str, InputObjectDef] = field(default_factory=dict)
    enums: Dict[str, EnumDef] = field(default_factory=dict)
    scalars: Dict[str, ScalarDef] = field(default_factory=dict)
    interfaces: Dict[str, InterfaceDef] = field(default_factory=dict)
    unions: Dict[str, UnionDef] = field(default_factory=dict)
    directives: Dict[str, DirectiveDef] = field(default_factory=dict)
    usages: Dict[str, List[Usage]] = field(default_factory=dict)

    def type_def(self, name: str) -> Optional[TypeDef]:
        """Return the named type definition, or None when it is not user-defined."""
        for table in (
            self.objects,
            self.inputs,
            self.enums,
            self.scalars,
            self.interfaces,
            self.unions,
        ):
            if name in table:
                return table[name]
        return None

    def type_defs(self) -> List[TypeDef]:
        defs: List[TypeDef] = []
        defs.extend(self.objects.values())
        defs.extend(self.inputs.values())
        defs.extend(self.enums.values())
        defs.extend(self.scalars.values())
        defs.extend(self.interfaces.values())
        defs.extend(self.unions.values())
        return defs

    def is_empty(self) -> bool:
        return not (self.query or self.mutation or self.type_defs() or self.directives)
