"""
IR (Intermediate Representation) node definitions.

These nodes represent the resolved service model handed to code
generation backends. Every type reference, base type and bound
operation has been resolved to an object of this module.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
import enum
from typing import Any

from ...errors import MissingEntityContainer, ODataModelError
from ...utils import normalize_qualified_name
from ..schema_ast.nodes import OperationKind

VOID = "void"


@dataclass(frozen=True)
class TypeDescriptor:
    """A parsed type reference such as "Edm.String" or "Collection(NS.Order)"."""

    name: str = ""  # Normalized display name
    qualified_name: str = ""  # Unwrapped namespace-qualified name
    is_collection: bool = False
    is_void: bool = False

    @property
    def is_primitive(self) -> bool:
        return self.qualified_name.startswith("Edm.")

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "qualified_name": self.qualified_name,
            "is_collection": self.is_collection,
            "is_void": self.is_void,
        }


@dataclass
class Property:
    """A structural or navigation property."""

    name: str = ""
    type: TypeDescriptor = field(default_factory=TypeDescriptor)
    nullable: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "type": self.type.to_dict(), "nullable": self.nullable}


@dataclass(eq=False)
class ComplexType:
    """A complex type; also the common shape of entity types."""

    namespace: str = ""
    full_name: str = ""
    name: str = ""
    properties: list[Property] = field(default_factory=list)

    # Inheritance: the name is set by the catalog builder, the reference by the resolver
    base_type_full_name: str | None = None
    base_type: ComplexType | None = None

    open_type: bool = False
    abstract: bool = False

    @property
    def display_full_name(self) -> str:
        return normalize_qualified_name(self.full_name)

    @property
    def base_type_display_name(self) -> str | None:
        if self.base_type_full_name is None:
            return None
        return normalize_qualified_name(self.base_type_full_name)

    def base_chain(self) -> Iterator[ComplexType]:
        """Yield base types, nearest first.

        Cycles are rejected during resolution, so the walk terminates.
        """
        current = self.base_type
        while current is not None:
            yield current
            current = current.base_type

    def to_dict(self) -> dict[str, Any]:
        return {
            "namespace": self.namespace,
            "full_name": self.full_name,
            "name": self.name,
            "properties": [p.to_dict() for p in self.properties],
            "base_type_full_name": self.base_type_full_name,
            "base_type": self.base_type.full_name if self.base_type else None,
            "open_type": self.open_type,
            "abstract": self.abstract,
        }


@dataclass(eq=False)
class EntityType(ComplexType):
    """An entity type with key, navigation properties and bound operations."""

    key: Property | None = None
    navigation_properties: list[Property] = field(default_factory=list)

    # Instance-bound operations, binding parameter replaced by the key
    actions: list[Operation] = field(default_factory=list)
    functions: list[Operation] = field(default_factory=list)

    def effective_key(self) -> Property | None:
        """The declared key, or the nearest key inherited from a base entity type."""
        if self.key is not None:
            return self.key
        for base in self.base_chain():
            if isinstance(base, EntityType) and base.key is not None:
                return base.key
        return None

    def to_dict(self) -> dict[str, Any]:
        d = super().to_dict()
        d["key"] = self.key.to_dict() if self.key else None
        d["navigation_properties"] = [p.to_dict() for p in self.navigation_properties]
        d["actions"] = [o.to_dict() for o in self.actions]
        d["functions"] = [o.to_dict() for o in self.functions]
        return d


@dataclass(frozen=True)
class EnumMember:
    """A member of an enumeration."""

    key: str = ""
    value: str | None = None


@dataclass(frozen=True)
class EnumType:
    """An enumeration type."""

    name: str = ""
    members: tuple[EnumMember, ...] = ()
    namespace: str = ""
    full_name: str = ""
    underlying_type: str = "Edm.Int32"
    is_flags: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "namespace": self.namespace,
            "full_name": self.full_name,
            "underlying_type": self.underlying_type,
            "is_flags": self.is_flags,
            "members": [{"key": m.key, "value": m.value} for m in self.members],
        }


class BindingKind(enum.Enum):
    """How an operation is bound."""

    UNBOUND = "unbound"
    INSTANCE = "instance"  # Bound to a single entity of bound_type
    COLLECTION = "collection"  # Bound to a collection of bound_type


@dataclass
class Parameter:
    """An operation parameter; facets other than nullability are kept verbatim."""

    name: str = ""
    type: TypeDescriptor = field(default_factory=TypeDescriptor)
    nullable: bool | None = None
    unicode: str | None = None
    max_length: str | None = None
    precision: str | None = None
    scale: str | None = None
    srid: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type.to_dict(),
            "nullable": self.nullable,
            "unicode": self.unicode,
            "max_length": self.max_length,
            "precision": self.precision,
            "scale": self.scale,
            "srid": self.srid,
        }


@dataclass
class Operation:
    """An action or function.

    Operations in a schema catalog keep their binding parameter at index 0.
    Copies attached to an entity type or entity set have it removed.
    """

    kind: OperationKind = OperationKind.ACTION
    name: str = ""
    full_name: str = ""
    binding: BindingKind = BindingKind.UNBOUND
    bound_type: str | None = None  # Unwrapped binding parameter type
    parameters: list[Parameter] = field(default_factory=list)
    return_type: TypeDescriptor = field(default_factory=lambda: TypeDescriptor(VOID, VOID, False, True))
    is_composable: bool = False

    @property
    def is_bound(self) -> bool:
        return self.binding is not BindingKind.UNBOUND

    @property
    def is_bound_to_collection(self) -> bool:
        return self.binding is BindingKind.COLLECTION

    @property
    def is_action(self) -> bool:
        return self.kind is OperationKind.ACTION

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "name": self.name,
            "full_name": self.full_name,
            "is_bound": self.is_bound,
            "is_bound_to_collection": self.is_bound_to_collection,
            "bound_type": self.bound_type,
            "parameters": [p.to_dict() for p in self.parameters],
            "return_type": self.return_type.to_dict(),
            "is_composable": self.is_composable,
        }


@dataclass(frozen=True)
class NavigationPropertyBinding:
    path: str = ""
    target: str = ""


@dataclass(eq=False)
class EntitySet:
    """An entity set with its collection-bound operations."""

    name: str = ""
    full_name: str = ""
    namespace: str = ""
    entity_type: EntityType | None = None
    navigation_property_bindings: list[NavigationPropertyBinding] = field(default_factory=list)
    actions: list[Operation] = field(default_factory=list)
    functions: list[Operation] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "full_name": self.full_name,
            "namespace": self.namespace,
            "entity_type": self.entity_type.full_name if self.entity_type else None,
            "navigation_property_bindings": [{"path": b.path, "target": b.target} for b in self.navigation_property_bindings],
            "actions": [o.to_dict() for o in self.actions],
            "functions": [o.to_dict() for o in self.functions],
        }


@dataclass(eq=False)
class Singleton:
    name: str = ""
    full_name: str = ""
    entity_type: EntityType | None = None
    navigation_property_bindings: list[NavigationPropertyBinding] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "full_name": self.full_name,
            "entity_type": self.entity_type.full_name if self.entity_type else None,
            "navigation_property_bindings": [{"path": b.path, "target": b.target} for b in self.navigation_property_bindings],
        }


@dataclass
class FunctionImport:
    name: str = ""
    function: Operation | None = None
    entity_set: EntitySet | None = None
    include_in_service_document: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "function": self.function.to_dict() if self.function else None,
            "entity_set": self.entity_set.name if self.entity_set else None,
            "include_in_service_document": self.include_in_service_document,
        }


@dataclass
class ActionImport:
    name: str = ""
    action: Operation | None = None
    entity_set: EntitySet | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "action": self.action.to_dict() if self.action else None,
            "entity_set": self.entity_set.name if self.entity_set else None,
        }


@dataclass
class EntityContainer:
    """The entity sets, singletons and imports exposed by one schema."""

    namespace: str = ""
    name: str = ""
    full_name: str = ""
    entity_sets: list[EntitySet] = field(default_factory=list)
    singletons: list[Singleton] = field(default_factory=list)
    function_imports: list[FunctionImport] = field(default_factory=list)
    action_imports: list[ActionImport] = field(default_factory=list)

    def entity_set(self, name: str) -> EntitySet | None:
        return next((s for s in self.entity_sets if s.name == name), None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "namespace": self.namespace,
            "name": self.name,
            "full_name": self.full_name,
            "entity_sets": [s.to_dict() for s in self.entity_sets],
            "singletons": [s.to_dict() for s in self.singletons],
            "function_imports": [i.to_dict() for i in self.function_imports],
            "action_imports": [i.to_dict() for i in self.action_imports],
        }


@dataclass
class Schema:
    """A resolved schema."""

    namespace: str = ""
    complex_types: list[ComplexType] = field(default_factory=list)
    entity_types: list[EntityType] = field(default_factory=list)
    enum_types: list[EnumType] = field(default_factory=list)

    # Every operation declared in this schema, binding parameter included
    actions: list[Operation] = field(default_factory=list)
    functions: list[Operation] = field(default_factory=list)

    entity_container: EntityContainer | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "namespace": self.namespace,
            "complex_types": [t.to_dict() for t in self.complex_types],
            "entity_types": [t.to_dict() for t in self.entity_types],
            "enum_types": [t.to_dict() for t in self.enum_types],
            "actions": [o.to_dict() for o in self.actions],
            "functions": [o.to_dict() for o in self.functions],
            "entity_container": self.entity_container.to_dict() if self.entity_container else None,
        }


@dataclass
class ResolvedModel:
    """The complete resolved model of one metadata document."""

    schemas: list[Schema] = field(default_factory=list)

    # Options header embedded verbatim by the rendering backend
    header: str = ""

    # Unbound operations of every schema, by full name
    unbound_operations: dict[str, Operation] = field(default_factory=dict)

    # Recorded, non-fatal problems
    diagnostics: list[ODataModelError] = field(default_factory=list)

    def find_schema(self, namespace: str) -> Schema | None:
        return next((s for s in self.schemas if s.namespace == namespace), None)

    def entity_type(self, full_name: str) -> EntityType | None:
        for schema in self.schemas:
            for entity_type in schema.entity_types:
                if entity_type.full_name == full_name:
                    return entity_type
        return None

    def require_entity_container(self, namespace: str) -> EntityContainer:
        """Return the container of a schema, raising if it has none."""
        schema = self.find_schema(namespace)
        if schema is None or schema.entity_container is None:
            raise MissingEntityContainer(f"Schema {namespace!r} has no entity container")
        return schema.entity_container

    def to_dict(self) -> dict[str, Any]:
        return {
            "header": self.header,
            "schemas": [s.to_dict() for s in self.schemas],
            "diagnostics": [str(d) for d in self.diagnostics],
        }
