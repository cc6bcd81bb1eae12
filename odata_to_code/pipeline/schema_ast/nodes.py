"""
Raw declaration nodes for CSDL metadata.

These nodes mirror the parsed EDMX document one declaration kind at a
time. Attribute values are kept as they appear in the document; no
type reference is resolved yet.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class OperationKind(str, Enum):
    """Kind of a declared operation."""

    ACTION = "action"
    FUNCTION = "function"


@dataclass
class RawProperty:
    """A structural property of an entity or complex type."""

    name: str = ""
    type: str = ""
    nullable: str | None = None  # "true", "false" or absent


@dataclass
class RawNavigationProperty:
    """A navigation property of an entity type."""

    name: str = ""
    type: str = ""
    partner: str | None = None


@dataclass
class RawEntityType:
    """An EntityType declaration."""

    name: str = ""
    base_type: str | None = None
    open_type: bool = False
    abstract: bool = False
    key_refs: list[str] = field(default_factory=list)  # PropertyRef names, in order
    properties: list[RawProperty] = field(default_factory=list)
    navigation_properties: list[RawNavigationProperty] = field(default_factory=list)


@dataclass
class RawComplexType:
    """A ComplexType declaration."""

    name: str = ""
    base_type: str | None = None
    open_type: bool = False
    abstract: bool = False
    properties: list[RawProperty] = field(default_factory=list)


@dataclass
class RawEnumMember:
    """A Member of an EnumType."""

    name: str = ""
    value: str | None = None


@dataclass
class RawEnumType:
    """An EnumType declaration."""

    name: str = ""
    underlying_type: str | None = None
    is_flags: bool = False
    members: list[RawEnumMember] = field(default_factory=list)


@dataclass
class RawParameter:
    """A Parameter of an action or function, facets kept verbatim."""

    name: str = ""
    type: str = ""
    nullable: str | None = None
    unicode: str | None = None
    max_length: str | None = None
    precision: str | None = None
    scale: str | None = None
    srid: str | None = None


@dataclass
class RawOperation:
    """An Action or Function declaration."""

    kind: OperationKind = OperationKind.ACTION
    name: str = ""
    is_bound: bool = False
    is_composable: bool = False
    parameters: list[RawParameter] = field(default_factory=list)  # Binding parameter first
    return_type: str | None = None  # None for void


@dataclass
class RawNavigationPropertyBinding:
    """A NavigationPropertyBinding of an entity set or singleton."""

    path: str = ""
    target: str = ""


@dataclass
class RawEntitySet:
    """An EntitySet declaration."""

    name: str = ""
    entity_type: str = ""
    navigation_property_bindings: list[RawNavigationPropertyBinding] = field(default_factory=list)


@dataclass
class RawSingleton:
    """A Singleton declaration."""

    name: str = ""
    type: str = ""
    navigation_property_bindings: list[RawNavigationPropertyBinding] = field(default_factory=list)


@dataclass
class RawFunctionImport:
    """A FunctionImport declaration."""

    name: str = ""
    function: str = ""  # Namespace-qualified function name
    entity_set: str | None = None
    include_in_service_document: bool = False


@dataclass
class RawActionImport:
    """An ActionImport declaration."""

    name: str = ""
    action: str = ""  # Namespace-qualified action name
    entity_set: str | None = None


@dataclass
class RawEntityContainer:
    """An EntityContainer declaration."""

    name: str = ""
    entity_sets: list[RawEntitySet] = field(default_factory=list)
    singletons: list[RawSingleton] = field(default_factory=list)
    function_imports: list[RawFunctionImport] = field(default_factory=list)
    action_imports: list[RawActionImport] = field(default_factory=list)


@dataclass
class RawSchema:
    """One Schema element of the metadata document."""

    namespace: str = ""
    alias: str | None = None
    entity_types: list[RawEntityType] = field(default_factory=list)
    complex_types: list[RawComplexType] = field(default_factory=list)
    enum_types: list[RawEnumType] = field(default_factory=list)
    actions: list[RawOperation] = field(default_factory=list)
    functions: list[RawOperation] = field(default_factory=list)
    entity_container: RawEntityContainer | None = None


@dataclass
class RawServiceDescription:
    """Root of the parsed metadata document."""

    version: str = ""
    schemas: list[RawSchema] = field(default_factory=list)
