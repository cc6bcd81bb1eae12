"""
Per-schema catalog of types and operations.

Builds the IR objects declared by one schema. Nothing here looks
across schemas: base types and binding targets stay unresolved names.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ...errors import KeyNotFound
from ..schema_ast.nodes import (
    RawComplexType,
    RawEntityType,
    RawEnumType,
    RawOperation,
    RawParameter,
    RawProperty,
    RawSchema,
)
from .diagnostics import Diagnostics
from .ir_nodes import (
    BindingKind,
    ComplexType,
    EntityType,
    EnumMember,
    EnumType,
    Operation,
    Parameter,
    Property,
)
from .type_descriptor import get_type, void_type

logger = logging.getLogger(__name__)


def _parse_nullable(value: str | None) -> bool | None:
    if value is None:
        return None
    return value.lower() != "false"


@dataclass
class SchemaCatalog:
    """Types and operations declared by one schema."""

    namespace: str = ""
    entity_types: list[EntityType] = field(default_factory=list)
    complex_types: list[ComplexType] = field(default_factory=list)
    enum_types: list[EnumType] = field(default_factory=list)
    actions: list[Operation] = field(default_factory=list)
    functions: list[Operation] = field(default_factory=list)


class CatalogBuilder:
    """Builds the catalog of a single schema."""

    def __init__(self, diagnostics: Diagnostics):
        self.diagnostics = diagnostics

    def build(self, schema: RawSchema) -> SchemaCatalog:
        """
        Build the catalog of one schema.

        Args:
            schema: The raw schema declarations

        Returns:
            SchemaCatalog with unresolved base types and bindings

        Raises:
            KeyNotFound: If an entity type's key names no property
        """
        namespace = schema.namespace
        catalog = SchemaCatalog(namespace=namespace)
        catalog.entity_types = [self._build_entity_type(t, namespace) for t in schema.entity_types]
        catalog.complex_types = [self._build_complex_type(t, namespace) for t in schema.complex_types]
        catalog.enum_types = [self._build_enum_type(t, namespace) for t in schema.enum_types]

        if schema.actions:
            logger.info("Found %d OData Actions in %s", len(schema.actions), namespace)
        if schema.functions:
            logger.info("Found %d OData Functions in %s", len(schema.functions), namespace)
        catalog.actions = [self.build_operation(op, namespace) for op in schema.actions]
        catalog.functions = [self.build_operation(op, namespace) for op in schema.functions]
        return catalog

    def _build_properties(self, properties: list[RawProperty]) -> list[Property]:
        return [
            Property(
                name=prop.name,
                type=get_type(prop.type, self.diagnostics),
                nullable=_parse_nullable(prop.nullable) is not False,
            )
            for prop in properties
        ]

    def _build_entity_type(self, raw: RawEntityType, namespace: str) -> EntityType:
        full_name = f"{namespace}.{raw.name}"
        entity_type = EntityType(
            namespace=namespace,
            full_name=full_name,
            name=raw.name,
            properties=self._build_properties(raw.properties),
            base_type_full_name=raw.base_type or None,
            open_type=raw.open_type,
            abstract=raw.abstract,
        )

        # Composite keys are not supported: only the first key reference counts
        if raw.key_refs:
            key_name = raw.key_refs[0]
            if len(raw.key_refs) > 1:
                logger.debug("Composite key on %s, using %s", full_name, key_name)
            entity_type.key = next((p for p in entity_type.properties if p.name == key_name), None)
            if entity_type.key is None:
                raise KeyNotFound(full_name, key_name)

        # Navigation properties are always nullable
        entity_type.navigation_properties = [
            Property(name=nav.name, type=get_type(nav.type, self.diagnostics), nullable=True)
            for nav in raw.navigation_properties
        ]
        return entity_type

    def _build_complex_type(self, raw: RawComplexType, namespace: str) -> ComplexType:
        return ComplexType(
            namespace=namespace,
            full_name=f"{namespace}.{raw.name}",
            name=raw.name,
            properties=self._build_properties(raw.properties),
            base_type_full_name=raw.base_type or None,
            open_type=raw.open_type,
            abstract=raw.abstract,
        )

    def _build_enum_type(self, raw: RawEnumType, namespace: str) -> EnumType:
        return EnumType(
            name=raw.name,
            members=tuple(EnumMember(key=m.name, value=m.value) for m in raw.members),
            namespace=namespace,
            full_name=f"{namespace}.{raw.name}",
            underlying_type=raw.underlying_type or "Edm.Int32",
            is_flags=raw.is_flags,
        )

    def build_parameter(self, raw: RawParameter) -> Parameter:
        return Parameter(
            name=raw.name,
            type=get_type(raw.type, self.diagnostics),
            nullable=_parse_nullable(raw.nullable),
            unicode=raw.unicode,
            max_length=raw.max_length,
            precision=raw.precision,
            scale=raw.scale,
            srid=raw.srid,
        )

    def build_operation(self, raw: RawOperation, namespace: str) -> Operation:
        """Build an operation, classifying its binding from parameter 0."""
        parameters = [self.build_parameter(p) for p in raw.parameters]

        binding = BindingKind.UNBOUND
        bound_type = None
        if raw.is_bound:
            if parameters:
                binding_type = parameters[0].type
                binding = BindingKind.COLLECTION if binding_type.is_collection else BindingKind.INSTANCE
                bound_type = binding_type.qualified_name
            else:
                # No binding parameter to attach by; the binder reports it
                binding = BindingKind.INSTANCE

        return Operation(
            kind=raw.kind,
            name=raw.name,
            full_name=f"{namespace}.{raw.name}",
            binding=binding,
            bound_type=bound_type,
            parameters=parameters,
            return_type=get_type(raw.return_type, self.diagnostics) if raw.return_type else void_type(),
            is_composable=raw.is_composable,
        )
