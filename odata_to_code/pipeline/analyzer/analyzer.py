"""
Service analyzer that transforms raw declarations to the resolved model.

Phase 2 of the pipeline. Every schema catalog is built before any
reference is resolved, so resolution never depends on schema order:

1. Build one catalog per schema
2. Concatenate catalogs into global type and operation catalogs
3. Resolve inheritance over all entity and complex types
4. Bind instance-bound operations to entity types
5. Assemble entity containers
6. Bind collection-bound operations to entity sets
"""

from __future__ import annotations

import logging

from ...errors import MissingEntityContainer
from ..config import ResolverConfig
from ..schema_ast.nodes import RawServiceDescription
from .catalog_builder import CatalogBuilder, SchemaCatalog
from .container_assembler import ContainerAssembler
from .diagnostics import Diagnostics
from .inheritance_resolver import InheritanceResolver
from .ir_nodes import (
    ComplexType,
    EntitySet,
    EntityType,
    Operation,
    ResolvedModel,
    Schema,
)
from .operation_binder import OperationBinder

logger = logging.getLogger(__name__)


class ServiceAnalyzer:
    """Analyzes a raw service description and builds the resolved model."""

    def __init__(self, config: ResolverConfig | None = None):
        """
        Initialize the analyzer.

        Args:
            config: Resolution configuration
        """
        self.config = config or ResolverConfig()

    def analyze(self, service: RawServiceDescription, header: str = "") -> ResolvedModel:
        """
        Resolve a raw service description.

        Each call builds its catalogs from scratch; the analyzer holds no
        state between runs.

        Args:
            service: The parsed metadata document
            header: Options header passed through to the model

        Returns:
            ResolvedModel with every reference resolved

        Raises:
            MissingEntityContainer: If the document declares no schema
            ODataModelError: For structural errors that abort the run
        """
        if not service.schemas:
            raise MissingEntityContainer("Could not find any entity container on OData Service")

        diagnostics = Diagnostics(strict=self.config.strict)
        builder = CatalogBuilder(diagnostics)

        # First pass: per-schema catalogs
        catalogs: list[SchemaCatalog] = [builder.build(schema) for schema in service.schemas]

        # Global catalogs, in encounter order
        all_entity_types: list[EntityType] = [t for c in catalogs for t in c.entity_types]
        all_complex: list[ComplexType] = [t for c in catalogs for t in c.complex_types]
        all_operations: list[Operation] = [op for c in catalogs for op in c.actions + c.functions]

        unbound_operations: dict[str, Operation] = {}
        for operation in all_operations:
            if not operation.is_bound:
                unbound_operations.setdefault(operation.full_name, operation)

        # Second pass: references across schemas
        InheritanceResolver(diagnostics).resolve(all_complex + all_entity_types)

        binder = OperationBinder(diagnostics)
        instance_bound = binder.bind_to_entity_types(all_operations, all_entity_types)

        assembler = ContainerAssembler({t.full_name: t for t in all_entity_types}, unbound_operations)
        model = ResolvedModel(header=header, unbound_operations=unbound_operations)
        all_entity_sets: list[EntitySet] = []
        for raw_schema, catalog in zip(service.schemas, catalogs):
            schema = Schema(
                namespace=catalog.namespace,
                complex_types=catalog.complex_types,
                entity_types=catalog.entity_types,
                enum_types=catalog.enum_types,
                actions=catalog.actions,
                functions=catalog.functions,
            )
            if raw_schema.entity_container is not None:
                schema.entity_container = assembler.assemble(raw_schema.entity_container, catalog.namespace)
                all_entity_sets.extend(schema.entity_container.entity_sets)
            model.schemas.append(schema)

        collection_bound = binder.bind_to_entity_sets(all_operations, all_entity_sets)

        model.diagnostics = diagnostics.errors
        logger.info(
            "Resolved %d schemas: %d entity types, %d complex types, %d operations "
            "(%d instance-bound, %d set attachments, %d diagnostics)",
            len(model.schemas),
            len(all_entity_types),
            len(all_complex),
            len(all_operations),
            instance_bound,
            collection_bound,
            len(diagnostics),
        )
        return model
