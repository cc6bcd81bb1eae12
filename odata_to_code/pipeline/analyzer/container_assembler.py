"""
Entity container assembly.
"""

from __future__ import annotations

import logging

from ...errors import UnknownEntityType, UnknownOperation
from ..schema_ast.nodes import OperationKind, RawEntityContainer, RawNavigationPropertyBinding
from .ir_nodes import (
    ActionImport,
    EntityContainer,
    EntitySet,
    EntityType,
    FunctionImport,
    NavigationPropertyBinding,
    Operation,
    Singleton,
)

logger = logging.getLogger(__name__)


def _bindings(raw: list[RawNavigationPropertyBinding]) -> list[NavigationPropertyBinding]:
    return [NavigationPropertyBinding(path=b.path, target=b.target) for b in raw]


class ContainerAssembler:
    """Builds an EntityContainer against the global catalogs."""

    def __init__(self, entity_types: dict[str, EntityType], unbound_operations: dict[str, Operation]):
        """
        Initialize the assembler.

        Args:
            entity_types: Every entity type of every schema, by full name
            unbound_operations: Every unbound action and function, by full name
        """
        self.entity_types = entity_types
        self.unbound_operations = unbound_operations

    def assemble(self, raw: RawEntityContainer, namespace: str) -> EntityContainer:
        """
        Build the container of one schema.

        Entity sets start without operations; collection-bound operations
        are attached afterwards by the OperationBinder.

        Raises:
            UnknownEntityType: If a set or singleton names no entity type
            UnknownOperation: If an import names no unbound operation
        """
        container = EntityContainer(
            namespace=namespace,
            name=raw.name,
            full_name=f"{namespace}.{raw.name}",
        )

        for raw_set in raw.entity_sets:
            container.entity_sets.append(
                EntitySet(
                    name=raw_set.name,
                    full_name=f"{namespace}.{raw_set.name}",
                    namespace=namespace,
                    entity_type=self._entity_type(raw_set.entity_type, f"{container.full_name}/{raw_set.name}"),
                    navigation_property_bindings=_bindings(raw_set.navigation_property_bindings),
                )
            )

        for raw_singleton in raw.singletons:
            container.singletons.append(
                Singleton(
                    name=raw_singleton.name,
                    full_name=f"{namespace}.{raw_singleton.name}",
                    entity_type=self._entity_type(raw_singleton.type, f"{container.full_name}/{raw_singleton.name}"),
                    navigation_property_bindings=_bindings(raw_singleton.navigation_property_bindings),
                )
            )

        for fi in raw.function_imports:
            container.function_imports.append(
                FunctionImport(
                    name=fi.name,
                    function=self._operation(fi.function, OperationKind.FUNCTION, f"{container.full_name}/{fi.name}"),
                    entity_set=self._target_set(container, fi.entity_set),
                    include_in_service_document=fi.include_in_service_document,
                )
            )

        for ai in raw.action_imports:
            container.action_imports.append(
                ActionImport(
                    name=ai.name,
                    action=self._operation(ai.action, OperationKind.ACTION, f"{container.full_name}/{ai.name}"),
                    entity_set=self._target_set(container, ai.entity_set),
                )
            )

        logger.debug(
            "Assembled %s: %d sets, %d singletons, %d imports",
            container.full_name,
            len(container.entity_sets),
            len(container.singletons),
            len(container.function_imports) + len(container.action_imports),
        )
        return container

    def _entity_type(self, full_name: str, referenced_by: str) -> EntityType:
        entity_type = self.entity_types.get(full_name)
        if entity_type is None:
            raise UnknownEntityType(full_name, referenced_by)
        return entity_type

    def _operation(self, full_name: str, kind: OperationKind, referenced_by: str) -> Operation:
        operation = self.unbound_operations.get(full_name)
        if operation is None or operation.kind is not kind:
            raise UnknownOperation(full_name, referenced_by)
        return operation

    @staticmethod
    def _target_set(container: EntityContainer, path: str | None) -> EntitySet | None:
        if not path:
            return None
        # The target may be a path such as "Container/Set"
        return container.entity_set(path.rsplit("/", 1)[-1])
