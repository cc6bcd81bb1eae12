"""
Attachment of bound operations to their owners.

Instance-bound operations go to the entity type named by their binding
parameter; collection-bound operations go to every entity set of that
type. The attached copies no longer carry the binding parameter.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import replace

from ...errors import KeyNotFound, UnknownEntityType
from .diagnostics import Diagnostics
from .ir_nodes import (
    BindingKind,
    EntitySet,
    EntityType,
    Operation,
    Parameter,
)

logger = logging.getLogger(__name__)


def _attach(owner: EntityType | EntitySet, operation: Operation) -> None:
    if operation.is_action:
        owner.actions.append(operation)
    else:
        owner.functions.append(operation)


def trim_binding_parameter(operation: Operation, key: Parameter | None = None) -> Operation:
    """
    Copy an operation without its binding parameter.

    Args:
        operation: A bound operation whose parameter 0 is the binding parameter
        key: Parameter to put in its place, for instance-bound operations

    Returns:
        A new Operation; the input is left untouched
    """
    parameters = list(operation.parameters[1:])
    if key is not None:
        parameters.insert(0, key)
    return replace(operation, parameters=parameters)


class OperationBinder:
    """Binds operations in two phases: entity types, then entity sets."""

    def __init__(self, diagnostics: Diagnostics):
        self.diagnostics = diagnostics

    def bind_to_entity_types(self, operations: Iterable[Operation], entity_types: Sequence[EntityType]) -> int:
        """
        Attach instance-bound operations to their entity types.

        Args:
            operations: All actions and functions of every schema
            entity_types: All entity types of every schema

        Returns:
            Number of operations attached
        """
        by_name = {t.full_name: t for t in entity_types}
        attached = 0
        for operation in operations:
            if operation.binding is not BindingKind.INSTANCE:
                continue
            owner = by_name.get(operation.bound_type) if operation.bound_type else None
            if owner is None:
                self._dangling(operation)
                continue

            key = owner.effective_key()
            if key is None:
                self.diagnostics.record(KeyNotFound(owner.full_name, None))
                continue

            key_parameter = Parameter(name=key.name, type=key.type, nullable=False)
            _attach(owner, trim_binding_parameter(operation, key_parameter))
            logger.debug("Bound %s %s to %s", operation.kind.value, operation.name, owner.full_name)
            attached += 1
        return attached

    def bind_to_entity_sets(self, operations: Iterable[Operation], entity_sets: Sequence[EntitySet]) -> int:
        """
        Attach collection-bound operations to every entity set of their type.

        Args:
            operations: All actions and functions of every schema
            entity_sets: All entity sets of every container

        Returns:
            Number of attachments made
        """
        attached = 0
        for operation in operations:
            if operation.binding is not BindingKind.COLLECTION:
                continue
            owners = [s for s in entity_sets if s.entity_type is not None and s.entity_type.full_name == operation.bound_type]
            if not owners:
                self._dangling(operation)
                continue
            for entity_set in owners:
                _attach(entity_set, trim_binding_parameter(operation))
                logger.debug("Bound %s %s to set %s", operation.kind.value, operation.name, entity_set.full_name)
                attached += 1
        return attached

    def _dangling(self, operation: Operation) -> None:
        self.diagnostics.record(UnknownEntityType(operation.bound_type or "", operation.full_name, "unknown binding"))
