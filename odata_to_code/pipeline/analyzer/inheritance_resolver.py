"""
Inheritance resolution across all schemas.

Runs once every schema catalog exists, so a base type declared in a
schema processed later is still found.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ...errors import CyclicInheritance, UnknownEntityType
from .diagnostics import Diagnostics
from .ir_nodes import ComplexType

logger = logging.getLogger(__name__)


class InheritanceResolver:
    """Links each type to its base type by full name."""

    def __init__(self, diagnostics: Diagnostics):
        self.diagnostics = diagnostics

    def resolve(self, types: Sequence[ComplexType]) -> None:
        """
        Set base_type on every type that declares a base type name.

        Args:
            types: Every entity and complex type of every schema

        Raises:
            CyclicInheritance: If a base type chain loops
        """
        index: dict[str, list[ComplexType]] = {}
        for t in types:
            index.setdefault(t.full_name, []).append(t)

        for t in types:
            if t.base_type_full_name is None:
                continue
            candidates = index.get(t.base_type_full_name, [])
            if len(candidates) == 1:
                t.base_type = candidates[0]
                logger.debug("%s inherits from %s", t.full_name, t.base_type_full_name)
            elif not candidates:
                self.diagnostics.record(UnknownEntityType(t.base_type_full_name, t.full_name, "unknown base"))
            else:
                self.diagnostics.record(UnknownEntityType(t.base_type_full_name, t.full_name, "ambiguous base"))

        self._check_cycles(types)

    def _check_cycles(self, types: Sequence[ComplexType]) -> None:
        bound = len(types)
        for t in types:
            chain = [t.full_name]
            visited = {id(t)}
            current = t.base_type
            while current is not None:
                chain.append(current.full_name)
                if id(current) in visited or len(chain) > bound + 1:
                    raise CyclicInheritance(t.full_name, chain)
                visited.add(id(current))
                current = current.base_type
