"""
Analyzer module.

Contains type extraction, per-schema catalogs, inheritance resolution,
operation binding, container assembly and the resolved model nodes.
"""

from __future__ import annotations

from .analyzer import ServiceAnalyzer
from .ir_nodes import (
    ActionImport,
    BindingKind,
    ComplexType,
    EntityContainer,
    EntitySet,
    EntityType,
    EnumMember,
    EnumType,
    FunctionImport,
    NavigationPropertyBinding,
    Operation,
    Parameter,
    Property,
    ResolvedModel,
    Schema,
    Singleton,
    TypeDescriptor,
)
from .type_descriptor import get_type

__all__ = [
    "ActionImport",
    "BindingKind",
    "ComplexType",
    "EntityContainer",
    "EntitySet",
    "EntityType",
    "EnumMember",
    "EnumType",
    "FunctionImport",
    "NavigationPropertyBinding",
    "Operation",
    "Parameter",
    "Property",
    "ResolvedModel",
    "Schema",
    "ServiceAnalyzer",
    "Singleton",
    "TypeDescriptor",
    "get_type",
]
