"""
Schema AST module.

Contains the raw declaration nodes and the EDMX parser that builds them.
"""

from __future__ import annotations

from .nodes import (
    OperationKind,
    RawActionImport,
    RawComplexType,
    RawEntityContainer,
    RawEntitySet,
    RawEntityType,
    RawEnumMember,
    RawEnumType,
    RawFunctionImport,
    RawNavigationProperty,
    RawNavigationPropertyBinding,
    RawOperation,
    RawParameter,
    RawProperty,
    RawSchema,
    RawServiceDescription,
    RawSingleton,
)
from .parser import EdmxParser

__all__ = [
    "OperationKind",
    "RawActionImport",
    "RawComplexType",
    "RawEntityContainer",
    "RawEntitySet",
    "RawEntityType",
    "RawEnumMember",
    "RawEnumType",
    "RawFunctionImport",
    "RawNavigationProperty",
    "RawNavigationPropertyBinding",
    "RawOperation",
    "RawParameter",
    "RawProperty",
    "RawSchema",
    "RawServiceDescription",
    "RawSingleton",
    "EdmxParser",
]
