"""OData Metadata to Code Model

A Python package that resolves OData CSDL metadata into a linked,
strongly-typed model for code generation backends.
"""

__version__ = "1.0.0"

from .errors import (
    CyclicInheritance,
    InvalidMetadataError,
    KeyNotFound,
    MalformedTypeString,
    MissingEntityContainer,
    ODataModelError,
    UnknownEntityType,
    UnknownOperation,
)
from .pipeline import GeneratorSettings, ModelGenerator, Modularity, ResolverConfig

__all__ = [
    "ModelGenerator",
    "GeneratorSettings",
    "Modularity",
    "ResolverConfig",
    "ODataModelError",
    "InvalidMetadataError",
    "MalformedTypeString",
    "KeyNotFound",
    "CyclicInheritance",
    "UnknownEntityType",
    "UnknownOperation",
    "MissingEntityContainer",
]
