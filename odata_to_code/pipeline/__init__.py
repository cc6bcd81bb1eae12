"""
Pipeline - OData metadata to resolved model.

1. Phase 1 (Parser): Parse EDMX metadata into raw declarations
2. Phase 2 (Analyzer): Build catalogs, resolve inheritance, bind
   operations and assemble containers
3. Hand-off: The resolved model and options header go to a rendering backend
"""

from __future__ import annotations

from .config import GeneratorSettings, Modularity, ResolverConfig
from .generator import ModelGenerator

__all__ = [
    "ModelGenerator",
    "GeneratorSettings",
    "Modularity",
    "ResolverConfig",
]
