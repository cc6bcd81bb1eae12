"""
Pipeline entry point: metadata text in, resolved model out.
"""

from __future__ import annotations

from ..header import create_header
from .analyzer import ResolvedModel, ServiceAnalyzer
from .config import ResolverConfig
from .schema_ast import EdmxParser


class ModelGenerator:
    """Runs the parser and analyzer on one metadata document."""

    def __init__(self, metadata: str | bytes, config: ResolverConfig | None = None, command: str = ""):
        """
        Initialize the generator.

        Args:
            metadata: EDMX metadata document
            config: Resolution configuration, including the header options
            command: Command line recorded in the header
        """
        self.metadata = metadata
        self.config = config or ResolverConfig()
        self.command = command

    def generate(self) -> ResolvedModel:
        """
        Parse and resolve the metadata document.

        Returns:
            The resolved model, carrying the options header
        """
        service = EdmxParser().parse(self.metadata)
        header = create_header(self.config.settings, command=self.command)
        return ServiceAnalyzer(self.config).analyze(service, header=header)
