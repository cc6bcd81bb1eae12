"""
Configuration for the OData model pipeline.

GeneratorSettings are the options persisted in the header of generated
files; ResolverConfig controls how the analyzer treats diagnostics.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Modularity(str, Enum):
    """Output style requested from the code generation backend."""

    AMBIENT = "Ambient"  # Global declarations
    MODULAR = "Modular"  # One module per namespace


@dataclass
class GeneratorSettings:
    """Options embedded verbatim in the generated header."""

    # Address of the service metadata document
    source: str = ""

    # Ambient or modular output
    modularity: Modularity = Modularity.MODULAR

    # Transport options forwarded to the HTTP client
    request_options: dict = field(default_factory=dict)

    # Template used by the rendering backend
    use_template: str = ""

    @property
    def service_root(self) -> str:
        """The service address without the $metadata suffix."""
        root = self.source.replace("$metadata", "")
        return root[:-1] if root.endswith("/") else root

    @staticmethod
    def from_dict(d: dict) -> GeneratorSettings:
        """Create settings from a dictionary using persisted or Python keys."""
        settings = GeneratorSettings()
        aliases = {"requestOptions": "request_options", "useTemplate": "use_template"}
        for k, v in d.items():
            k = aliases.get(k, k)
            if k == "modularity":
                settings.modularity = Modularity(v)
            elif hasattr(settings, k) and k != "service_root":
                setattr(settings, k, v)
        return settings

    def to_dict(self) -> dict:
        """Convert settings to the persisted dictionary form."""
        return {
            "source": self.source,
            "modularity": self.modularity.value,
            "requestOptions": self.request_options,
            "useTemplate": self.use_template,
        }


@dataclass
class ResolverConfig:
    """Configuration options for resolution."""

    # Raise recorded diagnostics instead of skipping the offending item
    strict: bool = False

    # Options passed through to the header blob
    settings: GeneratorSettings = field(default_factory=GeneratorSettings)

    @staticmethod
    def from_dict(d: dict) -> ResolverConfig:
        """Create a config from a dictionary."""
        config = ResolverConfig()
        for k, v in d.items():
            if k == "settings" and isinstance(v, dict):
                config.settings = GeneratorSettings.from_dict(v)
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "strict": self.strict,
            "settings": self.settings.to_dict(),
        }
