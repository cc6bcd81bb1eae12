"""
Error taxonomy for OData metadata resolution.

Errors about a single type or operation are usually recorded as
diagnostics on the resolved model; errors about missing top-level
structure are raised immediately.
"""

from __future__ import annotations


class ODataModelError(Exception):
    """Base class for every error raised or recorded during resolution."""

    pass


class InvalidMetadataError(ODataModelError):
    """Raised when a document is not EDMX metadata at all."""

    pass


class MalformedTypeString(ODataModelError):
    """A type string looks like a collection but has unbalanced parentheses."""

    def __init__(self, type_string: str):
        super().__init__(f"Malformed collection type string: {type_string!r}")
        self.type_string = type_string


class KeyNotFound(ODataModelError):
    """The declared key of an entity type is not one of its properties.

    Also recorded when an instance-bound operation targets an entity type
    with no key anywhere on its base chain.
    """

    def __init__(self, type_name: str, key_name: str | None):
        if key_name is None:
            message = f"Entity type {type_name} has no key"
        else:
            message = f"Key {key_name!r} is not a property of entity type {type_name}"
        super().__init__(message)
        self.type_name = type_name
        self.key_name = key_name


class CyclicInheritance(ODataModelError):
    """A base type chain loops back on itself."""

    def __init__(self, type_name: str, chain: list[str]):
        super().__init__(f"Cyclic inheritance for {type_name}: {' -> '.join(chain)}")
        self.type_name = type_name
        self.chain = chain


class UnknownEntityType(ODataModelError):
    """A type reference names no type in the global catalog."""

    def __init__(self, type_name: str, referenced_by: str, detail: str = "unknown"):
        super().__init__(f"{detail.capitalize()} type {type_name!r} referenced by {referenced_by}")
        self.type_name = type_name
        self.referenced_by = referenced_by


class UnknownOperation(ODataModelError):
    """An import names no unbound action or function."""

    def __init__(self, operation_name: str, referenced_by: str):
        super().__init__(f"Unknown operation {operation_name!r} referenced by {referenced_by}")
        self.operation_name = operation_name
        self.referenced_by = referenced_by


class MissingEntityContainer(ODataModelError):
    """No schemas at all, or a schema without the container a consumer needs."""

    pass
