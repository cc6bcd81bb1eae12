"""
Utility functions for the OData model generator.
"""


def _split_qualified_name(name: str) -> tuple[list[str], str]:
    """Split a dotted name into its namespace segments and final segment."""
    segments = name.split(".")
    return segments[:-1], segments[-1]


def join_namespace(namespace: str) -> str:
    """Collapse a dotted namespace into a single identifier.

    Examples:
        "Company.Sales" -> "CompanySales"
        "Default" -> "Default"
    """
    return "".join(namespace.split("."))


def normalize_qualified_name(name: str) -> str:
    """Collapse the namespace part of a qualified type name.

    Generated identifiers may not contain dots, so every namespace segment
    is concatenated and only the dot before the type name survives.

    Examples:
        "Company.Sub.Order" -> "CompanySub.Order"
        "Orders.Order" -> "Orders.Order"
        "Edm.String" -> "Edm.String"
        "void" -> "void"

    Args:
        name: A namespace-qualified type name

    Returns:
        The name with exactly one dot, or the input if it had at most one
    """
    namespace_segments, type_name = _split_qualified_name(name)
    if len(namespace_segments) < 2:
        return name
    return f"{''.join(namespace_segments)}.{type_name}"
