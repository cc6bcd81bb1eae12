"""
Type descriptor extraction from raw type strings.
"""

from __future__ import annotations

import re

from ...errors import MalformedTypeString
from ...utils import normalize_qualified_name
from .diagnostics import Diagnostics
from .ir_nodes import VOID, TypeDescriptor

_COLLECTION_PATTERN = re.compile(r"^Collection\((.+)\)$")
_COLLECTION_PREFIX = "Collection("


def _is_balanced(text: str) -> bool:
    depth = 0
    for ch in text:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth < 0:
                return False
    return depth == 0


def get_type(type_string: str, diagnostics: Diagnostics | None = None) -> TypeDescriptor:
    """
    Parse a raw type string into a TypeDescriptor.

    "Collection(NS.Order)" yields a collection descriptor for "NS.Order".
    A string that starts like a collection but has unbalanced parentheses
    is treated as a plain type name and reported as MalformedTypeString.

    Args:
        type_string: The Type attribute value
        diagnostics: Where to report malformed collection syntax

    Returns:
        The parsed TypeDescriptor
    """
    match = _COLLECTION_PATTERN.match(type_string)
    if match and _is_balanced(match.group(1)):
        qualified_name = match.group(1)
        is_collection = True
    else:
        if type_string.startswith(_COLLECTION_PREFIX) and diagnostics is not None:
            diagnostics.record(MalformedTypeString(type_string))
        qualified_name = type_string
        is_collection = False

    return TypeDescriptor(
        name=normalize_qualified_name(qualified_name),
        qualified_name=qualified_name,
        is_collection=is_collection,
        is_void=qualified_name == VOID,
    )


def void_type() -> TypeDescriptor:
    """The return type of operations without a ReturnType."""
    return TypeDescriptor(name=VOID, qualified_name=VOID, is_collection=False, is_void=True)
