"""
Query language primitives: source documents, syntax nodes and locations.

The parser lives in ``qlerror.language.parser``; it is not imported here
because it depends on ``qlerror.errors``.
"""

from .source import Source
from .location import SourceLocation, get_location
from .ast import (
    Location,
    Node,
    Name,
    Value,
    Argument,
    Field,
    SelectionSet,
    OperationDefinition,
    Document,
)

__all__ = [
    "Source",
    "SourceLocation",
    "get_location",
    "Location",
    "Node",
    "Name",
    "Value",
    "Argument",
    "Field",
    "SelectionSet",
    "OperationDefinition",
    "Document",
]
