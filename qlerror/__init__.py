"""
qlerror - diagnostic errors for query documents.

QueryError carries the message, document locations and response path of a
failure found while parsing, validating or executing a query, and keeps the
syntax nodes, source, offsets, wrapped error, extensions and trace available
to calling code without putting them in the serialized error shape.
"""

from .errors import (
    QueryError,
    QLError,
    ConfigError,
    format_error,
    json_default,
    located_error,
    syntax_error,
)
from .language import Source, SourceLocation, get_location
from .language.printer import print_error

__all__ = [
    "QueryError",
    "QLError",
    "ConfigError",
    "format_error",
    "json_default",
    "located_error",
    "syntax_error",
    "Source",
    "SourceLocation",
    "get_location",
    "print_error",
]
