"""
Query source documents.

Copyright (c) 2025 Graziano Labs Corp.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Source:
    """Text of a query document plus the name used when printing excerpts."""
    body: str
    name: str = "Query request"

    def __repr__(self) -> str:
        return f"<Source name={self.name!r}>"
