"""
Offset to line/column resolution.

Copyright (c) 2025 Graziano Labs Corp.
"""

import re
from dataclasses import dataclass
from typing import Dict

from .source import Source

LINE_BREAK = re.compile(r"\r\n|[\n\r]")


@dataclass(frozen=True)
class SourceLocation:
    line: int
    column: int

    @property
    def formatted(self) -> Dict[str, int]:
        return {"line": self.line, "column": self.column}


def get_location(source: Source, position: int) -> SourceLocation:
    """
    Resolve a character offset in a source document to a 1-indexed location.

    Args:
        source: Document the offset points into
        position: Character offset from the start of the body

    Returns:
        SourceLocation with line and column
    """
    line = 1
    column = position + 1
    for match in LINE_BREAK.finditer(source.body):
        if match.start() >= position:
            break
        line += 1
        column = position + 1 - match.end()
    return SourceLocation(line=line, column=column)
