"""
Human-readable rendering of query errors.

Copyright (c) 2025 Graziano Labs Corp.
"""

from typing import List, Optional, Tuple

from .location import LINE_BREAK, SourceLocation, get_location
from .source import Source


def print_error(error) -> str:
    """
    Render an error with an excerpt of the source around each location.

    Nodes with a span are printed against their own source document. Without
    nodes, the error's locations are printed against ``error.source``.
    """
    parts = [error.message]
    if error.nodes:
        for node in error.nodes:
            loc = getattr(node, "loc", None)
            if loc is not None and getattr(loc, "source", None) is not None:
                parts.append(
                    highlight_source_at_location(
                        loc.source, get_location(loc.source, loc.start)
                    )
                )
    elif error.source is not None and error.locations:
        for location in error.locations:
            parts.append(highlight_source_at_location(error.source, location))
    return "\n\n".join(parts)


def highlight_source_at_location(source: Source, location: SourceLocation) -> str:
    """Source name, position and the numbered lines around it with a caret."""
    line_num = location.line
    lines = LINE_BREAK.split(source.body)
    idx = line_num - 1

    def _line(i: int) -> Optional[str]:
        return lines[i] if 0 <= i < len(lines) else None

    excerpt = _print_prefixed_lines([
        (f"{line_num - 1}: ", _line(idx - 1)),
        (f"{line_num}: ", _line(idx)),
        ("", " " * (location.column - 1) + "^"),
        (f"{line_num + 1}: ", _line(idx + 1)),
    ])
    return f"{source.name} ({line_num}:{location.column})\n{excerpt}"


def _print_prefixed_lines(lines: List[Tuple[str, Optional[str]]]) -> str:
    existing = [(prefix, line) for prefix, line in lines if line is not None]
    pad_len = max(len(prefix) for prefix, _ in existing)
    return "\n".join(prefix.rjust(pad_len) + line for prefix, line in existing)
