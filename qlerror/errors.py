"""
Error values for query documents.

QueryError is the single diagnostic value raised during the parse, validate
and execute phases. Besides a message it carries the locations in the query
document and the path into the response that correspond to the failure.

Only ``message``, ``locations`` and ``path`` belong to the serialized error
shape; the remaining fields stay readable for calling code but are never
part of ``to_dict()``.

Package error taxonomy (operational failures, not query diagnostics):
- E001-E099: Configuration errors

Copyright (c) 2025 Graziano Labs Corp.
"""

import logging
import traceback
from typing import Any, Dict, List, Optional, Sequence, Union

from .language.ast import Node
from .language.location import SourceLocation, get_location
from .language.printer import print_error
from .language.source import Source

logger = logging.getLogger(__name__)

PathSegment = Union[str, int]


class QLError(Exception):
    """Base class for operational errors of the qlerror package."""

    def __init__(
        self,
        code: str,
        message: str,
        hint: Optional[str] = None
    ):
        """
        Initialize operational error.

        Args:
            code: Error code (e.g., "E001")
            message: Human-readable error message
            hint: Optional suggestion for fixing the error
        """
        self.code = code
        self.message = message
        self.hint = hint
        super().__init__(f"[{code}] {message}")


class ConfigError(QLError):
    """Invalid configuration (E001-E099)."""
    pass


def _node_list(nodes) -> Optional[List[Node]]:
    if isinstance(nodes, Sequence) and not isinstance(nodes, (str, bytes)):
        return list(nodes) if nodes else None
    if nodes is not None:
        return [nodes]
    return None


def _span(node):
    loc = getattr(node, "loc", None)
    if loc is None or getattr(loc, "source", None) is None:
        return None
    return loc


def _trace_capture_enabled() -> bool:
    from .config import get_default_config
    try:
        return get_default_config().capture_trace
    except ConfigError as e:
        logger.debug(f"Using trace capture default: {e}")
        return True


def _capture_trace(original_error: Optional[BaseException]) -> Optional[traceback.StackSummary]:
    if isinstance(original_error, QueryError) and original_error.trace is not None:
        return original_error.trace
    tb = getattr(original_error, "__traceback__", None)
    if tb is not None:
        return traceback.extract_tb(tb)
    if not _trace_capture_enabled():
        return None
    try:
        # drop this helper and QueryError.__init__
        return traceback.StackSummary.from_list(traceback.extract_stack()[:-2])
    except Exception as e:
        logger.debug(f"Trace capture unavailable: {e}")
        return None


class QueryError(Exception):
    """
    A diagnosable failure found while processing a query document.

    Construction never fails: every optional input that is missing, empty or
    malformed degrades to an absent (None) field.

    Args:
        message: Description of the error
        nodes: One node or a sequence of nodes the error refers to
        source: Source document; overrides the one attached to the nodes
        positions: Character offsets into ``source``
        path: Path into the response (field names and list indices)
        original_error: Exception this error wraps
        extensions: Free-form data surfaced to clients next to the error
    """

    name = "QueryError"

    message: str
    """Description of the error. Writable, but treat it as read-only."""

    def __init__(
        self,
        message: str,
        nodes: Union[Sequence[Node], Node, None] = None,
        source: Optional[Source] = None,
        positions: Optional[Sequence[int]] = None,
        path: Optional[Sequence[PathSegment]] = None,
        original_error: Optional[BaseException] = None,
        extensions: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message

        _nodes = _node_list(nodes)
        explicit_positions = list(positions) if positions else None
        _positions = explicit_positions

        # Source comes from the first node that has a span
        _source = source
        if _source is None and _nodes:
            _source = next(
                (_span(n).source for n in _nodes if _span(n) is not None), None
            )

        if _positions is None and _nodes:
            _positions = [_span(n).start for n in _nodes if _span(n) is not None] or None

        _locations: Optional[List[SourceLocation]] = None
        if explicit_positions and source is not None:
            _locations = [get_location(source, pos) for pos in explicit_positions]
        elif _nodes:
            _locations = [
                get_location(_span(n).source, _span(n).start)
                for n in _nodes
                if _span(n) is not None
            ] or None

        if extensions is None and original_error is not None:
            extensions = getattr(original_error, "extensions", None)

        self._locations = _locations
        self._path = list(path) if path is not None else None
        self._nodes = _nodes
        self._source = _source
        self._positions = _positions
        self._original_error = original_error
        self._extensions = extensions
        self._trace = _capture_trace(original_error)

        original_tb = getattr(original_error, "__traceback__", None)
        if original_tb is not None:
            self.__traceback__ = original_tb

    @property
    def locations(self) -> Optional[List[SourceLocation]]:
        """Line/column pairs in the query document that correspond to this error."""
        return self._locations

    @property
    def path(self) -> Optional[List[PathSegment]]:
        """Path into the execution response. Only set for execution errors."""
        return self._path

    @property
    def nodes(self) -> Optional[List[Node]]:
        return self._nodes

    @property
    def source(self) -> Optional[Source]:
        """
        Source document of the first located node.

        If the error refers to several nodes from different documents, this
        does not describe the nodes after the first one.
        """
        return self._source

    @property
    def positions(self) -> Optional[List[int]]:
        return self._positions

    @property
    def original_error(self) -> Optional[BaseException]:
        return self._original_error

    @property
    def extensions(self) -> Optional[Dict[str, Any]]:
        return self._extensions

    @property
    def trace(self) -> Optional[traceback.StackSummary]:
        return self._trace

    def to_dict(self) -> Dict[str, Any]:
        """Serialized error shape: message, plus locations and path when present."""
        out: Dict[str, Any] = {"message": self.message}
        if self._locations is not None:
            out["locations"] = [loc.formatted for loc in self._locations]
        if self._path is not None:
            out["path"] = list(self._path)
        return out

    @property
    def formatted(self) -> Dict[str, Any]:
        return self.to_dict()

    def __str__(self) -> str:
        return print_error(self)

    def __repr__(self) -> str:
        args = [repr(self.message)]
        if self._locations:
            args.append(f"locations={[loc.formatted for loc in self._locations]!r}")
        if self._path:
            args.append(f"path={self._path!r}")
        return f"{self.name}({', '.join(args)})"


def json_default(obj):
    """``default=`` hook for json.dumps that emits the serialized error shape."""
    if isinstance(obj, QueryError):
        return obj.to_dict()
    if isinstance(obj, SourceLocation):
        return obj.formatted
    raise TypeError(f"Object of type {obj.__class__.__name__} is not JSON serializable")


def format_error(error: QueryError, include_extensions: bool = True) -> Dict[str, Any]:
    """
    Response view of an error: the serialized shape plus ``extensions``.

    Raises:
        TypeError: If ``error`` is not a QueryError
    """
    if not isinstance(error, QueryError):
        raise TypeError(f"Expected a QueryError, got {type(error).__name__}")
    out = error.to_dict()
    if include_extensions and error.extensions is not None:
        out["extensions"] = error.extensions
    return out


def syntax_error(source: Source, position: int, description: str) -> QueryError:
    """Error for a document that could not be parsed."""
    return QueryError(
        f"Syntax Error: {description}", source=source, positions=[position]
    )


def located_error(
    original_error: Any,
    nodes: Union[Sequence[Node], Node, None] = None,
    path: Optional[Sequence[PathSegment]] = None,
) -> QueryError:
    """
    Wrap an exception raised while executing a query into a QueryError.

    An existing QueryError that already has a path is returned unchanged.
    Otherwise message, source, positions and nodes are carried over from the
    original error when it has them.
    """
    if not isinstance(original_error, Exception):
        original_error = TypeError(f"Unexpected error value: {original_error!r}")
    if isinstance(original_error, QueryError) and original_error.path is not None:
        return original_error

    message = getattr(original_error, "message", None)
    if not isinstance(message, str):
        message = str(original_error)
    source = getattr(original_error, "source", None)
    positions = getattr(original_error, "positions", None)
    nodes = getattr(original_error, "nodes", None) or nodes
    return QueryError(message, nodes, source, positions, path, original_error)
