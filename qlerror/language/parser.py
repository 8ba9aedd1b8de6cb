import json
import logging
from pathlib import Path
from typing import Optional, Union

from lark import Lark, Token, Transformer, v_args
from lark.exceptions import (
    UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, UnexpectedToken, VisitError,
)

from ..errors import QueryError, syntax_error
from .ast import (
    Argument, Document, Field, Location, Name, OperationDefinition, SelectionSet, Value,
)
from .source import Source

logger = logging.getLogger(__name__)

GRAMMAR_PATH = Path(__file__).resolve().parent / "grammar.lark"

_parser: Optional[Lark] = None

def _get_parser() -> Lark:
    global _parser
    if _parser is None:
        _parser = Lark(
            GRAMMAR_PATH.read_text(), start="start", parser="lalr", propagate_positions=True
        )
    return _parser

@v_args(meta=True)
class ToAST(Transformer):
    """Turn the lark parse tree into AST nodes spanning ``source``."""

    def __init__(self, source: Source):
        super().__init__()
        self.source = source

    def _loc(self, meta) -> Optional[Location]:
        if getattr(meta, "empty", True):
            return None
        return Location(meta.start_pos, meta.end_pos, self.source)

    def _name(self, tok: Optional[Token]) -> Optional[Name]:
        if tok is None:
            return None
        return Name(tok.value, loc=Location(tok.start_pos, tok.end_pos, self.source))

    def start(self, meta, items):
        return Document(definitions=list(items), loc=self._loc(meta))

    def operation(self, meta, items):
        if isinstance(items[0], Token) and items[0].type == "OPERATION_TYPE":
            op, name, sel = items[0].value, self._name(items[1]), items[2]
        else:
            op, name, sel = "query", None, items[0]
        return OperationDefinition(op, name, sel, loc=self._loc(meta))

    def selection_set(self, meta, items):
        return SelectionSet(selections=list(items), loc=self._loc(meta))

    def field(self, meta, items):
        alias, name, args, sel = items
        return Field(
            name=self._name(name),
            alias=alias,
            arguments=args or [],
            selection_set=sel,
            loc=self._loc(meta),
        )

    def alias(self, meta, items):
        return self._name(items[0])

    def arguments(self, meta, items):
        return list(items)

    def argument(self, meta, items):
        return Argument(self._name(items[0]), items[1], loc=self._loc(meta))

    def string_value(self, meta, items):
        tok = items[0]
        try:
            value = json.loads(tok.value)
        except ValueError as e:
            raise syntax_error(self.source, tok.start_pos, "Invalid string value.") from e
        return Value(value, loc=self._loc(meta))

    def number_value(self, meta, items):
        text = items[0].value
        num = float(text) if any(c in text for c in ".eE") else int(text)
        return Value(num, loc=self._loc(meta))

    def true_value(self, meta, items):
        return Value(True, loc=self._loc(meta))

    def false_value(self, meta, items):
        return Value(False, loc=self._loc(meta))

    def null_value(self, meta, items):
        return Value(None, loc=self._loc(meta))

    def list_value(self, meta, items):
        return Value([v.value for v in items], loc=self._loc(meta))

def _describe(err: UnexpectedInput) -> str:
    if isinstance(err, UnexpectedCharacters):
        return f"Unexpected character {err.char!r}."
    if isinstance(err, UnexpectedToken):
        if err.token.type == "$END":
            return "Unexpected <EOF>."
        return f"Unexpected {err.token.type} {err.token.value!r}."
    return "Unexpected <EOF>."

def _position(err: UnexpectedInput, source: Source) -> int:
    if isinstance(err, UnexpectedEOF):
        return len(source.body)
    if isinstance(err, UnexpectedToken) and err.token.type == "$END":
        return len(source.body)
    pos = getattr(err, "pos_in_stream", None)
    if pos is None or pos < 0:
        return len(source.body)
    return pos

def parse(source: Union[str, Source]) -> Document:
    """
    Parse a query document.

    Raises:
        QueryError: "Syntax Error: ..." located at the offending character
    """
    if isinstance(source, str):
        source = Source(source)
    try:
        tree = _get_parser().parse(source.body)
    except UnexpectedInput as e:
        err = syntax_error(source, _position(e, source), _describe(e))
        logger.debug(f"Parse failed for {source.name}: {err.message}")
        raise err from e
    try:
        return ToAST(source).transform(tree)
    except VisitError as e:
        if isinstance(e.orig_exc, QueryError):
            logger.debug(f"Parse failed for {source.name}: {e.orig_exc.message}")
            raise e.orig_exc from e.orig_exc.__cause__
        raise

def parse_file(path: str) -> Document:
    return parse(Source(Path(path).read_text(), name=path))
