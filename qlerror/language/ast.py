from dataclasses import dataclass, field
from typing import List, Optional, Any

from .source import Source

@dataclass(frozen=True)
class Location:
    """Span of a node: character offsets into the source it was parsed from."""
    start: int
    end: int
    source: Source

@dataclass
class Node:
    loc: Optional[Location] = field(default=None, kw_only=True, repr=False, compare=False)

@dataclass
class Name(Node):
    value: str

@dataclass
class Value(Node):
    value: Any

@dataclass
class Argument(Node):
    name: Name
    value: Value

@dataclass
class Field(Node):
    name: Name
    alias: Optional[Name] = None
    arguments: List[Argument] = field(default_factory=list)
    selection_set: Optional["SelectionSet"] = None

    @property
    def response_key(self) -> str:
        return self.alias.value if self.alias else self.name.value

@dataclass
class SelectionSet(Node):
    selections: List[Field] = field(default_factory=list)

@dataclass
class OperationDefinition(Node):
    operation: str  # "query" | "mutation"
    name: Optional[Name]
    selection_set: SelectionSet

@dataclass
class Document(Node):
    definitions: List[OperationDefinition] = field(default_factory=list)
