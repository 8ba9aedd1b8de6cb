from .executor import ExecutionResult, execute, get_operation
from .validation import infer_schema, validate

__all__ = [
    "ExecutionResult",
    "execute",
    "get_operation",
    "infer_schema",
    "validate",
]
