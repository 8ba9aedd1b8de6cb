"""
Query execution against an in-memory root value.

Fields are looked up on mappings by key and on other objects by attribute.
Callable values are invoked with the field's arguments as keyword arguments.
An exception raised while resolving a field is wrapped with located_error,
recorded with the field's response path, and the field resolves to None.

Copyright (c) 2025 Graziano Labs Corp.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..errors import QueryError, PathSegment, located_error
from ..language.ast import Document, Field, OperationDefinition, SelectionSet

logger = logging.getLogger(__name__)


@dataclass
class ExecutionResult:
    data: Optional[Dict[str, Any]] = None
    errors: List[QueryError] = field(default_factory=list)


def get_operation(document: Document, operation_name: Optional[str] = None) -> OperationDefinition:
    """
    Select the operation to run.

    Raises:
        QueryError: If the name is unknown, or several operations exist and no name was given
    """
    ops = document.definitions
    if operation_name is None:
        if len(ops) != 1:
            raise QueryError(
                "Must provide operation name if query contains multiple operations.",
                [op for op in ops if op.name is not None] or None,
            )
        return ops[0]
    for op in ops:
        if op.name is not None and op.name.value == operation_name:
            return op
    raise QueryError(f'Unknown operation named "{operation_name}".')


def execute(
    document: Document,
    root_value: Any,
    operation_name: Optional[str] = None
) -> ExecutionResult:
    """
    Execute a document.

    Args:
        document: Parsed (and normally validated) document
        root_value: Mapping or object the top-level fields resolve against
        operation_name: Operation to run when the document has several

    Returns:
        ExecutionResult with data (None if no operation could be run) and errors
    """
    try:
        op = get_operation(document, operation_name)
    except QueryError as e:
        return ExecutionResult(data=None, errors=[e])

    errors: List[QueryError] = []
    data = _execute_selection_set(op.selection_set, root_value, [], errors)
    if errors:
        logger.debug(f"Execution finished with {len(errors)} error(s)")
    return ExecutionResult(data=data, errors=errors)


def _resolve(parent: Any, fld: Field) -> Any:
    name = fld.name.value
    if isinstance(parent, Mapping):
        value = parent.get(name)
    else:
        value = getattr(parent, name, None)
    if callable(value):
        kwargs = {arg.name.value: arg.value.value for arg in fld.arguments}
        value = value(**kwargs)
    return value


def _execute_selection_set(
    selection_set: SelectionSet,
    parent: Any,
    path: List[PathSegment],
    errors: List[QueryError]
) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for fld in selection_set.selections:
        key = fld.response_key
        field_path = path + [key]
        try:
            value = _resolve(parent, fld)
        except Exception as e:
            logger.warning(f"Resolver for {'.'.join(map(str, field_path))} raised {type(e).__name__}")
            errors.append(located_error(e, fld, field_path))
            out[key] = None
            continue
        out[key] = _complete_value(fld, value, field_path, errors)
    return out


def _complete_value(
    fld: Field,
    value: Any,
    path: List[PathSegment],
    errors: List[QueryError]
) -> Any:
    if value is None or fld.selection_set is None:
        return value
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        return [
            _complete_value(fld, item, path + [index], errors)
            for index, item in enumerate(value)
        ]
    return _execute_selection_set(fld.selection_set, value, path, errors)
