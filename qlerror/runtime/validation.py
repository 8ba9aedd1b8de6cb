"""
Static validation of parsed query documents.

Rules:
- Fields sharing a response name must select the same field
- Argument names are unique per field
- Fields exist in the schema, leaves have no selection and objects have one

A schema is a nested mapping: field name -> sub-schema mapping for object
fields, or None for leaf fields.

Copyright (c) 2025 Graziano Labs Corp.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from ..errors import QueryError
from ..language.ast import Document, Field, SelectionSet

logger = logging.getLogger(__name__)

Schema = Mapping[str, Any]


def validate(
    document: Document,
    schema: Optional[Schema] = None,
    max_errors: Optional[int] = None
) -> List[QueryError]:
    """
    Validate a document, collecting every error found.

    Args:
        document: Parsed query document
        schema: Optional schema mapping; unknown-field checks are skipped without it
        max_errors: Stop collecting once this many errors were found

    Returns:
        List of QueryError (empty when the document is valid)
    """
    errors: List[QueryError] = []
    for op in document.definitions:
        _check_selection_set(op.selection_set, schema, op.operation, errors)
    if max_errors is not None and len(errors) > max_errors:
        errors = errors[:max_errors]
    logger.debug(f"Validation found {len(errors)} error(s)")
    return errors


def _check_selection_set(
    selection_set: SelectionSet,
    schema: Optional[Schema],
    parent: str,
    errors: List[QueryError]
) -> None:
    seen: Dict[str, Field] = {}
    for field in selection_set.selections:
        key = field.response_key
        first = seen.setdefault(key, field)
        if first is not field and first.name.value != field.name.value:
            errors.append(QueryError(
                f'Fields "{key}" conflict because "{first.name.value}" and '
                f'"{field.name.value}" are different fields.',
                [first, field],
            ))

        _check_arguments(field, errors)

        sub_schema = None
        if schema is not None:
            if field.name.value not in schema:
                errors.append(QueryError(
                    f'Cannot query field "{field.name.value}" on "{parent}".', field
                ))
                continue
            sub_schema = schema[field.name.value]
            if sub_schema is None and field.selection_set is not None:
                errors.append(QueryError(
                    f'Field "{field.name.value}" must not have a selection since it is a leaf.',
                    field.selection_set,
                ))
                continue
            if sub_schema is not None and field.selection_set is None:
                errors.append(QueryError(
                    f'Field "{field.name.value}" must have a selection of subfields.', field
                ))
                continue

        if field.selection_set is not None:
            _check_selection_set(field.selection_set, sub_schema, field.name.value, errors)


def _check_arguments(field: Field, errors: List[QueryError]) -> None:
    known = {}
    for arg in field.arguments:
        name = arg.name.value
        if name in known:
            errors.append(QueryError(
                f'There can be only one argument named "{name}".',
                [known[name].name, arg.name],
            ))
        else:
            known[name] = arg


def infer_schema(data: Any) -> Optional[Dict[str, Any]]:
    """
    Derive a schema mapping from sample data.

    Mappings become object fields, lists of mappings merge their items'
    fields, anything else is a leaf.
    """
    if isinstance(data, Mapping):
        return {key: infer_schema(value) for key, value in data.items()}
    if isinstance(data, list):
        merged: Dict[str, Any] = {}
        for item in data:
            sub = infer_schema(item)
            if sub is None:
                return None
            merged.update(sub)
        return merged or None
    return None
