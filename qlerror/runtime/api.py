"""
FastAPI query service.

Parses, validates and executes query documents against an in-memory root
value and serializes errors in the protocol's response shape.

Copyright (c) 2025 Graziano Labs Corp.
"""

import json
import logging
import os
from typing import Any, Dict, List, Optional, Tuple, Union

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from ..config import QLErrorConfig, get_default_config
from ..errors import ConfigError, QueryError, format_error
from ..language.parser import parse
from .executor import ExecutionResult, execute
from .validation import Schema, infer_schema, validate

logger = logging.getLogger(__name__)

app = FastAPI(title="qlerror Query Service", version="0.1")


class ErrorLocation(BaseModel):
    line: int
    column: int


class ErrorPayload(BaseModel):
    message: str
    locations: Optional[List[ErrorLocation]] = None
    path: Optional[List[Union[str, int]]] = None
    extensions: Optional[Dict[str, Any]] = None


class QueryRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    query: str
    operation_name: Optional[str] = Field(default=None, alias="operationName")


class QueryService:
    """
    Runs query documents against a root value.

    Each stage stops the pipeline on error: syntax errors and validation
    errors are reported without data, execution errors next to partial data.
    """

    def __init__(
        self,
        root_value: Any = None,
        schema: Optional[Schema] = None,
        config: Optional[QLErrorConfig] = None
    ):
        self.root_value = root_value if root_value is not None else {}
        self.schema = schema if schema is not None else infer_schema(self.root_value)
        self.config = config or get_default_config()

    def run(self, query: str, operation_name: Optional[str] = None) -> Tuple[int, Dict[str, Any]]:
        """
        Execute a query.

        Returns:
            (HTTP status, response body)
        """
        try:
            document = parse(query)
        except QueryError as e:
            return 400, {"errors": self.serialize_errors([e])}

        errors = validate(document, self.schema, self.config.max_errors)
        if errors:
            return 400, {"errors": self.serialize_errors(errors)}

        result = execute(document, self.root_value, operation_name)
        return 200, self.serialize_result(result)

    def serialize_result(self, result: ExecutionResult) -> Dict[str, Any]:
        body: Dict[str, Any] = {"data": result.data}
        if result.errors:
            body["errors"] = self.serialize_errors(result.errors)
        return body

    def serialize_errors(self, errors: List[QueryError]) -> List[Dict[str, Any]]:
        return [self.serialize_error(e) for e in errors[: self.config.max_errors]]

    def serialize_error(self, error: QueryError) -> Dict[str, Any]:
        out = format_error(error, include_extensions=self.config.include_extensions)
        original = error.original_error
        if self.config.mask_internal_errors and original is not None and not isinstance(original, QueryError):
            out["message"] = "Internal error"
        if self.config.dev_mode and error.trace is not None:
            ext = dict(out.get("extensions") or {})
            ext["exception"] = {"stacktrace": error.trace.format()}
            out["extensions"] = ext
        return ErrorPayload(**out).model_dump(exclude_none=True)


SERVICE: Optional[QueryService] = None


def get_service() -> QueryService:
    global SERVICE
    if SERVICE is None:
        SERVICE = QueryService(root_value=_load_root_value(os.getenv("QLERROR_DATA")))
    return SERVICE


def _load_root_value(path: Optional[str]) -> Any:
    if not path:
        return {}
    try:
        with open(path) as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(
            code="E003",
            message=f"Cannot load root value from {path}: {e}",
            hint="QLERROR_DATA must point to a JSON file",
        ) from e
    logger.info(f"Loaded root value from {path}")
    return data


@app.get("/healthz")
async def healthz():
    """
    Health check endpoint.

    Returns:
        Status info and the top-level fields available to queries
    """
    service = get_service()
    return {
        "status": "healthy",
        "fields": sorted(service.schema or {}),
    }


@app.post("/query")
async def run_query(req: QueryRequest):
    """
    Execute a query document.

    Returns:
        {"data": ..., "errors": [...]} with status 200, or {"errors": [...]}
        with status 400 for syntax and validation errors
    """
    status, body = get_service().run(req.query, req.operation_name)
    if status != 200:
        logger.info(f"Rejected query with {len(body['errors'])} error(s)")
    return JSONResponse(status_code=status, content=body)
