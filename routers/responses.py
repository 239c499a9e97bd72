from __future__ import annotations

from typing import Any

from pydantic import BaseModel
from starlette.responses import JSONResponse

from services.transforms import TransformResult

INVALID_BODY_MESSAGE = "Invalid request body."


def as_response(result: TransformResult) -> JSONResponse:
    return JSONResponse(status_code=result.status_code, content=result.body)


def empty_body(response_model: type[BaseModel]) -> dict[str, Any]:
    """The wire shape of a response model with every field at its empty default."""
    return response_model().model_dump(by_alias=True, exclude_none=True)


def invalid_body(response_model: type[BaseModel]) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={**empty_body(response_model), "error": INVALID_BODY_MESSAGE},
    )
