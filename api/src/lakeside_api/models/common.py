"""Error bodies produced by the API layer itself.

Domain failures render lakeside.models.ErrorResponse. The bodies here cover
what never reaches a service: requests FastAPI rejects before a route runs,
and unexpected exceptions. Both keep the same success/error_code/message/
recovery shape so clients handle every failure alike.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel, Field


class RequestFieldError(BaseModel):
    """One field FastAPI could not parse."""

    loc: list[str] = Field(
        ...,
        description="Where the value came from and its name",
        examples=[["query", "checkIn"]],
    )
    msg: str = Field(..., examples=["Input should be a valid date or datetime"])
    type: str = Field(..., examples=["date_from_datetime_parsing"])


class RequestValidationErrorResponse(BaseModel):
    """Body for HTTP 422 responses."""

    success: bool = False
    error_code: str = "ERR_VALIDATION"
    message: str = "Request validation failed"
    recovery: str = "Check the request body and query parameters and try again"
    details: list[RequestFieldError] = Field(default_factory=list)


class InternalErrorResponse(BaseModel):
    """Body for HTTP 500 responses; never carries exception detail."""

    success: bool = False
    error_code: str = "ERR_INTERNAL"
    message: str = "Internal server error"
    recovery: str = "Please try again later or contact the retreat directly"
    details: None = None


def request_validation_response(
    errors: Sequence[Mapping[str, Any]],
) -> RequestValidationErrorResponse:
    """Build a 422 body from FastAPI's RequestValidationError.errors()."""
    return RequestValidationErrorResponse(
        details=[
            RequestFieldError(
                loc=[str(part) for part in error.get("loc", ())],
                msg=error.get("msg", ""),
                type=error.get("type", ""),
            )
            for error in errors
        ]
    )
