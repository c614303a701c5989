"""RFC 7807 Problem Details schemas for non-GraphQL error responses."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_TITLES = {
    400: "Bad Request",
    404: "Not Found",
    405: "Method Not Allowed",
    422: "Unprocessable Entity",
    429: "Too Many Requests",
    500: "Internal Server Error",
    503: "Service Unavailable",
}


def default_title(status_code: int) -> str:
    return DEFAULT_TITLES.get(status_code, "Error")


class ProblemDetails(BaseModel):
    """RFC 7807 Problem Details for HTTP APIs.

    GraphQL errors travel in the response's ``errors`` array; this shape is
    only used for failures outside GraphQL execution (health checks, request
    validation, unexpected errors).

    See: https://datatracker.ietf.org/doc/html/rfc7807
    """

    type: str = Field(
        default="about:blank",
        min_length=1,
        max_length=200,
        description="URI reference identifying the problem type",
    )
    title: str = Field(
        min_length=1, max_length=200, description="Short, human-readable summary of the problem"
    )
    status: int = Field(ge=100, le=599, description="HTTP status code")
    detail: str | None = Field(
        default=None,
        max_length=2000,
        description="Human-readable explanation specific to this occurrence",
    )
    instance: str | None = Field(
        default=None,
        max_length=500,
        description="URI reference identifying the specific occurrence",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "type": "internal-error",
                "title": "Internal Server Error",
                "status": 500,
                "detail": "An unexpected error occurred while processing your request",
                "instance": "http://localhost:4000/health",
            }
        },
    )


class FieldError(BaseModel):
    """One failed field of a request validation."""

    field: str
    message: str
    type: str
    value: Any = None


class ValidationProblemDetails(ProblemDetails):
    """Problem details carrying per-field validation errors."""

    errors: list[FieldError] = Field(default_factory=list)


__all__ = [
    "FieldError",
    "ProblemDetails",
    "ValidationProblemDetails",
    "default_title",
]
