"""Shared response schemas."""

from __future__ import annotations

from .problem_details import FieldError, ProblemDetails, ValidationProblemDetails, default_title

__all__ = ["FieldError", "ProblemDetails", "ValidationProblemDetails", "default_title"]
