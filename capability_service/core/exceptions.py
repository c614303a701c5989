"""Custom exception classes for the application."""

from __future__ import annotations

from typing import Any

from capability_service.core.schemas import default_title


class AppException(Exception):
    """Base application exception.

    All custom exceptions should inherit from this class.
    Follows RFC 7807 Problem Details for HTTP APIs.

    Attributes:
        status_code: HTTP status code for the error.
        detail: Human-readable error message.
        type: Error type identifier (used in RFC 7807 problem details).
        title: Short, human-readable summary of the problem type.
        instance: URI reference that identifies the specific occurrence of the problem.
        extra: Additional context-specific information about the error.
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        type: str = "about:blank",
        title: str | None = None,
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        self.status_code = status_code
        self.detail = detail
        self.type = type
        self.title = title or self._default_title(status_code)
        self.instance = instance
        self.extra = extra or {}
        super().__init__(detail)

    @staticmethod
    def _default_title(status_code: int) -> str:
        return default_title(status_code)


class RateLimitException(AppException):
    """Exception raised when a client exceeds a request-rate window.

    Example:
        raise RateLimitException(
            detail="Rate limit exceeded. Try again in 42 seconds.",
            window="minute",
            reset_in=42,
            extra={"limit": 100},
        )
    """

    def __init__(
        self,
        detail: str,
        *,
        window: str,
        reset_in: int,
        type: str = "rate-limit-exceeded",
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        """Initialize rate limit exception.

        Args:
            detail: Human-readable error message.
            window: Name of the window that was exceeded (``minute`` or ``hour``).
            reset_in: Whole seconds until the window resets.
            type: Error type identifier.
            instance: URI reference identifying this specific occurrence.
            extra: Additional context about the error.
        """
        self.window = window
        self.reset_in = reset_in
        super().__init__(
            status_code=429,
            detail=detail,
            type=type,
            title="Too Many Requests",
            instance=instance,
            extra={"window": window, "retry_after": reset_in, **(extra or {})},
        )
