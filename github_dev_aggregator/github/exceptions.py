"""Typed failures raised by the upstream GitHub client."""

from datetime import datetime


class UpstreamError(Exception):
    """Base class for every classified GitHub API failure."""

    error_tag = "unexpected"
    status_code = 500

    def __init__(self, message: str) -> None:
        """Initialize the error with a human-readable message."""
        super().__init__(message)
        self.message = message


class NotFoundError(UpstreamError):
    """Raised when the requested account or resource does not exist."""

    error_tag = "not_found"
    status_code = 404


class RateLimitedError(UpstreamError):
    """Raised when GitHub refuses a call because the rate budget is spent."""

    error_tag = "rate_limited"
    status_code = 429

    def __init__(self, message: str, reset_at: datetime | None = None, remaining: int | None = None) -> None:
        """Initialize the error with the time the budget resets, if known."""
        super().__init__(message)
        self.reset_at = reset_at
        self.remaining = remaining


class BudgetExhaustedError(RateLimitedError):
    """Raised when the remaining budget is too low to start a gated operation."""

    error_tag = "budget_exhausted"


class UpstreamUnavailableError(UpstreamError):
    """Raised on GitHub 5xx responses and network-level failures."""

    error_tag = "upstream_unavailable"
    status_code = 502


class UnexpectedUpstreamError(UpstreamError):
    """Raised for any other unsuccessful GitHub response."""

    error_tag = "unexpected"
    status_code = 500

    def __init__(self, message: str, upstream_status_code: int | None = None) -> None:
        """Initialize the error with the upstream HTTP status, if any."""
        super().__init__(message)
        self.upstream_status_code = upstream_status_code
