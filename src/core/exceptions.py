"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"

    # Not found errors (404)
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    DRAFT_NOT_FOUND = "DRAFT_NOT_FOUND"
    THEME_NOT_FOUND = "THEME_NOT_FOUND"

    # Validation errors (400/422)
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Upstream errors (502/503)
    UPSTREAM_UNAVAILABLE = "UPSTREAM_UNAVAILABLE"
    OEMBED_LOOKUP_FAILED = "OEMBED_LOOKUP_FAILED"
    LIVE_STATUS_UNAVAILABLE = "LIVE_STATUS_UNAVAILABLE"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class CreatorNotFoundError(AppException):
    """No published profile and no cached copy exist for a creator."""

    def __init__(self, creator_id: str, homepage_url: str | None = None) -> None:
        details: dict[str, Any] = {"creator_id": creator_id}
        if homepage_url:
            details["homepage_url"] = homepage_url
        super().__init__(
            error_code=ErrorCode.PROFILE_NOT_FOUND,
            message="The creator you're looking for doesn't exist or the link is invalid",
            status_code=404,
            details=details,
        )


class DraftNotFoundError(AppException):
    """Profile draft not found."""

    def __init__(self, draft_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.DRAFT_NOT_FOUND,
            message=f"Draft not found: {draft_id}",
            status_code=404,
            details={"draft_id": draft_id},
        )


class ThemeNotFoundError(AppException):
    """Preset theme not found."""

    def __init__(self, theme_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.THEME_NOT_FOUND,
            message=f"Theme not found: {theme_id}",
            status_code=404,
            details={"theme_id": theme_id},
        )


class UpstreamUnavailableError(AppException):
    """An upstream service could not be reached or returned garbage."""

    def __init__(self, service: str, reason: str) -> None:
        super().__init__(
            error_code=ErrorCode.UPSTREAM_UNAVAILABLE,
            message=f"Upstream service unavailable: {service}",
            status_code=502,
            details={"service": service, "reason": reason},
        )


class OEmbedLookupError(AppException):
    """oEmbed lookup for a video URL failed."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(
            error_code=ErrorCode.OEMBED_LOOKUP_FAILED,
            message=f"oEmbed lookup failed for {url}",
            status_code=502,
            details={"url": url, "reason": reason},
        )


class LiveStatusUnavailableError(AppException):
    """The live-status provider could not answer."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            error_code=ErrorCode.LIVE_STATUS_UNAVAILABLE,
            message="Live status provider unavailable",
            status_code=503,
            details={"reason": reason},
        )


class StorageError(AppException):
    """Persistent storage read or write failed."""

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(
            error_code=ErrorCode.DATABASE_ERROR,
            message=f"Storage operation failed: {operation}",
            status_code=500,
            details={"operation": operation, "reason": reason},
        )


class InvalidOrderError(AppException):
    """A reorder request is not a permutation of the existing entries."""

    def __init__(self, expected: list[str], received: list[str]) -> None:
        super().__init__(
            error_code=ErrorCode.VALIDATION_ERROR,
            message="Order must list every existing entry exactly once",
            status_code=422,
            details={"expected": expected, "received": received},
        )
