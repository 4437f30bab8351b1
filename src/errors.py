"""
Error taxonomy for blog API failures.

Every failure of the blog API client surfaces as a subclass of
ArticleServiceError so callers can branch on the kind of failure.
"""
from typing import Any, Dict, List, Optional

GENERAL_ERROR_KEY = "general"


class ArticleServiceError(Exception):
    """Base class for blog API failures."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class NotFoundError(ArticleServiceError):
    """Resource absent or not visible to this actor at this scope."""


class ForbiddenError(ArticleServiceError):
    """Actor lacks rights to the resource."""


class UnauthenticatedError(ArticleServiceError):
    """Action requires an identity the caller lacks."""


class UnknownError(ArticleServiceError):
    """Transport failure or unexpected response."""


class ValidationFailedError(ArticleServiceError):
    """Server rejected the submitted fields."""

    def __init__(self, field_errors: Dict[str, List[str]], status_code: Optional[int] = 400):
        super().__init__("Validation failed", status_code=status_code)
        self.field_errors = field_errors


def normalize_field_errors(body: Dict[str, Any]) -> Dict[str, List[str]]:
    """
    Normalize a field-keyed error body into lists of messages.

    "detail" and "non_field_errors" entries are folded into the general key.

    Args:
        body: Decoded JSON error object

    Returns:
        Mapping of field name to list of messages
    """
    field_errors: Dict[str, List[str]] = {}
    for key, value in body.items():
        target = GENERAL_ERROR_KEY if key in ("detail", "non_field_errors") else key
        if isinstance(value, list):
            messages = [str(item) for item in value]
        else:
            messages = [str(value)]
        field_errors.setdefault(target, []).extend(messages)
    return field_errors


def _extract_message(body: Any, default: str) -> str:
    """Pull a human-readable message out of an error body."""
    if isinstance(body, dict):
        detail = body.get("detail") or body.get("message") or body.get("error")
        if isinstance(detail, str) and detail:
            return detail
    return default


def error_from_response(status_code: int, body: Any) -> ArticleServiceError:
    """
    Map an HTTP error response to a typed error.

    Args:
        status_code: HTTP status code
        body: Decoded JSON body, or None if it could not be parsed

    Returns:
        ArticleServiceError subclass instance
    """
    if status_code == 404:
        return NotFoundError(_extract_message(body, "Not found"), status_code=status_code)
    if status_code == 403:
        return ForbiddenError(_extract_message(body, "Forbidden"), status_code=status_code)
    if status_code == 401:
        return UnauthenticatedError(
            _extract_message(body, "Authentication required"), status_code=status_code
        )
    if status_code == 400 and isinstance(body, dict) and body:
        return ValidationFailedError(normalize_field_errors(body), status_code=status_code)
    return UnknownError(
        _extract_message(body, f"Unexpected response (HTTP {status_code})"),
        status_code=status_code,
    )
