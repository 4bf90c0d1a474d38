"""
Keen error hierarchy for clear classification in logs and API responses.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class KeenError(Exception):
    """Base class for all Keen Analytics errors."""

    status_code: int = 500
    public_message: str = "Unexpected error."

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        company: Optional[str] = None,
        metric: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        message = message or self.public_message
        super().__init__(message)
        self.message = message
        self.company = company
        self.metric = metric
        self.details = details or {}

    def as_dict(self) -> Dict[str, Any]:
        """Serializable representation for logs."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "company": self.company,
            "metric": self.metric,
            "details": self.details,
        }

    def to_response(self) -> Dict[str, str]:
        """Body returned to API callers."""
        return {"error": self.message}


class InvalidRequest(KeenError):
    """Raised when the company or metric query parameter is missing."""

    status_code = 400
    public_message = "Company and metric query parameters are required."

    def __init__(self, message: Optional[str] = None, *, field: Optional[str] = None, **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.field = field
        if field is not None:
            self.details["field"] = field


class EmptyDataset(KeenError):
    """Raised when the row source produced zero rows."""

    status_code = 404
    public_message = "No data found in source file."


class NotFound(KeenError):
    """Raised when no row matches the normalized ticker and field."""

    status_code = 404
    public_message = "Data not found for the selected criteria."


class AmbiguousMatch(KeenError):
    """Raised when duplicate rows are rejected and more than one row matches."""

    status_code = 409
    public_message = "More than one row matches the selected criteria."

    def __init__(self, message: Optional[str] = None, *, matches: Optional[int] = None, **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.matches = matches
        if matches is not None:
            self.details["matches"] = matches


class ReadFailure(KeenError):
    """Raised when the row source cannot be read or parsed.

    The message handed to API callers is always the generic one; the
    underlying cause stays in ``details`` and the server log.
    """

    status_code = 500
    public_message = "Failed to read or process the data file."

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        path: Optional[str] = None,
        cause: Optional[BaseException] = None,
        **kwargs,
    ) -> None:
        super().__init__(message, **kwargs)
        self.path = path
        self.cause = cause
        if path is not None:
            self.details["path"] = path
        if cause is not None:
            self.details["cause"] = repr(cause)

    def to_response(self) -> Dict[str, str]:
        return {"error": self.public_message}


class ConfigError(KeenError):
    """Raised on missing/invalid configuration values."""

    public_message = "Invalid configuration."

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        key: Optional[str] = None,
        section: Optional[str] = None,
        **kwargs,
    ) -> None:
        super().__init__(message, **kwargs)
        self.key = key
        self.section = section
        if key is not None:
            self.details["key"] = key
        if section is not None:
            self.details["section"] = section

    def to_response(self) -> Dict[str, str]:
        return {"error": self.public_message}


__all__ = [
    "KeenError",
    "InvalidRequest",
    "EmptyDataset",
    "NotFound",
    "AmbiguousMatch",
    "ReadFailure",
    "ConfigError",
]
