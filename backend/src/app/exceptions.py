"""Custom exception classes for the records API.

The records handler collapses every failure into a single 500 response.
The classes exist so the logs can still tell the failure kinds apart.
"""

from __future__ import annotations

from typing import Any
from typing import Optional


class AppError(Exception):
    """Base exception for application errors.

    Attributes:
        message: Human-readable error message.
        detail: Optional additional context for logs.
    """

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to the API error body."""
        return {"message": "Internal Server Error", "error": self.message}


class RequestBodyError(AppError):
    """Raised when a request body is missing, malformed, or not an object."""


class ConfigurationError(AppError):
    """Raised when required configuration is missing.

    Use when environment variables are not properly configured.
    """

    def __init__(self, config_name: str):
        super().__init__(f"Missing required configuration: {config_name}")
        self.config_name = config_name


class StoreError(AppError):
    """Raised when a DynamoDB operation fails.

    ``detail`` carries the DynamoDB error code, or the botocore exception
    name when the call never reached the service.
    """
