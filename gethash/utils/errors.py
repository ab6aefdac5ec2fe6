"""
Custom exceptions for the gethash decoder.

This module defines all custom exceptions used throughout the package
for better error handling and debugging.
"""

from typing import Any, Optional


class GetHashException(Exception):
    """Base exception for all gethash-specific errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            details: Optional dictionary with additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# Bit Arithmetic Exceptions
# =============================================================================


class InvalidRangeError(GetHashException):
    """Bit range does not fit inside the declared width."""

    def __init__(self, start: int, end: int, length: int) -> None:
        """Initialize with range information."""
        message = f"Bit range [{start}, {end}) is invalid for a {length}-bit value"
        super().__init__(message, {"start": start, "end": end, "length": length})


# =============================================================================
# Decoding Exceptions
# =============================================================================


class DecodingError(GetHashException):
    """Base exception for per-line decoding failures."""

    status = "failed"


class MissingDelimiterError(DecodingError):
    """Line has no field delimiter."""

    status = "missing_delimiter"

    def __init__(self, line: str, delimiter: str = "|") -> None:
        """Initialize with the offending line."""
        message = f"No '{delimiter}' delimiter in line"
        super().__init__(message, {"line": line})


class InvalidBase64Error(DecodingError):
    """Encoded field is not valid base64."""

    status = "invalid_base64"

    def __init__(self, field: str, reason: str) -> None:
        """Initialize with the field and the reason it was rejected."""
        message = f"Invalid base64 payload: {reason}"
        super().__init__(message, {"field": field})


class ShortCharacterGroupError(DecodingError):
    """Final character group has fewer than four symbols."""

    status = "short_group"

    def __init__(self, group: str, offset: int) -> None:
        """Initialize with group information."""
        message = f"Character group at offset {offset} has {len(group)} of 4 symbols"
        super().__init__(message, {"group": group, "offset": offset})


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationError(GetHashException):
    """Configuration error."""

    pass


class InvalidPolicyError(ConfigurationError):
    """Unknown policy name."""

    def __init__(self, name: str, value: str, allowed: list[str]) -> None:
        """Initialize with policy information."""
        message = f"'{value}' is not a valid {name}. Allowed: {', '.join(allowed)}"
        super().__init__(message, {"name": name, "value": value, "allowed": allowed})
