"""
Custom exceptions for the ConfTree package.

This module defines a hierarchical exception system that provides:
1. Specific, technical error information for debugging and logging
2. User-friendly error messages for end-users
3. Error codes for consistent error identification
4. Optional context information for additional debugging
"""

from typing import Optional, Dict, Any, List
import traceback
import sys


class ConfTreeError(Exception):
    """Base exception for all ConfTree errors."""

    # Default values
    error_code = "CT-GENERIC-ERROR"
    user_message = "An unexpected configuration error occurred."

    def __init__(
        self,
        message: str = None,
        user_message: str = None,
        error_code: str = None,
        context: Dict[str, Any] = None,
        cause: Exception = None,
        include_traceback: bool = True
    ):
        # Technical message for logs
        self.message = message or self.__class__.__doc__ or "An error occurred."
        super().__init__(self.message)

        # User-friendly message
        self.user_message = user_message or self.__class__.user_message

        self.error_code = error_code or self.__class__.error_code

        # Additional context
        self.context = context or {}
        self.cause = cause

        # Capture traceback if requested
        self.traceback = None
        if include_traceback:
            self.traceback = traceback.format_exc() if sys.exc_info()[0] else None

    def to_dict(self) -> Dict[str, Any]:
        """Convert the exception to a dictionary for CLI or API output."""
        error_dict = {
            "error_code": self.error_code,
            "message": self.user_message,
        }

        # Include technical details only in debug mode or for logging
        if self.context.get('debug'):
            error_dict["technical_details"] = {
                "message": self.message,
                "context": self.context,
            }
            if self.traceback:
                error_dict["technical_details"]["traceback"] = self.traceback
            if self.cause:
                error_dict["technical_details"]["cause"] = str(self.cause)

        return error_dict


# Parse Errors - 1000 range
class ParseError(ConfTreeError):
    """Exception raised when raw bytes are neither a JSON object nor a JSON array."""
    error_code = "CT-PARSE-1001"
    user_message = "The configuration document could not be parsed."


# Lookup and type Errors - 2000 range
class KeyNotFoundError(ConfTreeError):
    """Exception raised when a key does not resolve to any value."""
    error_code = "CT-KEY-2001"
    user_message = "The requested configuration key does not exist."

    def __init__(self, key: str, **kwargs: Any):
        self.key = key
        kwargs.setdefault("context", {"key": key})
        super().__init__(f"key is not found: {key}", **kwargs)


class NodeTypeError(ConfTreeError):
    """Exception raised when a value exists but has the wrong shape for an operation."""
    error_code = "CT-TYPE-2002"
    user_message = "The configuration value has an unexpected type."


class SectionError(NodeTypeError):
    """Exception raised when a section is missing or is not a string-to-string mapping."""
    error_code = "CT-TYPE-2003"
    user_message = "The configuration section does not exist or is not a flat string mapping."


class CoercionError(ConfTreeError):
    """Exception raised when a scalar cannot be converted to the requested type."""
    error_code = "CT-TYPE-2004"
    user_message = "The configuration value cannot be converted to the requested type."


# Decode Errors - 3000 range
class DecodeError(ConfTreeError):
    """Exception raised when a mapping cannot be decoded onto a target structure."""
    error_code = "CT-DECODE-3001"
    user_message = "The configuration section does not match the target structure."

    def __init__(self, errors: List[str], **kwargs: Any):
        self.errors = list(errors)
        kwargs.setdefault("context", {"errors": self.errors})
        noun = "error" if len(self.errors) == 1 else "errors"
        message = f"{len(self.errors)} {noun} decoding:\n\n* " + "\n* ".join(self.errors)
        super().__init__(message, **kwargs)


# Operation Errors - 4000 range
class UnsupportedOperationError(ConfTreeError):
    """Exception raised for operations the container does not support."""
    error_code = "CT-OP-4001"
    user_message = "This operation is not supported."


# Format Errors - 5000 range
class UnknownFormatError(ConfTreeError):
    """Exception raised when no adapter is registered under the requested format name."""
    error_code = "CT-FMT-5001"
    user_message = "The requested configuration format is not available."
