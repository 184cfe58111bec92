"""
Custom exceptions for the Irtus backend.

Generation failures form a small taxonomy so that the retry policy and the
logs can tell them apart.  Users never see the specific kind: once retries
are exhausted the controllers replace any ``GenerationError`` with
``GENERIC_GENERATION_ERROR``.
"""

from typing import Any


GENERIC_GENERATION_ERROR = (
    "We encountered an error while synthesizing your strategy. "
    "Please check your network or try again."
)


class IrtusError(Exception):
    """Base exception for all Irtus errors"""

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


# ============================================
# Generation Errors
# ============================================

class GenerationError(IrtusError):
    """A single deck generation attempt failed"""

    def __init__(self, message: str, code: str = "GENERATION_FAILED", details: dict[str, Any] | None = None):
        super().__init__(message, code=code, details=details)


class TransportError(GenerationError):
    """The generation endpoint could not be reached or answered with a non-success status"""

    def __init__(self, message: str = "API request failed", status_code: int | None = None):
        super().__init__(
            message,
            code="TRANSPORT_ERROR",
            details={"status_code": status_code} if status_code is not None else None,
        )
        self.status_code = status_code


class EmptyResponseError(GenerationError):
    """The response carried no candidate text"""

    def __init__(self, message: str = "Empty response from AI"):
        super().__init__(message, code="EMPTY_RESPONSE")


class ParseError(GenerationError):
    """The candidate text was not valid JSON"""

    def __init__(self, message: str = "Malformed JSON received"):
        super().__init__(message, code="PARSE_ERROR")


class SchemaError(GenerationError):
    """The candidate JSON did not match the deck schema"""

    def __init__(self, message: str = "Invalid format received"):
        super().__init__(message, code="SCHEMA_ERROR")


# ============================================
# Session Errors
# ============================================

class SessionNotFoundError(IrtusError):
    def __init__(self, session_id: Any):
        super().__init__(
            f"Session {session_id} not found",
            code="SESSION_NOT_FOUND",
            details={"session_id": str(session_id)},
        )

