# docflow/core/errors.py

from typing import Any, Optional


class DocflowError(Exception):
    """Base class for every error the client surfaces to a user."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# ------------------------------------------------------------
# Invalid credentials or an expired/invalid session.
# Always terminal for the current attempt.
# ------------------------------------------------------------
class AuthError(DocflowError):
    def __init__(self, reason: str, message: Optional[str] = None):
        super().__init__(message or reason)
        self.reason = reason


# ------------------------------------------------------------
# Client-side precondition failure. Raised before any request
# is issued.
# ------------------------------------------------------------
class ValidationError(DocflowError):
    def __init__(self, reason: str, message: Optional[str] = None):
        super().__init__(message or reason)
        self.reason = reason


# ------------------------------------------------------------
# Non-2xx response, network failure or success=false envelope
# ------------------------------------------------------------
class ApiError(DocflowError):
    def __init__(self, message: str, status: Optional[int] = None, data: Any = None):
        super().__init__(message)
        self.status = status
        self.data = data

    def __repr__(self) -> str:
        return f"ApiError(status={self.status!r}, message={self.message!r})"
