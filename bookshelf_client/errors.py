"""Error taxonomy shared by every API operation."""

import enum
from typing import Optional


class ErrorKind(enum.Enum):
    INVALID_REQUEST = "invalid_request"
    INVALID_RESPONSE = "invalid_response"
    UNAUTHORIZED = "unauthorized"
    SERVER_ERROR = "server_error"
    DECODING_ERROR = "decoding_error"


class APIError(Exception):
    """A failed API operation, tagged with exactly one ``ErrorKind``.

    ``status_code`` is set for SERVER_ERROR (and for a server-side 401);
    ``cause`` holds the underlying exception for DECODING_ERROR and
    transport failures.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        status_code: Optional[int] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.status_code = status_code
        self.cause = cause

    @classmethod
    def invalid_request(cls, message: str, cause: Optional[BaseException] = None) -> "APIError":
        return cls(ErrorKind.INVALID_REQUEST, message, cause=cause)

    @classmethod
    def invalid_response(cls, message: str, cause: Optional[BaseException] = None) -> "APIError":
        return cls(ErrorKind.INVALID_RESPONSE, message, cause=cause)

    @classmethod
    def unauthorized(cls, message: str = "Unauthorized", status_code: Optional[int] = None) -> "APIError":
        return cls(ErrorKind.UNAUTHORIZED, message, status_code=status_code)

    @classmethod
    def server_error(cls, status_code: int) -> "APIError":
        return cls(ErrorKind.SERVER_ERROR, f"HTTP {status_code}", status_code=status_code)

    @classmethod
    def decoding_error(cls, cause: BaseException) -> "APIError":
        return cls(ErrorKind.DECODING_ERROR, f"Could not decode response: {cause}", cause=cause)

    def __repr__(self) -> str:
        return f"APIError(kind={self.kind.name}, status_code={self.status_code!r})"


def describe(error: APIError, subject: str = "data") -> str:
    """Short user-facing message for ``error``.

    ``subject`` names what was being loaded ("shelves", "books",
    "book details"); pass "login" for the login screen.
    """
    if error.kind is ErrorKind.UNAUTHORIZED:
        if subject == "login":
            return "Invalid email or password"
        return "Session expired. Please log in again."
    if error.kind is ErrorKind.SERVER_ERROR:
        if subject == "login":
            return f"Server error ({error.status_code})"
        return f"Server error ({error.status_code}). Please try again."
    if subject == "login":
        return "Connection failed. Please try again."
    return f"Failed to load {subject}. Please try again."
