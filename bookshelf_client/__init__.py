"""Python client for the bookshelf API."""

from .client import BookshelfClient
from .credentials import CredentialStore
from .errors import APIError, ErrorKind
from .session import SessionController

__version__ = "0.1.0"
__all__ = ["APIError", "BookshelfClient", "CredentialStore", "ErrorKind", "SessionController"]
