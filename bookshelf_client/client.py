"""Bookshelf API client — session, shelves and books."""

import logging
from typing import Any, Dict, Optional, Type, TypeVar
from urllib.parse import urlsplit

import requests
from pydantic import BaseModel, ValidationError

from .config import API_PREFIX, DEFAULT_BASE_URL, Settings
from .credentials import API_KEY, USER_ID, CredentialStore
from .errors import APIError
from .models import (
    BookDetail,
    BookDetailResponse,
    Session,
    ShelfDetail,
    ShelfDetailResponse,
    ShelvesResponse,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

_URL_ERRORS = (
    requests.exceptions.InvalidURL,
    requests.exceptions.MissingSchema,
    requests.exceptions.InvalidSchema,
    requests.exceptions.URLRequired,
)


class BookshelfClient:
    """Client for the bookshelf API.

    Session credentials are read from ``store`` before every authenticated
    call and written to it only by a successful :meth:`login`.

    Usage::

        client = BookshelfClient("http://localhost:3000", store=CredentialStore(path))
        client.login("reader@example.com", "secret")
        for shelf in client.get_shelves().shelves:
            print(shelf.name, shelf.book_count)
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        store: Optional[CredentialStore] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.store = store if store is not None else CredentialStore(Settings().credentials_path)
        self._session = session if session is not None else requests.Session()

    @classmethod
    def from_settings(cls, settings: Settings) -> "BookshelfClient":
        return cls(settings.base_url, store=CredentialStore(settings.credentials_path))

    # ──────────────────────────────────────────────
    # Transport
    # ──────────────────────────────────────────────

    def _url(self, path: str) -> str:
        parts = urlsplit(self.base_url)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise APIError.invalid_request(f"Invalid base URL: {self.base_url!r}")
        return f"{self.base_url}{API_PREFIX}{path}"

    def _request(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        url = self._url(path)
        logger.debug("%s %s", method, path)
        try:
            r = self._session.request(
                method, url, headers={"Accept": "application/json"}, **kwargs
            )
        except _URL_ERRORS as e:
            raise APIError.invalid_request(str(e), cause=e) from e
        except requests.RequestException as e:
            logger.debug("%s %s failed: %s", method, path, e)
            raise APIError.invalid_response(f"Request failed: {e}", cause=e) from e

        if not isinstance(r, requests.Response):
            raise APIError.invalid_response(f"Unexpected transport reply: {type(r).__name__}")

        logger.debug("%s %s -> %d", method, path, r.status_code)
        if r.status_code == 401:
            raise APIError.unauthorized(status_code=401)
        if r.status_code != 200:
            raise APIError.server_error(r.status_code)
        return r

    @staticmethod
    def _decode(r: requests.Response, model: Type[M]) -> M:
        try:
            return model.model_validate_json(r.content)
        except (ValueError, ValidationError) as e:
            logger.warning("Could not decode %s: %s", model.__name__, e)
            raise APIError.decoding_error(e) from e

    def _auth_params(self) -> Dict[str, str]:
        api_key = self.store.get(API_KEY)
        user_id = self.store.get(USER_ID)
        if not api_key or not user_id:
            raise APIError.unauthorized("Not logged in")
        return {"api_key": api_key, "user_id": user_id}

    def _get(self, path: str, model: Type[M]) -> M:
        params = self._auth_params()
        r = self._request("GET", path, params=params)
        return self._decode(r, model)

    # ──────────────────────────────────────────────
    # Session
    # ──────────────────────────────────────────────

    def login(self, email: str, password: str) -> Session:
        """Create a session and persist its credentials.

        The store is written only after the response decodes in full.
        """
        r = self._request("POST", "/sessions", json={"email": email, "password": password})
        session = self._decode(r, Session)
        self.store.save(API_KEY, session.api_key)
        self.store.save(USER_ID, str(session.user_id))
        logger.info("Logged in as user %d", session.user_id)
        return session

    def logout(self) -> None:
        """Forget the stored session. Local only and safe to repeat."""
        self.store.delete(API_KEY)
        self.store.delete(USER_ID)
        logger.info("Session cleared")

    def has_session(self) -> bool:
        return self.store.get(API_KEY) is not None

    # ──────────────────────────────────────────────
    # Shelves and books (auth required)
    # ──────────────────────────────────────────────

    def get_shelves(self) -> ShelvesResponse:
        """List the current user's shelves along with their identity."""
        return self._get("/shelves", ShelvesResponse)

    def get_shelf(self, shelf_id: int) -> ShelfDetail:
        """Fetch one shelf with its books. A shelf may have no books."""
        resp = self._get(f"/shelves/{int(shelf_id)}", ShelfDetailResponse)
        return ShelfDetail.from_response(resp)

    def get_book(self, book_id: int) -> BookDetail:
        return self._get(f"/books/{int(book_id)}", BookDetailResponse).book

    def __repr__(self) -> str:
        return f"BookshelfClient(base_url={self.base_url!r})"
