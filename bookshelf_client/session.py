"""Authenticated-state holder for the presentation layer."""

import logging

from .client import BookshelfClient

logger = logging.getLogger(__name__)


class SessionController:
    """Tracks whether a session is active.

    Initialised once from the client's credential store; changes only
    through :meth:`mark_logged_in` and :meth:`mark_logged_out`. The store,
    not this flag, decides whether API calls are authorised.
    """

    def __init__(self, client: BookshelfClient) -> None:
        self._client = client
        self._authenticated = client.has_session()

    @property
    def authenticated(self) -> bool:
        return self._authenticated

    def mark_logged_in(self) -> None:
        """Call after a successful ``client.login`` round trip."""
        self._authenticated = True

    def mark_logged_out(self) -> None:
        self._client.logout()
        self._authenticated = False
        logger.debug("Marked logged out")
