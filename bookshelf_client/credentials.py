"""Secure local credential storage for bookshelf-client.

Session values live in a flat JSON object (default
~/.bookshelf_client/credentials.json) with 0o600 file permissions
(owner read/write only). A missing or unreadable file reads as empty.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Union

API_KEY = "api_key"
USER_ID = "user_id"

logger = logging.getLogger(__name__)


class CredentialStore:
    """Durable key/value store for session credentials."""

    def __init__(self, path: Union[str, Path]) -> None:
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> Dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable credential file %s: %s", self._path, e)
            return {}
        if not isinstance(data, dict):
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write(self, data: Dict[str, str]) -> None:
        directory = self._path.parent
        if not directory.exists():
            # pre-existing directories keep their mode
            directory.mkdir(parents=True, exist_ok=True)
            os.chmod(directory, 0o700)
        fd, tmp = tempfile.mkstemp(dir=directory, prefix=".credentials-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w") as fh:
                fh.write(json.dumps(data, indent=2) + "\n")
            os.chmod(tmp, 0o600)
            os.replace(tmp, self._path)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise

    def save(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        data = self._read()
        data[key] = value
        self._write(data)

    def get(self, key: str) -> Optional[str]:
        """Return the value for ``key``, or None when absent."""
        return self._read().get(key)

    def delete(self, key: str) -> None:
        """Remove ``key``. Deleting a missing key is a no-op."""
        data = self._read()
        if key not in data:
            return
        del data[key]
        self._write(data)

    def __repr__(self) -> str:
        return f"CredentialStore(path={str(self._path)!r})"
