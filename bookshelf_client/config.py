"""Runtime configuration for bookshelf-client.

Construct via ``Settings.from_env()`` or pass values explicitly in tests.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_BASE_URL = "http://localhost:3000"
API_PREFIX = "/api/v1"

_DEFAULT_CRED_FILE = Path.home() / ".bookshelf_client" / "credentials.json"


@dataclass(frozen=True)
class Settings:
    base_url: str = DEFAULT_BASE_URL
    credentials_path: Path = field(default=_DEFAULT_CRED_FILE)
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from ``BOOKSHELF_*`` environment variables."""
        base_url = os.environ.get("BOOKSHELF_URL", "").strip() or DEFAULT_BASE_URL
        cred = os.environ.get("BOOKSHELF_CREDENTIALS", "").strip()
        level = os.environ.get("BOOKSHELF_LOG_LEVEL", "").strip() or "WARNING"
        return cls(
            base_url=base_url.rstrip("/"),
            credentials_path=Path(cred).expanduser() if cred else _DEFAULT_CRED_FILE,
            log_level=level.upper(),
        )
