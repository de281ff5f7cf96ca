# ABOUTME: Runtime settings for Shelves, read from environment variables.
# ABOUTME: CLI options mirror each setting through click's envvar support.

import os
from dataclasses import dataclass
from pathlib import Path

from shelves.catalog.http import DEFAULT_TIMEOUT
from shelves.storage.sqlite import DEFAULT_STORE_PATH

STORE_ENV = "SHELVES_STORE"
USER_ENV = "SHELVES_USER"
API_KEY_ENV = "GEMINI_API_KEY"
TIMEOUT_ENV = "SHELVES_HTTP_TIMEOUT"

DEFAULT_USER = "local-user"


@dataclass
class Settings:
    store_path: Path = DEFAULT_STORE_PATH
    user_id: str = DEFAULT_USER
    gemini_api_key: str | None = None
    http_timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "Settings":
        """Build settings from environ (os.environ by default).

        Raises:
            ValueError: If SHELVES_HTTP_TIMEOUT is not a positive number.
        """
        env = os.environ if environ is None else environ
        timeout_text = env.get(TIMEOUT_ENV)
        timeout = DEFAULT_TIMEOUT
        if timeout_text:
            try:
                timeout = float(timeout_text)
            except ValueError as exc:
                raise ValueError(f"{TIMEOUT_ENV} must be a number, got {timeout_text!r}") from exc
            if timeout <= 0:
                raise ValueError(f"{TIMEOUT_ENV} must be positive, got {timeout_text!r}")

        store = env.get(STORE_ENV)
        return cls(
            store_path=Path(store).expanduser() if store else DEFAULT_STORE_PATH,
            user_id=env.get(USER_ENV) or DEFAULT_USER,
            gemini_api_key=env.get(API_KEY_ENV) or None,
            http_timeout=timeout,
        )
