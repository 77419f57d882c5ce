"""Access token sources backed by an external session store."""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_ENV = "SCRAPER_ACCESS_TOKEN"


class TokenUnavailableError(Exception):
    """Raised when the session store cannot be read."""


class TokenSource(ABC):
    """Synchronous read of the current access token."""

    @abstractmethod
    def get_token(self) -> str | None:
        """Return the current access token, or None if no session exists.

        Raises:
            TokenUnavailableError: If the session store cannot be read
        """
        pass


class StaticTokenSource(TokenSource):
    """Token source returning a fixed token."""

    def __init__(self, token: str | None) -> None:
        self._token = token

    def get_token(self) -> str | None:
        return self._token


class EnvTokenSource(TokenSource):
    """Token source reading an environment variable on every call."""

    def __init__(self, variable: str = DEFAULT_TOKEN_ENV) -> None:
        self.variable = variable

    def get_token(self) -> str | None:
        return os.environ.get(self.variable) or None


class FileTokenSource(TokenSource):
    """Token source reading a session file written by another process.

    The file is re-read on every call so a refreshed session is picked up
    without restarting.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def get_token(self) -> str | None:
        try:
            token = self.path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            logger.debug(f"No session file at {self.path}")
            return None
        except OSError as e:
            raise TokenUnavailableError(f"Could not read session file {self.path}: {e}") from e
        return token or None


def token_source_from_env() -> TokenSource:
    """Select the token source configured through environment variables.

    Returns:
        FileTokenSource if SCRAPER_TOKEN_FILE is set, otherwise EnvTokenSource
    """
    token_file = os.getenv("SCRAPER_TOKEN_FILE")
    if token_file:
        logger.info(f"Reading access token from session file {token_file}")
        return FileTokenSource(token_file)
    return EnvTokenSource()
