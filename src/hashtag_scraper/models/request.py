"""Pydantic model for a single scrape submission."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SecretStr


class ScrapeRequest(BaseModel):
    """Credentials and search term for one scrape submission.

    Built fresh for every submission and never persisted. The credential
    values are kept out of ``repr`` so the request can be logged safely.
    """

    model_config = ConfigDict(frozen=True)

    credential_id: str = Field(repr=False, description="Account login (email)")
    credential_secret: SecretStr = Field(description="Account password")
    search_term: str = Field(description="Hashtag to scrape, without the leading #")

    def to_payload(self) -> dict[str, Any]:
        """Build the JSON body expected by the remote scraping service.

        Returns:
            Dictionary with ``email``, ``password`` and ``hashtag`` keys
        """
        return {
            "email": self.credential_id,
            "password": self.credential_secret.get_secret_value(),
            "hashtag": self.search_term,
        }
