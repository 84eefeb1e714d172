"""Runtime settings resolved once from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_NOTION_VERSION = "2022-06-28"

_REQUIRED_VARS = ("NOTION_API_KEY", "NOTION_DATABASE_ID", "QUERY_SOURCE_PATH")


class ConfigError(RuntimeError):
    """Raised when required configuration is missing."""


@dataclass(frozen=True, slots=True)
class Settings:
    """Credentials and identifiers shared by the PubMed and Notion clients."""

    notion_api_key: str
    notion_database_id: str
    query_source_path: str
    ncbi_api_key: str | None = None
    notion_version: str = DEFAULT_NOTION_VERSION

    @classmethod
    def from_env(cls, query_source_path: str | None = None) -> Settings:
        """Build settings from environment variables.

        Args:
            query_source_path: Optional override for QUERY_SOURCE_PATH (e.g. from
                a CLI flag). When given, the environment variable is not required.
        """
        values = {name: (os.getenv(name) or "").strip() for name in _REQUIRED_VARS}
        if query_source_path:
            values["QUERY_SOURCE_PATH"] = query_source_path

        missing = [name for name, value in values.items() if not value]
        if missing:
            raise ConfigError(
                f"Missing required environment variable(s): {', '.join(missing)}"
            )

        return cls(
            notion_api_key=values["NOTION_API_KEY"],
            notion_database_id=values["NOTION_DATABASE_ID"],
            query_source_path=values["QUERY_SOURCE_PATH"],
            ncbi_api_key=(os.getenv("NCBI_API_KEY") or "").strip() or None,
            notion_version=os.getenv("NOTION_VERSION") or DEFAULT_NOTION_VERSION,
        )

    def notion_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.notion_api_key}",
            "Notion-Version": self.notion_version,
            "Content-Type": "application/json",
        }
