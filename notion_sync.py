"""Notion API integration for the PubMed literature database."""

from __future__ import annotations

import enum
import logging
from typing import Any

import requests

from config import Settings
from models import Article

NOTION_API_BASE_URL = "https://api.notion.com/v1"
DOI_RESOLVER_URL = "https://doi.org/"
REQUEST_TIMEOUT_SECONDS = 30
# Notion caps a single rich-text object's content at 2000 characters.
NOTION_TEXT_LIMIT = 2000

LOGGER = logging.getLogger(__name__)


class NotionRequestError(RuntimeError):
    """Non-success HTTP status from the Notion pages endpoint."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Notion page creation failed: HTTP {status_code}\n{body}")
        self.status_code = status_code
        self.body = body


class UpsertResult(enum.Enum):
    CREATED = "created"
    SKIPPED = "skipped"
    DRY_RUN = "dry_run"


def upsert_article(article: Article, settings: Settings, dry_run: bool = False) -> UpsertResult:
    """Create a Notion page for article unless one with the same PMID exists.

    Dedup is best-effort: a failed lookup or a non-numeric PMID is treated
    as "not found" and creation goes ahead.
    """
    existing = find_page_by_pmid(article.pmid, settings)
    if existing is not None:
        LOGGER.info("PMID %s already in Notion, skipping", article.pmid)
        return UpsertResult.SKIPPED

    if dry_run:
        LOGGER.info("[dry-run] Would create Notion page for PMID %s: %s", article.pmid, article.title)
        return UpsertResult.DRY_RUN

    create_article_page(article, settings)
    return UpsertResult.CREATED


def find_page_by_pmid(pmid: str, settings: Settings) -> dict[str, Any] | None:
    """Return the first Notion page whose PMID number property equals pmid."""
    pmid_number = _as_int(pmid)
    if pmid_number is None:
        LOGGER.warning("PMID %r is not numeric; cannot check Notion for duplicates", pmid)
        return None

    payload = {
        "filter": {"property": "PMID", "number": {"equals": pmid_number}},
        "page_size": 1,
    }
    url = f"{NOTION_API_BASE_URL}/databases/{settings.notion_database_id}/query"

    try:
        response = requests.post(
            url,
            headers=settings.notion_headers(),
            json=payload,
            timeout=REQUEST_TIMEOUT_SECONDS,
        )
    except requests.RequestException as exc:
        LOGGER.warning("Notion database query failed for PMID %s: %s", pmid, exc)
        return None

    if response.status_code != 200:
        LOGGER.warning(
            "Notion database query failed for PMID %s: HTTP %s / %s",
            pmid,
            response.status_code,
            response.text,
        )
        return None

    results = response.json().get("results") or []
    return results[0] if results else None


def create_article_page(article: Article, settings: Settings) -> dict[str, Any]:
    """Create one Notion page for article and return the created page JSON."""
    payload = {
        "parent": {"database_id": settings.notion_database_id},
        "properties": build_properties(article),
    }

    response = requests.post(
        f"{NOTION_API_BASE_URL}/pages",
        headers=settings.notion_headers(),
        json=payload,
        timeout=REQUEST_TIMEOUT_SECONDS,
    )
    if response.status_code not in (200, 201):
        raise NotionRequestError(response.status_code, response.text)

    LOGGER.info("Created Notion page for PMID %s", article.pmid)
    LOGGER.debug("Notion response: %s", response.text)
    return response.json()


def build_properties(article: Article) -> dict[str, Any]:
    """Build the Notion property set, including only fields that have a value."""
    properties: dict[str, Any] = {
        "Title": _title_property(article.title),
        "PubMed URL": {"url": article.url},
    }
    if article.pub_date:
        properties["Publication Date"] = {"date": {"start": article.pub_date}}
    if article.doi:
        properties["DOI URL"] = {"url": f"{DOI_RESOLVER_URL}{article.doi}"}
    if article.abstract:
        properties["Abstract"] = _rich_text_property(article.abstract)

    pmid_number = _as_int(article.pmid)
    if pmid_number is not None:
        properties["PMID"] = {"number": pmid_number}

    return properties


def _title_property(text: str) -> dict[str, Any]:
    return {"title": [{"text": {"content": _truncate(text)}}]}


def _rich_text_property(text: str) -> dict[str, Any]:
    chunks = [text[i : i + NOTION_TEXT_LIMIT] for i in range(0, len(text), NOTION_TEXT_LIMIT)]
    return {"rich_text": [{"text": {"content": chunk}} for chunk in chunks]}


def _truncate(text: str, max_len: int = NOTION_TEXT_LIMIT) -> str:
    return text if len(text) <= max_len else f"{text[: max_len - 3]}..."


def _as_int(value: str) -> int | None:
    try:
        return int(value.strip())
    except (AttributeError, ValueError):
        return None
