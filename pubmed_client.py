"""NCBI E-utilities client: esearch for PMIDs, efetch for citation XML."""

from __future__ import annotations

import logging
from typing import Any

import requests

from config import Settings
from models import Article
from pubmed_parser import parse_articles

ESEARCH_URL = "https://eutils.ncbi.nlm.nih.gov/entrez/eutils/esearch.fcgi"
EFETCH_URL = "https://eutils.ncbi.nlm.nih.gov/entrez/eutils/efetch.fcgi"
PUBMED_DB = "pubmed"
SEARCH_SORT = "pub_date"
MAX_RESULTS = 20
REQUEST_TIMEOUT_SECONDS = 30

LOGGER = logging.getLogger(__name__)


class PubMedRequestError(RuntimeError):
    """Non-success HTTP status from an E-utilities endpoint."""

    def __init__(self, endpoint: str, status_code: int, body: str) -> None:
        super().__init__(f"PubMed {endpoint} failed: HTTP {status_code} / {body}")
        self.endpoint = endpoint
        self.status_code = status_code
        self.body = body


def fetch_articles_for_query(query: str, settings: Settings) -> list[Article]:
    """Resolve a search query into parsed Articles (newest first, max 20)."""
    pmids = search_pmids(query, settings)
    LOGGER.info("esearch hits for [%s]: %s", query, len(pmids))
    if not pmids:
        return []

    document = fetch_details(pmids, settings)
    return parse_articles(document)


def search_pmids(query: str, settings: Settings) -> list[str]:
    """Return the PMIDs matching query, ordered by publication date."""
    params = _with_api_key(
        {
            "db": PUBMED_DB,
            "retmode": "json",
            "sort": SEARCH_SORT,
            "retmax": str(MAX_RESULTS),
            "term": query,
        },
        settings,
    )
    response = requests.get(ESEARCH_URL, params=params, timeout=REQUEST_TIMEOUT_SECONDS)
    if response.status_code != 200:
        raise PubMedRequestError("esearch", response.status_code, response.text)

    return _extract_id_list(response.json())


def fetch_details(pmids: list[str], settings: Settings) -> bytes:
    """Fetch the efetch XML document for a batch of PMIDs in one request."""
    if not pmids:
        raise ValueError("fetch_details requires at least one PMID")

    params = _with_api_key(
        {"db": PUBMED_DB, "retmode": "xml", "id": ",".join(pmids)},
        settings,
    )
    response = requests.get(EFETCH_URL, params=params, timeout=REQUEST_TIMEOUT_SECONDS)
    if response.status_code != 200:
        raise PubMedRequestError("efetch", response.status_code, response.text)

    return response.content


def _extract_id_list(payload: Any) -> list[str]:
    result = payload.get("esearchresult") if isinstance(payload, dict) else None
    id_list = result.get("idlist") if isinstance(result, dict) else None
    if not isinstance(id_list, list):
        return []
    return [str(pmid) for pmid in id_list]


def _with_api_key(params: dict[str, str], settings: Settings) -> dict[str, str]:
    if settings.ncbi_api_key:
        return {**params, "api_key": settings.ncbi_api_key}
    return params
