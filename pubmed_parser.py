"""Parse PubMed efetch XML into normalized Article objects."""

from __future__ import annotations

import logging
from xml.etree import ElementTree

from dates import format_publication_date
from models import Article

PUBMED_ARTICLE_URL = "https://pubmed.ncbi.nlm.nih.gov/{pmid}/"
NO_TITLE_PLACEHOLDER = "[No title]"

LOGGER = logging.getLogger(__name__)


def parse_articles(document: bytes | str | ElementTree.Element) -> list[Article]:
    """Parse a PubmedArticleSet document into Articles, in document order.

    A record that fails to parse is logged and skipped; the rest of the batch
    is still returned. Duplicate PMIDs are kept.
    """
    root = document if isinstance(document, ElementTree.Element) else ElementTree.fromstring(document)

    records = root.findall("PubmedArticle")
    articles: list[Article] = []
    for index, record in enumerate(records):
        try:
            articles.append(_parse_record(record))
        except Exception as exc:  # skip the record, keep the batch
            LOGGER.error("Skipping unparseable PubmedArticle #%s: %s", index + 1, exc)

    LOGGER.debug("Parsed %s of %s PubmedArticle records", len(articles), len(records))
    return articles


def article_url(pmid: str) -> str:
    return PUBMED_ARTICLE_URL.format(pmid=pmid)


def _parse_record(record: ElementTree.Element) -> Article:
    citation = _require_child(record, "MedlineCitation")
    article = _require_child(citation, "Article")

    pmid = (_child_text(citation, "PMID") or "").strip()
    title = _child_text(article, "ArticleTitle") or NO_TITLE_PLACEHOLDER

    return Article(
        pmid=pmid,
        title=title,
        abstract=_abstract(article),
        doi=_doi(record),
        pub_date=_publication_date(article),
        url=article_url(pmid),
    )


def _abstract(article: ElementTree.Element) -> str:
    abstract = _child(article, "Abstract")
    if abstract is None:
        return ""
    return "\n\n".join(_text(segment) for segment in abstract.findall("AbstractText"))


def _doi(record: ElementTree.Element) -> str:
    id_list = _child(_child(record, "PubmedData"), "ArticleIdList")
    if id_list is None:
        return ""

    doi = ""
    for article_id in id_list.findall("ArticleId"):
        if article_id.get("IdType") == "doi":
            doi = _text(article_id)
    return doi


def _publication_date(article: ElementTree.Element) -> str | None:
    journal = _child(article, "Journal")
    issue = _child(journal, "JournalIssue")
    pub_date = _child(issue, "PubDate")
    if pub_date is None:
        return None

    return format_publication_date(
        year=_child_text(pub_date, "Year"),
        month=_child_text(pub_date, "Month"),
        day=_child_text(pub_date, "Day"),
    )


def _child(node: ElementTree.Element | None, tag: str) -> ElementTree.Element | None:
    """Return the first child named tag, or None when node or child is absent."""
    if node is None:
        return None
    return node.find(tag)


def _child_text(node: ElementTree.Element | None, tag: str) -> str | None:
    child = _child(node, tag)
    return None if child is None else _text(child)


def _require_child(node: ElementTree.Element, tag: str) -> ElementTree.Element:
    child = node.find(tag)
    if child is None:
        raise ValueError(f"missing <{tag}> under <{node.tag}>")
    return child


def _text(node: ElementTree.Element) -> str:
    # itertext keeps inline markup such as <i> or <sup> inside titles/abstracts.
    return "".join(node.itertext())
