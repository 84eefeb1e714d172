"""Shared typed models for the PubMed → Notion sync."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Article:
    """Normalized PubMed citation used between parsing and the Notion sync."""

    pmid: str
    title: str
    abstract: str
    doi: str
    pub_date: str | None
    url: str


@dataclass(frozen=True, slots=True)
class QueryOutcome:
    """Result of processing one search query."""

    query: str
    article_count: int | None = None
    error: str | None = None
    created: int = 0
    skipped: int = 0
    failed: int = 0
    would_create: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(slots=True)
class RunSummary:
    """Ordered per-query outcomes for one run."""

    outcomes: list[QueryOutcome] = field(default_factory=list)

    def record(self, outcome: QueryOutcome) -> None:
        self.outcomes.append(outcome)

    @property
    def succeeded(self) -> list[QueryOutcome]:
        return [o for o in self.outcomes if o.ok]

    @property
    def failed(self) -> list[QueryOutcome]:
        return [o for o in self.outcomes if not o.ok]

    def totals(self) -> dict[str, int]:
        """Aggregate article tallies across successful queries."""
        return {
            "articles": sum(o.article_count or 0 for o in self.outcomes),
            "created": sum(o.created for o in self.outcomes),
            "skipped": sum(o.skipped for o in self.outcomes),
            "failed": sum(o.failed for o in self.outcomes),
            "would_create": sum(o.would_create for o in self.outcomes),
        }
