"""CLI entrypoint for the scheduled PubMed → Notion sync."""

from __future__ import annotations

import argparse
import logging

from dotenv import load_dotenv

from config import ConfigError, Settings
from models import QueryOutcome, RunSummary
from notion_sync import UpsertResult, upsert_article
from pubmed_client import fetch_articles_for_query
from query_source import load_queries

EXIT_OK = 0
EXIT_QUERY_FAILURES = 1
EXIT_CONFIG_ERROR = 2


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line flags."""
    parser = argparse.ArgumentParser(description="Sync PubMed search results into a Notion database")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Search, parse and check Notion for duplicates, but do not create pages",
    )
    parser.add_argument(
        "--queries-file",
        default=None,
        help="CSV file of queries (header row, one query per row in column A); overrides QUERY_SOURCE_PATH",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def run(queries: list[str], settings: Settings, dry_run: bool = False) -> RunSummary:
    """Process each query in order and return the per-query outcomes.

    A failing query is recorded and the run moves on; a failing article is
    logged and the query moves on to its next article.
    """
    summary = RunSummary()

    for raw_query in queries:
        query = raw_query.strip()
        if not query:
            continue

        logging.info("=== Query start: [%s] ===", query)
        try:
            articles = fetch_articles_for_query(query, settings)
        except Exception as exc:  # one bad query must not stop the run
            logging.error("Query [%s] failed: %s", query, exc)
            summary.record(QueryOutcome(query=query, error=str(exc)))
            continue

        logging.info("Fetched %s articles for [%s]", len(articles), query)
        created = skipped = failed = would_create = 0
        for position, article in enumerate(articles, start=1):
            logging.info("  -> #%s PMID %s", position, article.pmid)
            try:
                result = upsert_article(article, settings, dry_run=dry_run)
            except Exception as exc:
                failed += 1
                logging.exception("Failed to sync PMID %s for [%s]: %s", article.pmid, query, exc)
                continue

            if result is UpsertResult.SKIPPED:
                skipped += 1
            elif result is UpsertResult.DRY_RUN:
                would_create += 1
            else:
                created += 1

        summary.record(
            QueryOutcome(
                query=query,
                article_count=len(articles),
                created=created,
                skipped=skipped,
                failed=failed,
                would_create=would_create,
            )
        )

    totals = summary.totals()
    logging.info(
        "Run complete. queries_ok=%s queries_failed=%s articles=%s created=%s would_create=%s skipped=%s failed=%s",
        len(summary.succeeded),
        len(summary.failed),
        totals["articles"],
        totals["created"],
        totals["would_create"],
        totals["skipped"],
        totals["failed"],
    )
    return summary


def main(argv: list[str] | None = None) -> int:
    """Resolve config, load queries and execute one sync run."""
    load_dotenv()
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        settings = Settings.from_env(query_source_path=args.queries_file)
        queries = load_queries(settings.query_source_path)
    except (ConfigError, FileNotFoundError) as exc:
        logging.error("Startup failed: %s", exc)
        return EXIT_CONFIG_ERROR

    summary = run(queries, settings, dry_run=args.dry_run)
    return EXIT_QUERY_FAILURES if summary.failed else EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
