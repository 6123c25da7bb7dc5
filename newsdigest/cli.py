"""
Command-line interface for News Digest.
"""
import os
import sys
import json
import argparse
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

import tqdm
from dotenv import load_dotenv

from newsdigest.config import load_config
from newsdigest.core import aggregator
from newsdigest.core.article import Article, EnrichedArticle
from newsdigest.core.engine import DigestEngine
from newsdigest.fetchers.file import load_articles
from newsdigest.formatters.markdown import MarkdownFormatter
from newsdigest.utils.dates import parse_date

logger = logging.getLogger(__name__)

MODES = ["top", "week", "student", "clusters", "search"]


def configure_logging(verbose: bool = False, log_file: Optional[str] = None) -> None:
    """
    Configure root logging for a CLI run.

    Args:
        verbose: Log at DEBUG instead of INFO
        log_file: Optional file to log to in addition to stderr
    """
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True,
    )


def parse_args(argv: Optional[List[str]] = None):
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(description="News Digest - rank and cluster news articles")
    parser.add_argument("articles", help="Path to a JSON or YAML file of article records")
    parser.add_argument("--config", help="Path to a YAML or JSON config file")
    parser.add_argument("--profile", help="Scoring profile (default, database, student)", default="default")
    parser.add_argument("--mode", choices=MODES, default="top", help="Which view to produce")
    parser.add_argument("--top", type=int, help="Number of articles to return")
    parser.add_argument("--search", help="Search text (search mode)")
    parser.add_argument("--cluster", help="Cluster filter (search mode)")
    parser.add_argument("--tag", help="Tag filter (search mode)")
    parser.add_argument("--sort", choices=list(aggregator.SORT_FIELDS), default="relevance",
                        help="Sort field (search mode)")
    parser.add_argument("--format", choices=["json", "markdown"], help="Output format")
    parser.add_argument("--output", help="Write output to this file instead of stdout")
    parser.add_argument("--now", help="Reference time for recency scoring (ISO-8601)")
    parser.add_argument("--log-file", help="Also write logs to this file",
                        default=os.getenv('NEWSDIGEST_LOG_FILE'))
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def enrich_with_progress(engine: DigestEngine, articles: List[Article],
                         now: Optional[datetime]) -> List[EnrichedArticle]:
    enriched = []
    with tqdm.tqdm(total=len(articles), desc="Scoring articles", disable=len(articles) < 100) as pbar:
        for article in articles:
            enriched.append(engine.enrich(article, now))
            pbar.update(1)
    return enriched


def build_view(args, engine: DigestEngine, articles: List[Article], top: int,
               now: Optional[datetime]) -> Dict[str, Any]:
    """
    Produce the requested view.

    Returns:
        Dict with 'articles' and, for cluster mode, 'clusters' and 'tags'
    """
    if args.mode == "student":
        return {"articles": engine.student_top_articles(articles, top, now)}

    if args.mode == "week":
        articles = aggregator.filter_current_week(articles, now)

    enriched = enrich_with_progress(engine, articles, now)

    if args.mode == "clusters":
        unique = aggregator.dedupe_articles(enriched)
        return {
            "articles": [],
            "clusters": engine.cluster_statistics(unique),
            "tags": aggregator.unique_tags(unique),
        }
    if args.mode == "search":
        found = engine.search(aggregator.dedupe_articles(enriched), search=args.search,
                              cluster=args.cluster, tag=args.tag, sort_by=args.sort)
        return {"articles": found if args.top is None else found[:max(top, 0)]}

    return {"articles": aggregator.top_n(enriched, top)}


def render(view: Dict[str, Any], output_format: str, engine: DigestEngine, title: str) -> str:
    if output_format == "markdown":
        formatter = MarkdownFormatter(title=title, labeler=engine.label)
        if "clusters" in view:
            return formatter.format_cluster_report(view["clusters"], view.get("tags"))
        return formatter.format_digest(view["articles"])

    payload: Dict[str, Any] = {
        "articles": [
            dict(article.to_dict(), relevanceLabel=engine.label(article.relevance_score))
            for article in view["articles"]
        ]
    }
    if "clusters" in view:
        payload["clusters"] = [stat.to_dict() for stat in view["clusters"]]
        payload["tags"] = view.get("tags", [])
    return json.dumps(payload, indent=2, ensure_ascii=False)


def run(argv: Optional[List[str]] = None) -> int:
    """
    Run the CLI and return an exit code.
    """
    # Explicitly reload environment variables from .env file
    load_dotenv(override=True)

    args = parse_args(argv)
    configure_logging(args.verbose, args.log_file)

    config = load_config(args.config)

    now = None
    if args.now:
        now = parse_date(args.now)
        if now is None:
            logger.error(f"Invalid --now value: {args.now}")
            return 1

    try:
        engine = DigestEngine.from_config(config.config, args.profile)
    except KeyError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    try:
        articles = load_articles(args.articles)
    except (FileNotFoundError, ValueError) as e:
        logger.error(str(e))
        return 1

    top = args.top if args.top is not None else int(config.get('output.top_n', 10))
    view = build_view(args, engine, articles, top, now)
    output = render(view, args.format or config.get('output.format', 'json'), engine,
                    config.get('output.title', 'Weekly AI Digest'))

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(output)
        logger.info(f"Wrote {args.mode} view to {args.output}")
    else:
        print(output)

    return 0


def main():
    """
    Entry point for the command-line script.
    """
    try:
        return run()
    except KeyboardInterrupt:
        logger.info("Process interrupted by user")
        return 1
    except Exception as e:
        logger.exception(f"An error occurred: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
