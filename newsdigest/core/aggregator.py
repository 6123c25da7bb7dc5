"""
Rankings, cluster statistics and filtered views over enriched articles.
"""
import logging
import math
from collections import Counter, OrderedDict
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence, TypeVar

from newsdigest.core.article import Article, ClusterStatistic, EnrichedArticle
from newsdigest.core.profile import StudentFilter
from newsdigest.utils.dates import parse_date, to_iso, utc_now, week_key, week_start

logger = logging.getLogger(__name__)

A = TypeVar("A", bound=Article)

SORT_FIELDS = ("relevance", "cluster_relevance", "date")


def dedupe_articles(articles: Iterable[A]) -> List[A]:
    """
    Drop duplicate articles, keyed by guid (preferred) or link.

    The last record seen for a key wins; it takes the position of the
    key's first appearance. Records with neither guid nor link are kept.
    """
    unique: "OrderedDict[object, A]" = OrderedDict()
    for index, article in enumerate(articles):
        key = article.key or ("__anonymous__", index)
        unique[key] = article
    return list(unique.values())


def _date_sort_key(article: Article):
    published = parse_date(article.pub_date)
    if published is None:
        return (0, 0.0)
    return (1, published.timestamp())


def sort_articles(articles: Iterable[EnrichedArticle], by: str = "relevance",
                  descending: bool = True) -> List[EnrichedArticle]:
    """
    Stable sort by relevance, cluster relevance or publish date.

    Articles without a valid date sort as the oldest.

    Raises:
        ValueError: If `by` is not a known sort field
    """
    if by == "relevance":
        key = lambda a: a.relevance_score
    elif by == "cluster_relevance":
        key = lambda a: a.cluster_relevance
    elif by == "date":
        key = _date_sort_key
    else:
        raise ValueError(f"Unknown sort field: {by} (expected one of {', '.join(SORT_FIELDS)})")
    return sorted(articles, key=key, reverse=descending)


def top_n(articles: Iterable[EnrichedArticle], n: int = 10, by: str = "relevance") -> List[EnrichedArticle]:
    """De-duplicate, sort descending and keep the first n."""
    ranked = sort_articles(dedupe_articles(articles), by=by)
    return ranked[:max(n, 0)]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def top_tags(articles: Iterable[EnrichedArticle], limit: int = 5) -> List[str]:
    """
    Most frequent matched tags, ties in order of first encounter.
    """
    counts = Counter()
    for article in articles:
        counts.update(article.matched_tags)
    # Counter keeps insertion order and sorted() is stable
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [tag for tag, _ in ranked[:limit]]


def latest_date(articles: Iterable[Article]) -> Optional[str]:
    """
    Most recent publish date among the articles as ISO-8601.

    Dates are compared as timestamps; unparseable dates are ignored.
    """
    dates = [d for d in (parse_date(a.pub_date) for a in articles) if d is not None]
    return to_iso(max(dates)) if dates else None


def cluster_statistics(articles: Sequence[EnrichedArticle], cluster_order: Optional[Sequence[str]] = None,
                       tag_limit: int = 5) -> List[ClusterStatistic]:
    """
    Per-cluster count, average relevance, top tags and latest date.

    Only clusters with members are reported, in the order of
    `cluster_order` followed by any other clusters in order of appearance.

    Args:
        articles: Enriched articles
        cluster_order: Preferred cluster order (usually catalog labels)
        tag_limit: Number of top tags per cluster
    """
    members: Dict[str, List[EnrichedArticle]] = OrderedDict((label, []) for label in cluster_order or [])
    for article in articles:
        if not article.cluster:
            continue
        members.setdefault(article.cluster, []).append(article)

    stats = []
    for cluster, group in members.items():
        if not group:
            continue
        stats.append(ClusterStatistic(
            cluster=cluster,
            count=len(group),
            avg_relevance=_round_half_up(sum(a.relevance_score for a in group) / len(group)),
            top_tags=top_tags(group, tag_limit),
            latest_date=latest_date(group),
        ))

    logger.debug(f"Computed statistics for {len(stats)} clusters from {len(articles)} articles")
    return stats


def unique_tags(articles: Iterable[EnrichedArticle]) -> List[str]:
    return sorted({tag for article in articles for tag in article.matched_tags})


def matches_search(article: EnrichedArticle, search: str) -> bool:
    needle = search.lower()
    return (
        needle in (article.title or "").lower()
        or needle in (article.description or "").lower()
        or any(needle in tag.lower() for tag in article.matched_tags)
    )


def filter_articles(articles: Iterable[EnrichedArticle], search: Optional[str] = None,
                    cluster: Optional[str] = None, tag: Optional[str] = None) -> List[EnrichedArticle]:
    """
    Filter enriched articles; active filters are AND-combined.

    Args:
        search: Case-insensitive substring of title, description or a tag
        cluster: Exact cluster label
        tag: Exact matched tag
    """
    filtered = list(articles)
    if search:
        filtered = [a for a in filtered if matches_search(a, search)]
    if cluster:
        filtered = [a for a in filtered if a.cluster == cluster]
    if tag:
        filtered = [a for a in filtered if tag in a.matched_tags]
    return filtered


def is_student_relevant(article: Article, student_filter: StudentFilter) -> bool:
    text = f"{article.title} {article.description or ''} {' '.join(article.categories)}".lower()
    if any(keyword.lower() in text for keyword in student_filter.keywords):
        return True
    source = (article.source_name or "").lower()
    return bool(source) and any(s.lower() in source for s in student_filter.tech_sources)


def filter_student_relevant(articles: Iterable[A], student_filter: StudentFilter) -> List[A]:
    return [article for article in articles if is_student_relevant(article, student_filter)]


def filter_current_week(articles: Iterable[A], now: Optional[datetime] = None) -> List[A]:
    """
    Articles published between Monday 00:00 of the current week and now.

    Articles without a usable date are kept. The result is newest first,
    with undated articles treated as published now.
    """
    now = parse_date(now) or utc_now()
    start = week_start(now)

    kept = []
    for article in articles:
        published = parse_date(article.pub_date)
        if published is None or start <= published <= now:
            kept.append((published or now, article))

    logger.debug(f"Current week filter kept {len(kept)} articles")
    return [article for _, article in sorted(kept, key=lambda item: item[0], reverse=True)]


def group_by_week(articles: Iterable[A], now: Optional[datetime] = None) -> Dict[str, List[A]]:
    """
    Group articles by ISO week key ('2024-W07'); undated go to now's week.
    """
    now = parse_date(now) or utc_now()
    weeks: Dict[str, List[A]] = {}
    for article in articles:
        published = parse_date(article.pub_date) or now
        weeks.setdefault(week_key(published), []).append(article)
    return dict(sorted(weeks.items(), reverse=True))
