"""
Digest engine: enrichment plus the rankings used by the digest views.
"""
import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from newsdigest.config import DEFAULT_CONFIG
from newsdigest.core import aggregator
from newsdigest.core.article import Article, ClusterStatistic, EnrichedArticle
from newsdigest.core.classifier import ClusterClassifier
from newsdigest.core.profile import ClusterCatalog, ScoringProfile, StudentFilter, relevance_labels
from newsdigest.core.scorer import RelevanceScorer, relevance_label

logger = logging.getLogger(__name__)

ArticleLike = Union[Article, Mapping[str, Any]]


def _as_article(item: ArticleLike) -> Article:
    if isinstance(item, Article):
        return item
    return Article.from_dict(item)


class DigestEngine:
    """
    Scores and clusters articles and builds the ranked views.

    Pure computation: the same input list and the same `now` always give
    the same output.
    """
    def __init__(self, scorer: Optional[RelevanceScorer] = None,
                 classifier: Optional[ClusterClassifier] = None,
                 student_scorer: Optional[RelevanceScorer] = None,
                 student_filter: Optional[StudentFilter] = None,
                 labels: Optional[Sequence] = None,
                 top_tag_limit: int = 5):
        self.scorer = scorer or RelevanceScorer()
        self.classifier = classifier or ClusterClassifier()
        self.student_scorer = student_scorer or self.scorer
        self.student_filter = student_filter or StudentFilter.from_config(DEFAULT_CONFIG)
        self.labels = list(labels) if labels is not None else relevance_labels()
        self.top_tag_limit = top_tag_limit

    @classmethod
    def from_config(cls, config: Mapping[str, Any], profile: str = "default") -> "DigestEngine":
        """
        Build an engine from a configuration dictionary.

        Args:
            config: Configuration dictionary (see DEFAULT_CONFIG)
            profile: Scoring profile for the general rankings

        Raises:
            KeyError: If the profile is not defined
        """
        student_profile = "student" if "student" in config.get("profiles", {}) else profile
        return cls(
            scorer=RelevanceScorer(ScoringProfile.from_config(config, profile)),
            classifier=ClusterClassifier(ClusterCatalog.from_config(config)),
            student_scorer=RelevanceScorer(ScoringProfile.from_config(config, student_profile)),
            student_filter=StudentFilter.from_config(config),
            labels=relevance_labels(config),
            top_tag_limit=int(config.get("output", {}).get("top_tags", 5)),
        )

    def enrich(self, item: ArticleLike, now: Optional[datetime] = None) -> EnrichedArticle:
        article = _as_article(item)
        match = self.classifier.classify_article(article)
        return EnrichedArticle.from_article(
            article,
            cluster=match.cluster,
            matched_tags=match.matched_tags,
            relevance_score=self.scorer.score_article(article, now),
            cluster_relevance=match.score,
        )

    def enrich_all(self, items: Iterable[ArticleLike], now: Optional[datetime] = None) -> List[EnrichedArticle]:
        enriched = [self.enrich(item, now) for item in items]
        logger.debug(f"Enriched {len(enriched)} articles")
        return enriched

    def top_articles(self, items: Iterable[ArticleLike], n: int = 10,
                     now: Optional[datetime] = None) -> List[EnrichedArticle]:
        """Top n unique articles by relevance."""
        return aggregator.top_n(self.enrich_all(items, now), n)

    def weekly_top(self, items: Iterable[ArticleLike], n: int = 10,
                   now: Optional[datetime] = None) -> List[EnrichedArticle]:
        """Top n unique articles published in the current week."""
        articles = aggregator.filter_current_week([_as_article(i) for i in items], now)
        return self.top_articles(articles, n, now)

    def student_top_articles(self, items: Iterable[ArticleLike], n: int = 10,
                             now: Optional[datetime] = None) -> List[EnrichedArticle]:
        """
        Top n student-relevant articles of the current week, ranked with
        the student profile.
        """
        this_week = aggregator.filter_current_week([_as_article(i) for i in items], now)
        articles = aggregator.filter_student_relevant(
            aggregator.dedupe_articles(this_week), self.student_filter
        )
        enriched = []
        for article in articles:
            result = self.enrich(article, now)
            result.relevance_score = self.student_scorer.score_article(article, now)
            enriched.append(result)
        return aggregator.sort_articles(enriched)[:max(n, 0)]

    def cluster_statistics(self, enriched: Sequence[EnrichedArticle]) -> List[ClusterStatistic]:
        order = self.classifier.catalog.labels + [self.classifier.catalog.fallback]
        return aggregator.cluster_statistics(enriched, order, self.top_tag_limit)

    def search(self, enriched: Iterable[EnrichedArticle], search: Optional[str] = None,
               cluster: Optional[str] = None, tag: Optional[str] = None,
               sort_by: str = "relevance", descending: bool = True) -> List[EnrichedArticle]:
        filtered = aggregator.filter_articles(enriched, search=search, cluster=cluster, tag=tag)
        return aggregator.sort_articles(filtered, by=sort_by, descending=descending)

    def label(self, score: int) -> str:
        return relevance_label(score, self.labels)

    def report(self, items: Iterable[ArticleLike], now: Optional[datetime] = None) -> Dict[str, Any]:
        """
        Enriched articles, cluster statistics and tag list in one pass.
        """
        enriched = aggregator.dedupe_articles(self.enrich_all(items, now))
        return {
            "articles": enriched,
            "clusters": self.cluster_statistics(enriched),
            "tags": aggregator.unique_tags(enriched),
        }
