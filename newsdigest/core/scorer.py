"""
Relevance scoring for News Digest.
"""
import logging
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from newsdigest.core.article import Article
from newsdigest.core.profile import ScoringProfile, default_profile, relevance_labels
from newsdigest.utils.dates import days_since

logger = logging.getLogger(__name__)


class RelevanceScorer:
    """
    Keyword, recency and source based relevance scoring.

    Scores are integers and never drop below the profile's minimum score.
    Malformed input degrades the affected bonus to zero instead of raising.
    """
    def __init__(self, profile: Optional[ScoringProfile] = None):
        """
        Initialize the scorer.

        Args:
            profile: Scoring profile to use (defaults to the 'default' profile)
        """
        self.profile = profile or default_profile()
        self._keywords = [keyword.lower() for keyword in self.profile.keywords]
        self._bonus_keywords = [keyword.lower() for keyword in self.profile.bonus_keywords]
        self._trusted_sources = [source.lower() for source in self.profile.trusted_sources]

    def keyword_points(self, title: str, description: str = "") -> int:
        """
        Points for relevance keywords found in title and description.

        Title and description are checked independently, so a keyword
        present in both earns both amounts.
        """
        title_lower = (title or "").lower()
        desc_lower = (description or "").lower()

        points = 0
        for keyword in self._keywords:
            if keyword in title_lower:
                points += self.profile.title_points
            if keyword in desc_lower:
                points += self.profile.description_points
        return points

    def recency_points(self, pub_date, now: Optional[datetime] = None) -> int:
        """
        Points for the first recency bucket the article's age falls into.

        Args:
            pub_date: Publish date (string or datetime)
            now: Reference time, defaults to the current UTC time

        Returns:
            Bucket points, or 0 if the date is missing or invalid
        """
        age = days_since(pub_date, now)
        if age is None:
            return 0
        for bucket in self.profile.recency_buckets:
            if age <= bucket.max_days:
                return bucket.points
        return 0

    def source_points(self, source_name: Optional[str]) -> int:
        points = 0
        if self.profile.custom_source and source_name == self.profile.custom_source:
            points += self.profile.custom_source_bonus

        source_lower = (source_name or "").lower()
        if source_lower and any(source in source_lower for source in self._trusted_sources):
            points += self.profile.trusted_source_bonus
        return points

    def bonus_points(self, title: str, description: str = "") -> int:
        if not self._bonus_keywords:
            return 0
        text = f"{title or ''} {description or ''}".lower()
        return sum(self.profile.bonus_keyword_points for keyword in self._bonus_keywords if keyword in text)

    def score(self, title: str, description: Optional[str] = "", pub_date=None,
              source_name: Optional[str] = None, now: Optional[datetime] = None) -> int:
        """
        Compute the relevance score for one article.

        Args:
            title: Article title
            description: Article description (optional)
            pub_date: Publish date (optional, invalid values are tolerated)
            source_name: Name of the source (optional)
            now: Reference time for the recency bonus

        Returns:
            Integer score, at least profile.minimum_score
        """
        description = description or ""
        total = (
            self.keyword_points(title, description)
            + self.recency_points(pub_date, now)
            + self.source_points(source_name)
            + self.bonus_points(title, description)
        )
        return max(total, self.profile.minimum_score)

    def score_article(self, article: Article, now: Optional[datetime] = None) -> int:
        return self.score(article.title, article.description, article.pub_date, article.source_name, now)

    def rank(self, articles: Sequence[Article], now: Optional[datetime] = None) -> List[Tuple[Article, int]]:
        """
        Score articles and sort them by descending score.

        The sort is stable: equal scores keep input order.
        """
        scored = [(article, self.score_article(article, now)) for article in articles]
        logger.debug(f"Scored {len(scored)} articles with profile '{self.profile.name}'")
        return sorted(scored, key=lambda item: item[1], reverse=True)


def relevance_label(score: int, thresholds: Optional[Sequence[Tuple[int, str]]] = None) -> str:
    """
    Human readable label for a relevance score.

    Args:
        score: Relevance score
        thresholds: (min_score, label) pairs, highest first

    Returns:
        Label of the first threshold the score reaches
    """
    thresholds = thresholds if thresholds is not None else relevance_labels()
    for min_score, label in thresholds:
        if score >= min_score:
            return label
    return thresholds[-1][1] if thresholds else ""
