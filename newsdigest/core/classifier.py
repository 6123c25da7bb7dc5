"""
Topic cluster classification for News Digest.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from newsdigest.core.article import Article
from newsdigest.core.profile import ClusterCatalog, default_catalog


@dataclass
class ClusterMatch:
    cluster: str
    score: int = 0
    matched_tags: List[str] = field(default_factory=list)


class ClusterClassifier:
    """
    Assigns articles to the best matching topic cluster.

    Every cluster is scored by summing the weights of its keywords found in
    the lowercased title and description. The highest score wins, ties go to
    the cluster defined first, and articles without any hit land in the
    catalog's fallback bucket with a score of 0.
    """
    def __init__(self, catalog: Optional[ClusterCatalog] = None):
        self.catalog = catalog or default_catalog()

    def score_clusters(self, text: str) -> Dict[str, ClusterMatch]:
        """
        Score every cluster against already lowercased text.

        Args:
            text: Lowercased title + description

        Returns:
            Dict mapping cluster label to its match, in definition order
        """
        matches = {}
        for cluster in self.catalog.clusters:
            match = ClusterMatch(cluster=cluster.label)
            for keyword in cluster.keywords:
                if keyword.lower() in text:
                    match.score += self.catalog.weight(keyword)
                    match.matched_tags.append(keyword)
            matches[cluster.label] = match
        return matches

    def classify(self, title: str, description: Optional[str] = "") -> ClusterMatch:
        """
        Classify a title/description pair.

        Args:
            title: Article title
            description: Article description (optional)

        Returns:
            ClusterMatch with the winning label, its score and the keywords
            matched for that cluster only
        """
        text = f"{title or ''} {description or ''}".lower()

        best = ClusterMatch(cluster=self.catalog.fallback)
        for match in self.score_clusters(text).values():
            if match.score > best.score:
                best = match
        return best

    def classify_article(self, article: Article) -> ClusterMatch:
        return self.classify(article.title, article.description)
