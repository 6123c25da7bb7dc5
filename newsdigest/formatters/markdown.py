"""
Markdown formatting utilities for News Digest.
"""
import logging
from datetime import datetime
from typing import Callable, List, Optional

from newsdigest.core.article import ClusterStatistic, EnrichedArticle
from newsdigest.core.scorer import relevance_label
from newsdigest.utils.dates import parse_date

# Configure logging
logger = logging.getLogger(__name__)


class MarkdownFormatter:
    """
    Formats ranked articles and cluster statistics as Markdown.
    """
    def __init__(self, title: str = "Weekly AI Digest", labeler: Optional[Callable[[int], str]] = None,
                 today: Optional[datetime] = None):
        """
        Initialize the MarkdownFormatter.

        Args:
            title: Heading used for the digest
            labeler: Maps a relevance score to a label
            today: Generation date shown in the header
        """
        self.title = title
        self.labeler = labeler or relevance_label
        self.today = (today or datetime.now()).strftime("%B %d, %Y")

    def format_date(self, value: Optional[str]) -> Optional[str]:
        published = parse_date(value)
        if published is None:
            return value or None
        return published.strftime("%B %d, %Y")

    def format_article_metadata(self, article: EnrichedArticle) -> str:
        """
        Format article metadata with consistent layout.

        Args:
            article: The article to format metadata for

        Returns:
            Formatted metadata string
        """
        metadata = [
            f"**Score:** {article.relevance_score} ({self.labeler(article.relevance_score)})",
            f"**Cluster:** {article.cluster or 'Unclassified'}",
        ]
        if article.matched_tags:
            metadata.append(f"**Tags:** {', '.join(article.matched_tags)}")
        if article.source_name:
            metadata.append(f"**Source:** {article.source_name}")
        published = self.format_date(article.pub_date)
        if published:
            metadata.append(f"**Published:** {published}")

        return " ".join(metadata)

    def format_article(self, position: int, article: EnrichedArticle) -> str:
        heading = f"[{article.title}]({article.link})" if article.link else article.title
        lines = [f"### {position}. {heading}", "", self.format_article_metadata(article)]
        if article.description:
            lines.extend(["", article.description.strip()])
        return "\n".join(lines)

    def format_digest(self, articles: List[EnrichedArticle]) -> str:
        """
        Format the ranked articles as a digest.

        Args:
            articles: Ranked articles, best first

        Returns:
            Markdown document
        """
        content = [
            f"# {self.title}",
            f"Generated on {self.today}",
            "",
            f"## Top {len(articles)} Articles",
            "",
        ]
        if not articles:
            content.append("*No articles found.*")

        for position, article in enumerate(articles, 1):
            content.append(self.format_article(position, article))
            content.append("")
            content.append("---")
            content.append("")

        logger.debug(f"Formatted digest with {len(articles)} articles")
        return "\n".join(content)

    def format_cluster_report(self, stats: List[ClusterStatistic], tags: Optional[List[str]] = None) -> str:
        """
        Format cluster statistics as a report.

        Args:
            stats: Cluster statistics, as ordered by the aggregator
            tags: Optional list of all matched tags

        Returns:
            Markdown document
        """
        content = [
            f"# {self.title} - Topic Clusters",
            f"Generated on {self.today}",
            "",
        ]
        for stat in stats:
            content.append(f"## {stat.cluster}")
            content.append(f"- Articles: {stat.count}")
            content.append(f"- Average relevance: {stat.avg_relevance}")
            if stat.top_tags:
                content.append(f"- Top tags: {', '.join(stat.top_tags)}")
            latest = self.format_date(stat.latest_date)
            if latest:
                content.append(f"- Latest article: {latest}")
            content.append("")

        if tags:
            content.append("## All Tags")
            content.append(", ".join(tags))
            content.append("")

        return "\n".join(content)
