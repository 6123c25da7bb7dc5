"""
Markdown formatter tests.
"""
from datetime import datetime

from newsdigest.core.article import ClusterStatistic
from newsdigest.formatters.markdown import MarkdownFormatter
from tests.conftest import enriched


def test_format_digest_lists_articles_in_order():
    formatter = MarkdownFormatter(title="KW 20", today=datetime(2024, 5, 15))
    articles = [
        enriched("First", score=9, cluster="Model Development", tags=["RAG"],
                 pub_date="2024-05-14T10:00:00Z"),
        enriched("Second", score=2, link=""),
    ]

    output = formatter.format_digest(articles)

    assert output.startswith("# KW 20\nGenerated on May 15, 2024")
    assert "### 1. [First](https://example.com/first)" in output
    assert "### 2. Second" in output
    assert "**Score:** 9 (very relevant)" in output
    assert "**Tags:** RAG" in output
    assert "**Published:** May 14, 2024" in output
    assert output.index("First") < output.index("Second")


def test_format_digest_without_articles():
    assert "*No articles found.*" in MarkdownFormatter().format_digest([])


def test_format_cluster_report():
    stats = [
        ClusterStatistic("Model Development", 3, 7, ["GPT-4", "RAG"], "2024-05-14T10:00:00+00:00"),
        ClusterStatistic("Other", 1, 1, [], None),
    ]
    output = MarkdownFormatter().format_cluster_report(stats, ["GPT-4", "RAG"])

    assert "## Model Development" in output
    assert "- Average relevance: 7" in output
    assert "- Top tags: GPT-4, RAG" in output
    assert "- Latest article: May 14, 2024" in output
    assert "## All Tags\nGPT-4, RAG" in output
