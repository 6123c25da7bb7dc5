"""
Shared fixtures for the News Digest tests.
"""
from datetime import datetime, timedelta, timezone

import pytest

from newsdigest.core.article import Article, EnrichedArticle

# Wednesday
NOW = datetime(2024, 5, 15, 12, 0, tzinfo=timezone.utc)


def days_ago(days: float) -> str:
    return (NOW - timedelta(days=days)).isoformat()


def enriched(title: str = "Untitled", score: int = 1, cluster: str = "Other", tags=None,
             pub_date=None, guid=None, link=None, cluster_relevance: int = 0,
             description: str = "") -> EnrichedArticle:
    return EnrichedArticle(
        title=title,
        link=link if link is not None else f"https://example.com/{title.lower().replace(' ', '-')}",
        description=description,
        pub_date=pub_date,
        guid=guid,
        cluster=cluster,
        matched_tags=list(tags or []),
        relevance_score=score,
        cluster_relevance=cluster_relevance,
    )


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def sample_records():
    return [
        {
            "title": "OpenAI releases GPT-4 with RAG support",
            "description": "",
            "pubDate": days_ago(0.1),
            "sourceName": "Eigener",
            "guid": "a1",
            "link": "https://example.com/gpt4",
        },
        {
            "title": "EU AI Act passes final vote",
            "description": "New rules on Deepfakes and Bias",
            "pubDate": days_ago(2),
            "sourceName": "Wired",
            "guid": "a2",
            "link": "https://example.com/eu-ai-act",
        },
        {
            "title": "Local bakery opens on Sunday",
            "description": None,
            "pubDate": None,
            "sourceName": "Village Gazette",
            "guid": "a3",
            "link": "https://example.com/bakery",
        },
        {
            "title": "Karriere als Student bei Startup",
            "description": "",
            "pubDate": days_ago(9),
            "sourceName": None,
            "guid": "a4",
            "link": "https://example.com/karriere",
        },
    ]


@pytest.fixture
def sample_articles(sample_records):
    return [Article.from_dict(record) for record in sample_records]
