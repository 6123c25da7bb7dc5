"""
Article data model for News Digest.
"""
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional


def _optional_str(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


@dataclass
class Article:
    """
    Represents an article as delivered by feed ingestion.
    """
    title: str
    link: str = ""
    description: str = ""
    pub_date: Optional[str] = None
    source_name: Optional[str] = None
    guid: Optional[str] = None
    categories: List[str] = field(default_factory=list)

    @property
    def key(self) -> str:
        """Identity used for de-duplication: guid if present, else link."""
        return self.guid or self.link

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Article":
        """
        Build an Article from an ingestion record.

        Accepts the camelCase keys of the feed records (pubDate, sourceName)
        as well as snake_case ones. Missing or null text fields become "".
        """
        categories = data.get("categories") or []
        if isinstance(categories, str):
            categories = [categories]
        pub_date = data.get("pubDate", data.get("pub_date"))
        return cls(
            title=str(data.get("title") or ""),
            link=str(data.get("link") or ""),
            description=str(data.get("description") or ""),
            pub_date=str(pub_date) if pub_date not in (None, "") else None,
            source_name=_optional_str(data.get("sourceName", data.get("source_name"))),
            guid=_optional_str(data.get("guid")),
            categories=[str(c) for c in categories],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "link": self.link,
            "description": self.description,
            "pubDate": self.pub_date,
            "sourceName": self.source_name,
            "guid": self.guid,
            "categories": list(self.categories),
        }


@dataclass
class EnrichedArticle(Article):
    """
    An Article plus its relevance score and cluster assignment.

    Derived on every load, never persisted.
    """
    cluster: str = ""
    matched_tags: List[str] = field(default_factory=list)
    relevance_score: int = 1
    cluster_relevance: int = 0

    @classmethod
    def from_article(cls, article: Article, cluster: str, matched_tags: List[str],
                     relevance_score: int, cluster_relevance: int) -> "EnrichedArticle":
        return cls(
            cluster=cluster,
            matched_tags=list(matched_tags),
            relevance_score=relevance_score,
            cluster_relevance=cluster_relevance,
            **{f.name: getattr(article, f.name) for f in fields(Article)},
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            "cluster": self.cluster,
            "matchedTags": list(self.matched_tags),
            "relevanceScore": self.relevance_score,
            "clusterRelevance": self.cluster_relevance,
        })
        return data


@dataclass
class ClusterStatistic:
    """
    Aggregate view of one cluster's member articles.
    """
    cluster: str
    count: int
    avg_relevance: int
    top_tags: List[str]
    latest_date: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cluster": self.cluster,
            "count": self.count,
            "avgRelevance": self.avg_relevance,
            "topTags": list(self.top_tags),
            "latestDate": self.latest_date,
        }
