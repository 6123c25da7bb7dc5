"""
Immutable scoring and clustering configuration.

The scorer and classifier receive these values at construction time and
never look at global configuration, so tests can hand them alternate
dictionaries.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from newsdigest.config import DEFAULT_CONFIG


@dataclass(frozen=True)
class RecencyBucket:
    max_days: int
    points: int


@dataclass(frozen=True)
class ScoringProfile:
    """
    Everything the relevance scorer needs to know.
    """
    name: str
    keywords: Tuple[str, ...]
    title_points: int = 3
    description_points: int = 1
    recency_buckets: Tuple[RecencyBucket, ...] = ()
    custom_source: Optional[str] = "Eigener"
    custom_source_bonus: int = 2
    trusted_sources: Tuple[str, ...] = ()
    trusted_source_bonus: int = 2
    bonus_keywords: Tuple[str, ...] = ()
    bonus_keyword_points: int = 1
    minimum_score: int = 1

    @classmethod
    def from_config(cls, config: Mapping[str, Any], name: str = "default") -> "ScoringProfile":
        """
        Build a profile from a configuration dict.

        Args:
            config: Full configuration dictionary (see DEFAULT_CONFIG)
            name: Profile name under config['profiles']

        Raises:
            KeyError: If the profile is not defined
        """
        relevance = config["relevance"]
        profiles = config.get("profiles", {})
        if name not in profiles:
            raise KeyError(f"Unknown scoring profile: {name}")
        overrides = profiles[name] or {}

        buckets = sorted(
            (RecencyBucket(int(b["max_days"]), int(b["points"])) for b in relevance.get("recency_buckets", [])),
            key=lambda b: b.max_days,
        )
        trusted = relevance.get("trusted_sources", []) if overrides.get("trusted_sources", True) else []

        return cls(
            name=name,
            keywords=tuple(relevance.get("keywords", [])),
            title_points=int(relevance.get("title_points", 3)),
            description_points=int(relevance.get("description_points", 1)),
            recency_buckets=tuple(buckets),
            custom_source=relevance.get("custom_source"),
            custom_source_bonus=int(relevance.get("custom_source_bonus", 2)),
            trusted_sources=tuple(trusted),
            trusted_source_bonus=int(relevance.get("trusted_source_bonus", 2)),
            bonus_keywords=tuple(overrides.get("bonus_keywords", [])),
            bonus_keyword_points=int(overrides.get("bonus_keyword_points", 1)),
            minimum_score=int(relevance.get("minimum_score", 1)),
        )


@dataclass(frozen=True)
class TopicCluster:
    label: str
    keywords: Tuple[str, ...]
    description: str = ""


@dataclass(frozen=True)
class ClusterCatalog:
    """
    Ordered topic clusters plus the per-keyword weight tiers.

    Definition order matters: on equal scores the earlier cluster wins.
    """
    clusters: Tuple[TopicCluster, ...]
    high_keywords: frozenset = field(default_factory=frozenset)
    medium_keywords: frozenset = field(default_factory=frozenset)
    high_points: int = 3
    medium_points: int = 2
    default_points: int = 1
    fallback: str = "Other"

    def weight(self, keyword: str) -> int:
        if keyword in self.high_keywords:
            return self.high_points
        if keyword in self.medium_keywords:
            return self.medium_points
        return self.default_points

    @property
    def labels(self) -> List[str]:
        return [cluster.label for cluster in self.clusters]

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "ClusterCatalog":
        weights = config.get("cluster_weights", {})
        fallback = weights.get("fallback", "Other")
        clusters = []
        for label, data in config.get("clusters", {}).items():
            # The fallback bucket is assigned, never scored
            if label == fallback:
                continue
            data = data or {}
            clusters.append(TopicCluster(
                label=label,
                keywords=tuple(data.get("keywords", [])),
                description=data.get("description", ""),
            ))
        return cls(
            clusters=tuple(clusters),
            high_keywords=frozenset(weights.get("high", [])),
            medium_keywords=frozenset(weights.get("medium", [])),
            high_points=int(weights.get("high_points", 3)),
            medium_points=int(weights.get("medium_points", 2)),
            default_points=int(weights.get("default_points", 1)),
            fallback=fallback,
        )


@dataclass(frozen=True)
class StudentFilter:
    keywords: Tuple[str, ...]
    tech_sources: Tuple[str, ...]

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "StudentFilter":
        student = config.get("student", {})
        return cls(
            keywords=tuple(student.get("keywords", [])),
            tech_sources=tuple(student.get("tech_sources", [])),
        )


def default_profile(name: str = "default") -> ScoringProfile:
    return ScoringProfile.from_config(DEFAULT_CONFIG, name)


def default_catalog() -> ClusterCatalog:
    return ClusterCatalog.from_config(DEFAULT_CONFIG)


def relevance_labels(config: Mapping[str, Any] = DEFAULT_CONFIG) -> List[Tuple[int, str]]:
    """Label thresholds, highest first."""
    labels: List[Dict[str, Any]] = config.get("labels", [])
    return sorted(((int(entry["min_score"]), entry["label"]) for entry in labels), reverse=True)
