#!/usr/bin/env python3
"""
Topic cluster and cross-source comparison models.
"""

import math
from datetime import datetime, timezone
from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional, Tuple

from .article import Article


@dataclass(frozen=True)
class TopicCluster:
    """Articles sharing a topic label within one run. Never persisted."""
    topic: str
    articles: Tuple[Article, ...]

    @property
    def distinct_sources(self) -> List[str]:
        """Source names in first-seen order, without repeats."""
        seen: List[str] = []
        for article in self.articles:
            if article.source not in seen:
                seen.append(article.source)
        return seen

    @property
    def is_cross_source(self) -> bool:
        return len(self.distinct_sources) >= 2

    def __len__(self) -> int:
        return len(self.articles)


@dataclass(frozen=True)
class BiasDistribution:
    """Share of coverage per leaning, in whole percentages summing to 100."""
    left: int = 33
    center: int = 34
    right: int = 33

    def __post_init__(self):
        values = (self.left, self.center, self.right)
        if any(value < 0 for value in values) or sum(values) != 100:
            raise ValueError(f"Bias distribution must be non-negative and sum to 100, got {values}")

    @classmethod
    def normalized(cls, left: float, center: float, right: float) -> 'BiasDistribution':
        """
        Scale arbitrary non-negative weights to integer percentages.

        Uses largest-remainder rounding so the parts always sum to 100.
        An all-zero or non-finite input yields the default 33/34/33 split.
        """
        weights = [max(0.0, float(value)) for value in (left, center, right)]
        total = sum(weights)
        if total <= 0 or not math.isfinite(total):
            return cls()

        exact = [weight / total * 100.0 for weight in weights]
        if not all(math.isfinite(value) for value in exact):
            return cls()
        floors = [int(value) for value in exact]
        remainder = 100 - sum(floors)
        order = sorted(range(3), key=lambda i: exact[i] - floors[i], reverse=True)
        for i in order[:remainder]:
            floors[i] += 1
        return cls(left=floors[0], center=floors[1], right=floors[2])

    def to_dict(self) -> Dict[str, int]:
        return {'left': self.left, 'center': self.center, 'right': self.right}


@dataclass(frozen=True)
class Comparison:
    """
    Cross-source verdict for one topic.

    The scoring fields are filled in by the scoring engine after the
    comparator has produced the verdict.
    """
    topic: str
    sources: Tuple[str, ...]
    consensus_level: int
    factual_accuracy: int
    bias_distribution: BiasDistribution
    article_count: int
    major_discrepancies: Tuple[str, ...] = ()
    propaganda_patterns: Tuple[str, ...] = ()
    media_manipulation: str = ""
    public_impact: str = ""
    recommended_action: str = ""
    public_interest_score: Optional[int] = None
    overall_credibility: Optional[int] = None
    source_diversity: Optional[int] = None
    bias_spread: Optional[int] = None
    diversity_label: Optional[str] = None
    analyzed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        if len(set(self.sources)) < 2:
            raise ValueError(f"A comparison needs at least two distinct sources, got {list(self.sources)}")
        for name in ('consensus_level', 'factual_accuracy'):
            value = getattr(self, name)
            if not 0 <= value <= 100:
                raise ValueError(f"{name} must be within 0-100, got {value}")

    @property
    def is_scored(self) -> bool:
        return self.public_interest_score is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'topic': self.topic,
            'sources': list(self.sources),
            'consensus_level': self.consensus_level,
            'major_discrepancies': list(self.major_discrepancies),
            'propaganda_patterns': list(self.propaganda_patterns),
            'factual_accuracy': self.factual_accuracy,
            'political_bias': self.bias_distribution.to_dict(),
            'media_manipulation': self.media_manipulation,
            'public_impact': self.public_impact,
            'recommended_action': self.recommended_action,
            'article_count': self.article_count,
            'public_interest_score': self.public_interest_score,
            'overall_credibility': self.overall_credibility,
            'source_diversity': self.source_diversity,
            'bias_spread': self.bias_spread,
            'diversity_label': self.diversity_label,
            'analysis_date': self.analyzed_at.isoformat(),
        }
