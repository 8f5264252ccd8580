#!/usr/bin/env python3
"""
Article data model.

An article is a fetched feed entry (``ArticleCore``) that may or may not
carry an ``Enrichment`` yet. The enricher is the only place that moves an
article from the bare state to the enriched state.
"""

from datetime import datetime, timezone
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Any, Optional, Tuple


class Bias(str, Enum):
    """Declared or detected political leaning."""
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"

    @classmethod
    def parse(cls, value: Any) -> Optional['Bias']:
        """Return the matching Bias, or None for anything unrecognised."""
        if isinstance(value, Bias):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


EMOTIONAL_TONES = ("neutral", "positive", "negative", "angry", "fearful", "hopeful")
DEFAULT_TONE = "neutral"
DEFAULT_FACTUALITY = 70


@dataclass(frozen=True)
class Claim:
    """A factual claim extracted from an article."""
    text: str
    evidence: str = ""
    verifiable: bool = False
    contradictions: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            'claim': self.text,
            'evidence': self.evidence,
            'verifiable': self.verifiable,
            'contradictions': list(self.contradictions),
        }


@dataclass(frozen=True)
class Enrichment:
    """Derived analysis attached to an article."""
    techniques: Tuple[str, ...] = ()
    topics: Tuple[str, ...] = ()
    officials: Tuple[str, ...] = ()
    factuality: int = DEFAULT_FACTUALITY
    tone: str = DEFAULT_TONE
    claims: Tuple[Claim, ...] = ()
    bias_override: Optional[Bias] = None
    propaganda_analysis: str = ""
    credibility_assessment: str = ""
    origin: str = "service"  # "service" or "fallback"
    analyzed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        if not 0 <= self.factuality <= 100:
            raise ValueError(f"factuality must be within 0-100, got {self.factuality}")
        if self.tone not in EMOTIONAL_TONES:
            raise ValueError(f"unknown emotional tone: {self.tone}")

    @property
    def is_fallback(self) -> bool:
        return self.origin == "fallback"


@dataclass(frozen=True)
class ArticleCore:
    """Fields known as soon as a feed entry is fetched."""
    url: str
    title: str
    source: str
    summary: str = ""
    body: str = ""
    published: Optional[datetime] = None
    bias: Bias = Bias.CENTER
    credibility: int = 50

    def text_for_matching(self) -> str:
        """Title and summary, the text every keyword test runs against."""
        return f"{self.title} {self.summary}"


@dataclass(frozen=True)
class Article:
    """
    A news article in either of its two states.

    ``enrichment`` is None until the enricher has run; after that the
    article is only replaced, never edited.
    """
    core: ArticleCore
    enrichment: Optional[Enrichment] = None

    @property
    def url(self) -> str:
        return self.core.url

    @property
    def title(self) -> str:
        return self.core.title

    @property
    def source(self) -> str:
        return self.core.source

    @property
    def is_enriched(self) -> bool:
        return self.enrichment is not None

    @property
    def effective_bias(self) -> Bias:
        """Source bias unless the analysis detected a different one."""
        if self.enrichment and self.enrichment.bias_override:
            return self.enrichment.bias_override
        return self.core.bias

    @property
    def topics(self) -> Tuple[str, ...]:
        return self.enrichment.topics if self.enrichment else ()

    def with_body(self, body: str) -> 'Article':
        return replace(self, core=replace(self.core, body=body))

    def with_enrichment(self, enrichment: Enrichment) -> 'Article':
        if self.enrichment is not None:
            raise ValueError(f"Article already enriched: {self.url}")
        return replace(self, enrichment=enrichment)

    def to_dict(self) -> Dict[str, Any]:
        """Flatten to a dictionary for prompts, logging and storage."""
        data = {
            'url': self.core.url,
            'title': self.core.title,
            'source': self.core.source,
            'summary': self.core.summary,
            'content': self.core.body or self.core.summary,
            'published_at': self.core.published.isoformat() if self.core.published else None,
            'bias': self.effective_bias.value,
            'credibility_score': self.core.credibility,
        }
        if self.enrichment:
            data.update({
                'propaganda_techniques': list(self.enrichment.techniques),
                'key_topics': list(self.enrichment.topics),
                'politicians_involved': list(self.enrichment.officials),
                'factuality_score': self.enrichment.factuality,
                'emotional_tone': self.enrichment.tone,
                'claims': [claim.to_dict() for claim in self.enrichment.claims],
                'analysis_origin': self.enrichment.origin,
            })
        return data

    def __repr__(self):
        state = "enriched" if self.is_enriched else "bare"
        return f"Article(title='{self.core.title[:50]}...', source='{self.core.source}', {state})"


@dataclass(frozen=True)
class ArticleRecord:
    """An enriched article plus the scores persisted alongside it."""
    article: Article
    public_impact: int
    bias_score: int
    sentiment_score: int

    def __post_init__(self):
        if self.article.enrichment is None:
            raise ValueError(f"Cannot build a record for an unenriched article: {self.article.url}")
