#!/usr/bin/env python3
"""
Store contract and row mapping for the two persisted tables.

news_articles is keyed by URL and news_comparisons by topic. Both writes
are idempotent upserts: a conflicting row keeps its identity columns and
has only the refreshable columns overwritten.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, Any, Optional

from ..models.article import ArticleRecord
from ..models.comparison import Comparison

logger = logging.getLogger(__name__)

ARTICLES_TABLE = 'news_articles'
COMPARISONS_TABLE = 'news_comparisons'

ARTICLE_COLUMNS = (
    'url', 'title', 'source', 'published_at', 'summary', 'content', 'bias',
    'credibility_score', 'propaganda_techniques', 'key_topics',
    'politicians_involved', 'factuality_score', 'emotional_tone', 'claims',
    'analysis_origin', 'public_impact', 'bias_score', 'sentiment_score',
    'analysis_date',
)

# Overwritten when the URL is already stored; title, source and
# published_at stay as first seen.
ARTICLE_UPDATE_COLUMNS = (
    'content', 'bias', 'propaganda_techniques', 'key_topics',
    'politicians_involved', 'factuality_score', 'emotional_tone', 'claims',
    'analysis_origin', 'public_impact', 'bias_score', 'sentiment_score',
    'analysis_date',
)

COMPARISON_COLUMNS = (
    'topic', 'sources', 'consensus_level', 'major_discrepancies',
    'propaganda_patterns', 'factual_accuracy', 'political_bias',
    'media_manipulation', 'public_impact', 'recommended_action',
    'article_count', 'public_interest_score', 'overall_credibility',
    'source_diversity', 'bias_spread', 'diversity_label', 'analysis_date',
)

COMPARISON_UPDATE_COLUMNS = ('consensus_level', 'factual_accuracy', 'analysis_date')

# Columns holding lists or objects
JSON_COLUMNS = frozenset((
    'propaganda_techniques', 'key_topics', 'politicians_involved', 'claims',
    'sources', 'major_discrepancies', 'propaganda_patterns', 'political_bias',
))


def article_row(record: ArticleRecord, analysis_date: Optional[datetime] = None) -> Dict[str, Any]:
    """Column values for one news_articles row."""
    article = record.article
    enrichment = article.enrichment
    return {
        'url': article.url,
        'title': article.title,
        'source': article.source,
        'published_at': article.core.published,
        'summary': article.core.summary,
        'content': article.core.body or article.core.summary,
        'bias': article.effective_bias.value,
        'credibility_score': article.core.credibility,
        'propaganda_techniques': list(enrichment.techniques),
        'key_topics': list(enrichment.topics),
        'politicians_involved': list(enrichment.officials),
        'factuality_score': enrichment.factuality,
        'emotional_tone': enrichment.tone,
        'claims': [claim.to_dict() for claim in enrichment.claims],
        'analysis_origin': enrichment.origin,
        'public_impact': record.public_impact,
        'bias_score': record.bias_score,
        'sentiment_score': record.sentiment_score,
        'analysis_date': analysis_date or datetime.now(timezone.utc),
    }


def comparison_row(comparison: Comparison, analysis_date: Optional[datetime] = None) -> Dict[str, Any]:
    """Column values for one news_comparisons row."""
    return {
        'topic': comparison.topic,
        'sources': list(comparison.sources),
        'consensus_level': comparison.consensus_level,
        'major_discrepancies': list(comparison.major_discrepancies),
        'propaganda_patterns': list(comparison.propaganda_patterns),
        'factual_accuracy': comparison.factual_accuracy,
        'political_bias': comparison.bias_distribution.to_dict(),
        'media_manipulation': comparison.media_manipulation,
        'public_impact': comparison.public_impact,
        'recommended_action': comparison.recommended_action,
        'article_count': comparison.article_count,
        'public_interest_score': comparison.public_interest_score,
        'overall_credibility': comparison.overall_credibility,
        'source_diversity': comparison.source_diversity,
        'bias_spread': comparison.bias_spread,
        'diversity_label': comparison.diversity_label,
        'analysis_date': analysis_date or comparison.analyzed_at,
    }


class NewsStore(ABC):
    """
    Backend for the two news tables.

    Implementations raise PersistenceError subclasses; the persistence
    adapter turns those into unit results.
    """

    name = "abstract"

    @abstractmethod
    def upsert_article(self, record: ArticleRecord) -> None:
        pass

    @abstractmethod
    def upsert_comparison(self, comparison: Comparison) -> None:
        pass

    @abstractmethod
    def get_article(self, url: str) -> Optional[Dict[str, Any]]:
        pass

    @abstractmethod
    def get_comparison(self, topic: str) -> Optional[Dict[str, Any]]:
        pass

    def health_check(self) -> Dict[str, Any]:
        return {'status': 'healthy', 'backend': self.name}

    def close(self) -> None:
        pass


class MemoryStore(NewsStore):
    """In-process store with the same upsert semantics as the database."""

    name = "memory"

    def __init__(self):
        self.articles: Dict[str, Dict[str, Any]] = {}
        self.comparisons: Dict[str, Dict[str, Any]] = {}

    def upsert_article(self, record: ArticleRecord) -> None:
        row = article_row(record)
        existing = self.articles.get(row['url'])
        if existing is None:
            self.articles[row['url']] = row
        else:
            existing.update({column: row[column] for column in ARTICLE_UPDATE_COLUMNS})

    def upsert_comparison(self, comparison: Comparison) -> None:
        row = comparison_row(comparison)
        existing = self.comparisons.get(row['topic'])
        if existing is None:
            self.comparisons[row['topic']] = row
        else:
            existing.update({column: row[column] for column in COMPARISON_UPDATE_COLUMNS})

    def get_article(self, url: str) -> Optional[Dict[str, Any]]:
        row = self.articles.get(url)
        return dict(row) if row else None

    def get_comparison(self, topic: str) -> Optional[Dict[str, Any]]:
        row = self.comparisons.get(topic)
        return dict(row) if row else None

    def health_check(self) -> Dict[str, Any]:
        return {
            'status': 'healthy',
            'backend': self.name,
            'articles': len(self.articles),
            'comparisons': len(self.comparisons),
        }
