#!/usr/bin/env python3
"""
Article enrichment stage.

Moves an article from bare to enriched: fetch the full page when possible,
ask the intelligence service for a verdict, normalize it, and fall back to
deterministic keyword extraction when the service cannot help.
"""

import logging
from typing import Dict, Any, List, Optional

from ..content.fetcher import ContentFetcher
from ..exceptions import IntelligenceError
from ..models.article import (
    Article, Bias, Claim, Enrichment, EMOTIONAL_TONES, DEFAULT_TONE, DEFAULT_FACTUALITY
)
from ..models.results import UnitResult
from .intelligence import IntelligenceService
from .keywords import extract_basic_topics, extract_officials

logger = logging.getLogger(__name__)


def string_list(value: Any) -> List[str]:
    """Coerce a verdict field to a list of non-empty strings."""
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    elif not isinstance(value, (list, tuple)):
        return []
    items = []
    for item in value:
        if item is None:
            continue
        text = str(item).strip()
        if text and text not in items:
            items.append(text)
    return items


def clamp_score(value: Any, default: int) -> int:
    """Integer in [0, 100]; default for anything non-numeric."""
    if isinstance(value, bool):
        return default
    try:
        number = int(round(float(value)))
    except (TypeError, ValueError, OverflowError):
        return default
    return max(0, min(100, number))


def _claims(value: Any) -> List[Claim]:
    claims = []
    if not isinstance(value, list):
        return claims
    for item in value:
        if isinstance(item, str) and item.strip():
            claims.append(Claim(text=item.strip()))
        elif isinstance(item, dict):
            text = str(item.get('claim') or item.get('text') or '').strip()
            if not text:
                continue
            claims.append(Claim(
                text=text,
                evidence=str(item.get('evidence') or '').strip(),
                verifiable=bool(item.get('verifiable', False)),
                contradictions=tuple(string_list(item.get('contradictions'))),
            ))
    return claims


class ArticleEnricher:
    """Enriches one article at a time; never raises."""

    def __init__(self, intelligence: IntelligenceService,
                 content_fetcher: Optional[ContentFetcher] = None):
        """
        Args:
            intelligence: Language-analysis service
            content_fetcher: Page fetcher, or None to analyze feed summaries only
        """
        self.intelligence = intelligence
        self.content_fetcher = content_fetcher

    def enrich(self, article: Article) -> UnitResult[Article]:
        """
        Enrich an article.

        Returns:
            SUCCESS with a service-backed enrichment, or DEGRADED with the
            keyword fallback. The value always carries an Enrichment.
        """
        if article.is_enriched:
            return UnitResult.success(article.url, article)

        article = self._with_full_body(article)

        try:
            verdict = self.intelligence.analyze_article(article)
            enrichment = self.normalize(verdict, article)
        except IntelligenceError as e:
            logger.warning(f"Analysis unavailable for '{article.title[:60]}': {e.message}")
            return UnitResult.degraded(article.url, article.with_enrichment(self.fallback(article)), e.message)
        except (ValueError, TypeError, AttributeError) as e:
            logger.warning(f"Unusable analysis for '{article.title[:60]}': {e}")
            return UnitResult.degraded(article.url, article.with_enrichment(self.fallback(article)), str(e))

        return UnitResult.success(article.url, article.with_enrichment(enrichment))

    def _with_full_body(self, article: Article) -> Article:
        if not self.content_fetcher:
            return article
        try:
            body = self.content_fetcher.fetch_body(article.url)
        except Exception as e:
            logger.warning(f"Page extraction failed for {article.url}: {e}")
            body = None
        if body:
            return article.with_body(body)
        logger.debug(f"Using feed summary for {article.url}")
        return article.with_body(article.core.summary)

    def normalize(self, verdict: Dict[str, Any], article: Article) -> Enrichment:
        """
        Turn a raw verdict into an Enrichment.

        Raises:
            ValueError: If the verdict is not a dictionary
        """
        if not isinstance(verdict, dict):
            raise ValueError(f"verdict must be a JSON object, got {type(verdict).__name__}")

        topics = string_list(verdict.get('key_topics'))
        if not topics:
            topics = extract_basic_topics(article.title)

        officials_raw = verdict.get('politicians_involved')
        officials = string_list(officials_raw)
        if officials_raw is None:
            officials = extract_officials(f"{article.title} {article.core.body or article.core.summary}")

        tone = str(verdict.get('emotional_tone') or '').strip().lower()
        if tone not in EMOTIONAL_TONES:
            tone = DEFAULT_TONE

        return Enrichment(
            techniques=tuple(string_list(verdict.get('propaganda_techniques'))),
            topics=tuple(topics),
            officials=tuple(officials),
            factuality=clamp_score(verdict.get('factuality_score'), DEFAULT_FACTUALITY),
            tone=tone,
            claims=tuple(_claims(verdict.get('claims'))),
            bias_override=Bias.parse(verdict.get('bias_analysis')),
            propaganda_analysis=str(verdict.get('propaganda_analysis') or ''),
            credibility_assessment=str(verdict.get('credibility_assessment') or ''),
            origin='service',
        )

    def fallback(self, article: Article) -> Enrichment:
        """Deterministic enrichment used when the service gives nothing usable."""
        return Enrichment(
            techniques=(),
            topics=tuple(extract_basic_topics(article.title)),
            officials=tuple(extract_officials(f"{article.title} {article.core.body or article.core.summary}")),
            factuality=DEFAULT_FACTUALITY,
            tone=DEFAULT_TONE,
            claims=(),
            origin='fallback',
        )
