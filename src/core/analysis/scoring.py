#!/usr/bin/env python3
"""
Scoring engine.

Pure functions that turn enriched articles and comparisons into bounded
0-100 indices. Every weight and rate is a named module constant.
"""

import logging
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Sequence

from ..models.article import Article, ArticleRecord, Bias
from ..models.comparison import Comparison, TopicCluster

logger = logging.getLogger(__name__)

SCORE_MIN = 0
SCORE_MAX = 100

# Article public impact
IMPACT_BASE = 50
IMPACT_OFFICIAL_BONUS = 20
IMPACT_PER_TECHNIQUE = 5
IMPACT_EMOTIONAL_BONUS = 15
IMPACT_EMOTIONAL_TONES = ('angry', 'fearful')
IMPACT_LOW_CREDIBILITY_BONUS = 10
LOW_CREDIBILITY_THRESHOLD = 70

# Numeric bias, used for spread only
BIAS_SCORES = {Bias.LEFT: -50, Bias.CENTER: 0, Bias.RIGHT: 50}

# Sentiment from emotional tone
SENTIMENT_POSITIVE = 75
SENTIMENT_NEGATIVE = -75
POSITIVE_TONES = ('positive', 'hopeful')
NEGATIVE_TONES = ('negative', 'angry', 'fearful')

# Public interest factor weights
WEIGHT_OFFICIALS = 0.20
WEIGHT_POLICY = 0.25
WEIGHT_SAFETY = 0.20
WEIGHT_ECONOMIC = 0.15
WEIGHT_CREDIBILITY = 0.10
WEIGHT_CONTROVERSY = 0.10

# Points per vocabulary term present in an article
RATE_OFFICIALS = 10
RATE_POLICY = 15
RATE_SAFETY = 20
RATE_ECONOMIC = 12
RATE_CONTROVERSY = 15

OFFICIAL_TERMS = ('mp', 'minister', 'prime minister', 'premier', 'mayor', 'councillor', 'senator')
POLICY_TERMS = ('bill', 'law', 'policy', 'regulation', 'budget', 'tax', 'healthcare', 'education')
SAFETY_TERMS = ('emergency', 'safety', 'health', 'security', 'crisis', 'warning', 'alert')
ECONOMIC_TERMS = ('economy', 'jobs', 'employment', 'business', 'market', 'inflation', 'gdp')
CONTROVERSY_TERMS = ('scandal', 'controversy', 'dispute', 'conflict', 'protest', 'criticism')

# Overall credibility weights
CREDIBILITY_WEIGHT_AVERAGE = 0.40
CREDIBILITY_WEIGHT_DIVERSITY = 0.30
CREDIBILITY_WEIGHT_ACCURACY = 0.30
DIVERSITY_POINTS_PER_SOURCE = 10

# Missing or zero credibility counts as this
DEFAULT_CREDIBILITY = 50

# Bias spread labels
SPREAD_HOMOGENEOUS_BELOW = 20
SPREAD_MODERATE_BELOW = 50
LABEL_HOMOGENEOUS = 'homogeneous'
LABEL_MODERATE = 'moderate diversity'
LABEL_HIGH = 'high diversity'


def clamp(value: float, low: int = SCORE_MIN, high: int = SCORE_MAX) -> int:
    """Round to the nearest integer and clamp to [low, high]."""
    if value != value:  # NaN
        return low
    if value >= high:
        return high
    if value <= low:
        return low
    return int(round(value))


_VOCABULARIES = {
    'officials': (OFFICIAL_TERMS, RATE_OFFICIALS),
    'policy': (POLICY_TERMS, RATE_POLICY),
    'safety': (SAFETY_TERMS, RATE_SAFETY),
    'economic': (ECONOMIC_TERMS, RATE_ECONOMIC),
    'controversy': (CONTROVERSY_TERMS, RATE_CONTROVERSY),
}


def _matching_text(article) -> str:
    if isinstance(article, Article):
        return article.core.text_for_matching().lower()
    return f"{article.get('title') or ''} {article.get('summary') or ''}".lower()


def _credibility_of(article) -> Optional[int]:
    if isinstance(article, Article):
        return article.core.credibility
    return article.get('credibility_score')


def _bias_of(article) -> Optional[Bias]:
    if isinstance(article, Article):
        return article.effective_bias
    return Bias.parse(article.get('bias'))


def _source_of(article) -> str:
    if isinstance(article, Article):
        return article.source
    return article.get('source') or ''


def keyword_factor(articles: Sequence, factor: str) -> int:
    """
    Keyword sub-score for one public-interest factor.

    Each vocabulary term found anywhere in an article's title and summary
    adds the factor's rate, so "taxes" counts as "tax". Hits are summed over
    articles and clamped.
    """
    terms, rate = _VOCABULARIES[factor]
    hits = 0
    for article in articles:
        text = _matching_text(article)
        hits += sum(1 for term in terms if term in text)
    return clamp(hits * rate)


def average_credibility(articles: Sequence) -> float:
    """Mean credibility; 0 for no articles, missing or zero values count as 50."""
    if not articles:
        return 0.0
    values = []
    for article in articles:
        credibility = _credibility_of(article)
        values.append(credibility or DEFAULT_CREDIBILITY)
    return sum(values) / len(values)


def article_public_impact(officials: Sequence[str], techniques: Sequence[str],
                          tone: str, credibility: Optional[int]) -> int:
    impact = IMPACT_BASE
    if officials:
        impact += IMPACT_OFFICIAL_BONUS
    impact += IMPACT_PER_TECHNIQUE * len(techniques)
    if tone in IMPACT_EMOTIONAL_TONES:
        impact += IMPACT_EMOTIONAL_BONUS
    if credibility is not None and credibility < LOW_CREDIBILITY_THRESHOLD:
        impact += IMPACT_LOW_CREDIBILITY_BONUS
    return clamp(impact)


def bias_to_numeric(bias: Optional[Bias]) -> int:
    """left -50, center 0, right +50; unknown counts as center."""
    return BIAS_SCORES.get(Bias.parse(bias), 0)


def tone_to_sentiment(tone: Optional[str]) -> int:
    tone = (tone or '').lower()
    if tone in POSITIVE_TONES:
        return SENTIMENT_POSITIVE
    if tone in NEGATIVE_TONES:
        return SENTIMENT_NEGATIVE
    return 0


def public_interest_factors(articles: Sequence) -> Dict[str, float]:
    return {
        'officials': keyword_factor(articles, 'officials'),
        'policy': keyword_factor(articles, 'policy'),
        'safety': keyword_factor(articles, 'safety'),
        'economic': keyword_factor(articles, 'economic'),
        'credibility': clamp(average_credibility(articles)),
        'controversy': keyword_factor(articles, 'controversy'),
    }


def public_interest_score(articles: Sequence) -> int:
    """Weighted public-interest index over a group of articles."""
    factors = public_interest_factors(articles)
    score = (
        factors['officials'] * WEIGHT_OFFICIALS
        + factors['policy'] * WEIGHT_POLICY
        + factors['safety'] * WEIGHT_SAFETY
        + factors['economic'] * WEIGHT_ECONOMIC
        + factors['credibility'] * WEIGHT_CREDIBILITY
        + factors['controversy'] * WEIGHT_CONTROVERSY
    )
    return clamp(score)


def bias_spread(articles: Sequence) -> int:
    """Max minus min numeric bias; 0 for fewer than two articles."""
    scores = [bias_to_numeric(_bias_of(article)) for article in articles]
    if not scores:
        return 0
    return max(scores) - min(scores)


def diversity_label(spread: int) -> str:
    if spread < SPREAD_HOMOGENEOUS_BELOW:
        return LABEL_HOMOGENEOUS
    if spread < SPREAD_MODERATE_BELOW:
        return LABEL_MODERATE
    return LABEL_HIGH


@dataclass(frozen=True)
class CredibilityAssessment:
    overall_score: int
    source_diversity: int
    factual_accuracy: int
    bias_level: str


def overall_credibility(articles: Sequence, factual_accuracy: float) -> CredibilityAssessment:
    """Credibility of a story's coverage as a whole."""
    distinct_sources = len({_source_of(article) for article in articles})
    accuracy = clamp(factual_accuracy)
    score = (
        average_credibility(articles) * CREDIBILITY_WEIGHT_AVERAGE
        + min(SCORE_MAX, distinct_sources * DIVERSITY_POINTS_PER_SOURCE) * CREDIBILITY_WEIGHT_DIVERSITY
        + accuracy * CREDIBILITY_WEIGHT_ACCURACY
    )
    return CredibilityAssessment(
        overall_score=clamp(score),
        source_diversity=distinct_sources,
        factual_accuracy=accuracy,
        bias_level=diversity_label(bias_spread(articles)),
    )


class ScoringEngine:
    """Applies the scoring functions to pipeline objects."""

    def score_article(self, article: Article) -> ArticleRecord:
        """
        Raises:
            ValueError: If the article has not been enriched
        """
        enrichment = article.enrichment
        if enrichment is None:
            raise ValueError(f"Cannot score an unenriched article: {article.url}")
        return ArticleRecord(
            article=article,
            public_impact=article_public_impact(
                enrichment.officials, enrichment.techniques, enrichment.tone, article.core.credibility
            ),
            bias_score=bias_to_numeric(article.effective_bias),
            sentiment_score=tone_to_sentiment(enrichment.tone),
        )

    def score_comparison(self, comparison: Comparison, cluster: TopicCluster) -> Comparison:
        articles: List[Article] = list(cluster.articles)
        assessment = overall_credibility(articles, comparison.factual_accuracy)
        spread = bias_spread(articles)
        return replace(
            comparison,
            public_interest_score=public_interest_score(articles),
            overall_credibility=assessment.overall_score,
            source_diversity=assessment.source_diversity,
            bias_spread=spread,
            diversity_label=diversity_label(spread),
        )
