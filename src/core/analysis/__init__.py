#!/usr/bin/env python3
"""
Analysis stages for cross-source news comparison.

Enrichment, topic clustering, cross-source comparison and scoring, all
talking to the language-analysis service through IntelligenceService.
"""

from .intelligence import (
    IntelligenceService, OpenAIIntelligenceService, LocalIntelligenceService, create_intelligence_service
)
from .enricher import ArticleEnricher
from .clustering import TopicClusterer
from .comparator import CrossSourceComparator
from .scoring import ScoringEngine
from .prompts import NewsAnalysisPrompts

__all__ = [
    'IntelligenceService', 'OpenAIIntelligenceService', 'LocalIntelligenceService',
    'create_intelligence_service', 'ArticleEnricher', 'TopicClusterer',
    'CrossSourceComparator', 'ScoringEngine', 'NewsAnalysisPrompts'
]
