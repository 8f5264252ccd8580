#!/usr/bin/env python3
"""
Core data models for cross-source news analysis.

Contains all data structures used throughout the application.
"""

from .article import Article, ArticleCore, ArticleRecord, Bias, Claim, Enrichment
from .comparison import BiasDistribution, Comparison, TopicCluster
from .results import RunReport, UnitResult, UnitStatus

__all__ = [
    'Article', 'ArticleCore', 'ArticleRecord', 'Bias', 'Claim', 'Enrichment',
    'BiasDistribution', 'Comparison', 'TopicCluster',
    'RunReport', 'UnitResult', 'UnitStatus',
]
