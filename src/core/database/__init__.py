#!/usr/bin/env python3
"""
Database package.

Stores for the news_articles and news_comparisons tables and the adapter
the pipeline writes through.
"""

from .store import NewsStore, MemoryStore, article_row, comparison_row
from .persistence import PersistenceAdapter, create_store

__all__ = [
    'NewsStore',
    'MemoryStore',
    'article_row',
    'comparison_row',
    'PersistenceAdapter',
    'create_store',
]
