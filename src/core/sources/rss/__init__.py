#!/usr/bin/env python3
"""
RSS feed retrieval for catalog sources.
"""

from .parser import FeedFetcher, is_politically_relevant

__all__ = ['FeedFetcher', 'is_politically_relevant']
