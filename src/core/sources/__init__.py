#!/usr/bin/env python3
"""
News source catalog and feed retrieval.
"""

from .base import SourceProfile, SourceCategory
from .catalog import CANADIAN_SOURCES
from .registry import SourceRegistry

__all__ = ['SourceProfile', 'SourceCategory', 'CANADIAN_SOURCES', 'SourceRegistry']
