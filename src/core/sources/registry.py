#!/usr/bin/env python3
"""
News source registry.

Wraps an immutable catalog of source profiles and answers lookups by name,
leaning and category. The registry never changes after construction.
"""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from ..models.article import Bias
from .base import SourceProfile, SourceCategory
from .catalog import CANADIAN_SOURCES

logger = logging.getLogger(__name__)


class SourceRegistry:
    """Read-only view over a catalog of source profiles."""

    def __init__(self, profiles: Iterable[SourceProfile] = CANADIAN_SOURCES):
        """
        Initialize registry.

        Args:
            profiles: Source profiles in catalog order. Entries repeating an
                already-seen name or feed URL are skipped with a warning.
        """
        unique: List[SourceProfile] = []
        seen_names = set()
        seen_feeds = set()
        for profile in profiles:
            key = profile.name.lower()
            if key in seen_names or profile.feed_url in seen_feeds:
                logger.warning(f"Skipping duplicate source entry: {profile.name} ({profile.feed_url})")
                continue
            seen_names.add(key)
            seen_feeds.add(profile.feed_url)
            unique.append(profile)

        self._profiles: Tuple[SourceProfile, ...] = tuple(unique)
        self._by_name: Dict[str, SourceProfile] = {p.name.lower(): p for p in self._profiles}

    @property
    def profiles(self) -> Tuple[SourceProfile, ...]:
        return self._profiles

    def __len__(self) -> int:
        return len(self._profiles)

    def __iter__(self):
        return iter(self._profiles)

    def get_source(self, name: str) -> SourceProfile:
        """
        Get a source profile by name (case-insensitive).

        Raises:
            KeyError: If source not found
        """
        profile = self._by_name.get(name.strip().lower())
        if profile is None:
            raise KeyError(f"Source '{name}' not found. Available: {self.list_available_sources()}")
        return profile

    def list_available_sources(self) -> List[str]:
        """Get list of available source names in catalog order."""
        return [p.name for p in self._profiles]

    def select(self, names: Optional[Iterable[str]] = None) -> Tuple[SourceProfile, ...]:
        """
        Resolve a subset of sources, keeping catalog order.

        Args:
            names: Source names to keep, or None for every source

        Raises:
            KeyError: If any name is unknown
        """
        if names is None:
            return self._profiles
        wanted = {self.get_source(name).name for name in names}
        return tuple(p for p in self._profiles if p.name in wanted)

    def filter(self, bias: Optional[Bias] = None,
               category: Optional[SourceCategory] = None) -> List[SourceProfile]:
        """Sources matching the given leaning and/or category."""
        return [
            p for p in self._profiles
            if (bias is None or p.bias is bias)
            and (category is None or p.category is category)
        ]

    def bias_breakdown(self) -> Dict[str, int]:
        """Number of sources per declared leaning."""
        counts = {bias.value: 0 for bias in Bias}
        for profile in self._profiles:
            counts[profile.bias.value] += 1
        return counts
