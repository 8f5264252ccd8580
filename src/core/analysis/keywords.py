#!/usr/bin/env python3
"""
Deterministic keyword extraction.

Used when the intelligence service is unavailable, and to fill in topics or
officials the service left empty.
"""

import re
from collections import Counter
from typing import List, Set

# Lowercase keyword -> topic label, in match order
FALLBACK_TOPIC_KEYWORDS = (
    ('healthcare', 'Healthcare'),
    ('economy', 'Economy'),
    ('education', 'Education'),
    ('environment', 'Environment'),
    ('defense', 'Defense'),
    ('immigration', 'Immigration'),
    ('tax', 'Taxation'),
    ('budget', 'Budget'),
    ('election', 'Elections'),
    ('parliament', 'Parliament'),
)
GENERAL_TOPIC = 'General'

# Matched case-sensitively as substrings
FALLBACK_OFFICIALS = (
    'Trudeau', 'Singh', 'Poilievre', 'Blanchet', 'May',
    'Ford', 'Legault', 'Moe', 'Kenney', 'Horgan',
)

_WORD = re.compile(r"[a-z0-9']+")


def extract_basic_topics(text: str) -> List[str]:
    """Topic labels whose keyword appears in text; ['General'] when none do."""
    lower_text = (text or '').lower()
    topics = [label for keyword, label in FALLBACK_TOPIC_KEYWORDS if keyword in lower_text]
    return topics or [GENERAL_TOPIC]


def extract_officials(text: str) -> List[str]:
    """Names from the fixed list that appear in text."""
    text = text or ''
    return [name for name in FALLBACK_OFFICIALS if name in text]


def significant_words(text: str, limit: int = 10, min_length: int = 4) -> Set[str]:
    """
    The first `limit` distinct words longer than three letters.

    Used for lexical overlap between articles.
    """
    words: List[str] = []
    for word in _WORD.findall((text or '').lower()):
        if len(word) >= min_length and word not in words:
            words.append(word)
            if len(words) == limit:
                break
    return set(words)


def jaccard(first: Set[str], second: Set[str]) -> float:
    """Jaccard similarity of two word sets; 0.0 when both are empty."""
    union = first | second
    if not union:
        return 0.0
    return len(first & second) / len(union)


def most_common(labels: List[str], default: str = GENERAL_TOPIC) -> str:
    """Most frequent label, ties broken by first appearance."""
    if not labels:
        return default
    counts = Counter(labels)
    best = max(counts.values())
    return next(label for label in labels if counts[label] == best)
