#!/usr/bin/env python3
"""
Base types for news sources.

A source is a static profile: where its feed lives, which way it leans and
how far it is trusted. Profiles are loaded once and never mutated.
"""

from enum import Enum
from typing import Dict, Any
from dataclasses import dataclass

import requests

from ..models.article import Bias


class SourceCategory(str, Enum):
    """Kind of outlet."""
    GOVERNMENT = "government"
    MAINSTREAM = "mainstream"
    ALTERNATIVE = "alternative"


@dataclass(frozen=True)
class SourceProfile:
    """Static description of one news outlet."""
    name: str
    url: str
    feed_url: str
    bias: Bias
    credibility: int  # 0-100
    category: SourceCategory

    def __post_init__(self):
        """Validate profile."""
        if not self.name:
            raise ValueError("source name must not be empty")
        if not 0 <= self.credibility <= 100:
            raise ValueError(f"credibility must be between 0 and 100, got {self.credibility}")
        if not self.feed_url.startswith(('http://', 'https://')):
            raise ValueError(f"feed_url must be an http(s) URL: {self.feed_url}")

    def health_check(self, timeout: int = 10, user_agent: str = "") -> Dict[str, Any]:
        """Check feed availability with a HEAD request."""
        headers = {'User-Agent': user_agent} if user_agent else {}
        try:
            response = requests.head(self.feed_url, timeout=timeout, headers=headers,
                                     allow_redirects=True)
            return {
                'available': response.status_code < 400,
                'status_code': response.status_code,
                'response_time_ms': response.elapsed.total_seconds() * 1000
            }
        except requests.RequestException as e:
            return {
                'available': False,
                'error': str(e)
            }

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'url': self.url,
            'feed_url': self.feed_url,
            'bias': self.bias.value,
            'credibility_score': self.credibility,
            'category': self.category.value,
        }
