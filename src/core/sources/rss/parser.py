#!/usr/bin/env python3
"""
RSS feed fetcher for news sources.

Turns one source profile into a batch of bare articles: fetch the feed,
parse the entries, keep the most recent politically relevant ones.
"""

import feedparser
import requests
import pytz
from datetime import datetime
from dateutil import parser as date_parser
from bs4 import BeautifulSoup
from typing import List, Dict, Any, Optional
import logging

from ...exceptions import SourceConnectionError, SourceParseError
from ...models.article import Article, ArticleCore
from ...models.results import UnitResult
from ..base import SourceProfile

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "CivicCrosscheck/1.0 (news analysis)"
DEFAULT_MAX_ENTRIES = 10

# Lowercase substrings; an entry is kept when its title or summary contains any.
POLITICAL_KEYWORDS = (
    'trudeau', 'poilievre', 'singh', 'blanchet', 'parliament', 'mp', 'minister',
    'federal', 'provincial', 'government', 'policy', 'legislation', 'bill',
    'election', 'vote', 'liberal', 'conservative', 'ndp', 'bloc', 'green',
    'senate', 'house of commons', 'cabinet', 'political', 'politics',
    'healthcare', 'climate', 'economy', 'immigration', 'defence', 'budget',
    'covid', 'pandemic', 'vaccine', 'freedom convoy', 'protest',
)


def is_politically_relevant(title: str, summary: str) -> bool:
    """Case-insensitive substring test against the civic vocabulary."""
    content = f"{title} {summary}".lower()
    return any(keyword in content for keyword in POLITICAL_KEYWORDS)


class FeedFetcher:
    """Fetches and parses one source's feed per call."""

    def __init__(self, timeout: int = 10, user_agent: str = DEFAULT_USER_AGENT,
                 max_entries: int = DEFAULT_MAX_ENTRIES,
                 session: Optional[requests.Session] = None):
        """
        Initialize feed fetcher.

        Args:
            timeout: Request timeout in seconds
            user_agent: Identifying User-Agent header
            max_entries: Most recent entries kept per source
            session: Optional pre-built HTTP session
        """
        self.timeout = timeout
        self.max_entries = max_entries
        self.session = session or requests.Session()
        self.session.headers.update({'User-Agent': user_agent})

    def fetch(self, source: SourceProfile) -> UnitResult[List[Article]]:
        """
        Fetch a source's feed and return its relevant entries as bare articles.

        Transport failures, non-2xx statuses and unreadable feeds all yield a
        FAILED result with an empty list; nothing is raised.
        """
        try:
            logger.info(f"Fetching feed for {source.name}: {source.feed_url}")
            response = self.session.get(source.feed_url, timeout=self.timeout)
        except requests.RequestException as e:
            error = SourceConnectionError(source.name, source.feed_url, e)
            logger.warning(f"{error.message}: {e}")
            return UnitResult.failed(source.name, error.message, value=[])

        if not 200 <= response.status_code < 300:
            logger.info(f"{source.name} returned {response.status_code}, skipping")
            return UnitResult.failed(source.name, f"HTTP {response.status_code}", value=[])

        feed = feedparser.parse(response.content)
        entries = getattr(feed, 'entries', None) or []
        if feed.bozo and not entries:
            error = SourceParseError(source.name, "feed", feed.get('bozo_exception'))
            logger.warning(f"{error.message}: {error.context['original_error']}")
            return UnitResult.failed(source.name, error.message, value=[])
        if feed.bozo:
            logger.debug(f"Feed parsing warning for {source.name}: {feed.get('bozo_exception')}")

        articles = self.parse_entries(entries, source)
        logger.info(f"Kept {len(articles)} of {len(entries)} entries from {source.name}")
        return UnitResult.success(source.name, articles)

    def parse_entries(self, entries: List[Any], source: SourceProfile) -> List[Article]:
        """
        Convert feed entries to bare articles.

        Entries are ordered most recent first and capped before the
        title/link and relevance checks are applied.
        """
        fetched_at = datetime.now(pytz.utc)
        parsed = []
        for entry in entries:
            parsed.append({
                'title': (entry.get('title') or '').strip(),
                'link': self._resolve_link(entry),
                'summary': self._clean_summary(entry.get('summary') or entry.get('description') or ''),
                'published': self._parse_published_date(entry) or fetched_at,
            })

        parsed.sort(key=lambda item: item['published'], reverse=True)

        articles = []
        for item in parsed[:self.max_entries]:
            if not item['title'] or not item['link']:
                logger.debug(f"Dropping entry without title or link from {source.name}")
                continue
            if not is_politically_relevant(item['title'], item['summary']):
                continue
            articles.append(Article(core=ArticleCore(
                url=item['link'],
                title=item['title'],
                source=source.name,
                summary=item['summary'],
                body=item['summary'],
                published=item['published'],
                bias=source.bias,
                credibility=source.credibility,
            )))
        return articles

    def _resolve_link(self, entry: Dict[str, Any]) -> str:
        """Entry link, or its id/guid when that is an http(s) URL."""
        link = (entry.get('link') or '').strip()
        if link:
            return link
        for key in ('id', 'guid'):
            candidate = (entry.get(key) or '').strip()
            if candidate.startswith(('http://', 'https://')):
                return candidate
        return ''

    def _clean_summary(self, summary: str) -> str:
        """Strip markup from a feed summary."""
        if '<' not in summary:
            return summary.strip()
        return BeautifulSoup(summary, 'html.parser').get_text(' ', strip=True)

    def _parse_published_date(self, entry: Dict[str, Any]) -> Optional[datetime]:
        """Parse published date from feed entry, normalized to UTC."""
        for field in ('published', 'updated', 'created'):
            date_str = entry.get(field)
            if not date_str:
                continue
            try:
                dt = date_parser.parse(date_str)
            except (ValueError, OverflowError) as e:
                logger.debug(f"Failed to parse date '{date_str}': {e}")
                continue
            if dt.tzinfo is None:
                dt = pytz.utc.localize(dt)
            return dt.astimezone(pytz.utc)

        parsed = entry.get('published_parsed') or entry.get('updated_parsed')
        if parsed:
            try:
                return pytz.utc.localize(datetime(*parsed[:6]))
            except (TypeError, ValueError) as e:
                logger.debug(f"Failed to parse struct date: {e}")
        return None
