"""
Content fetcher for extracting full article text.
Single best-effort GET per page, no retries.
"""

import logging
from typing import Optional, List

import requests
import trafilatura
from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

# Tried in order; the first selector matching more than two paragraphs wins.
CONTENT_SELECTORS = (
    'article p',
    '.article-content p',
    '.entry-content p',
    '.post-content p',
    '.story-content p',
    '.article-body p',
    'main p',
    '.content p',
)

MIN_SELECTOR_PARAGRAPHS = 3
MIN_TRAFILATURA_PARAGRAPHS = 3


class ContentFetcher:
    """Fetches an article page and pulls out its body text."""

    def __init__(self,
                 timeout: int = 15,
                 user_agent: str = "CivicCrosscheck/1.0 (news analysis)",
                 session: Optional[requests.Session] = None):
        """
        Initialize content fetcher.

        Args:
            timeout: Request timeout in seconds
            user_agent: User-Agent string for requests
            session: Optional pre-built HTTP session
        """
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "User-Agent": user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-CA,en;q=0.9,fr-CA;q=0.8",
        })

    def fetch_html(self, url: str) -> Optional[str]:
        """
        Fetch HTML content from URL.

        Returns:
            HTML content, or None on any transport error or non-2xx status
        """
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.info(f"Could not fetch page {url}: {e}")
            return None

        if not 200 <= response.status_code < 300:
            logger.info(f"Page {url} returned HTTP {response.status_code}")
            return None

        logger.debug(f"Fetched {url} ({len(response.text)} chars)")
        return response.text

    def extract_text_selectors(self, html: str) -> Optional[str]:
        """Paragraph text from the first common article selector with enough paragraphs."""
        soup = BeautifulSoup(html, 'html.parser')
        for element in soup(["script", "style"]):
            element.decompose()

        for selector in CONTENT_SELECTORS:
            paragraphs = soup.select(selector)
            if len(paragraphs) >= MIN_SELECTOR_PARAGRAPHS:
                texts = [p.get_text(' ', strip=True) for p in paragraphs]
                return '\n'.join(text for text in texts if text)
        return None

    def extract_text_trafilatura(self, html: str, url: str) -> Optional[str]:
        """Main-content extraction, accepted only with at least three paragraphs."""
        text = trafilatura.extract(html, url=url, include_comments=False, include_tables=False)
        if not text:
            return None
        paragraphs: List[str] = [line.strip() for line in text.splitlines() if line.strip()]
        if len(paragraphs) < MIN_TRAFILATURA_PARAGRAPHS:
            logger.debug(f"Trafilatura found only {len(paragraphs)} paragraphs for {url}")
            return None
        return '\n'.join(paragraphs)

    def fetch_body(self, url: str) -> Optional[str]:
        """
        Fetch a page and extract its body text.

        Returns:
            The body text, or None when the page could not be fetched or
            no extraction produced enough text. Callers fall back to the
            feed summary.
        """
        html = self.fetch_html(url)
        if not html:
            return None

        body = self.extract_text_selectors(html)
        if body:
            return body

        body = self.extract_text_trafilatura(html, url)
        if body:
            return body

        logger.debug(f"No usable body extracted from {url}")
        return None
