import sys
from datetime import datetime, timedelta, timezone
from email.utils import format_datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union
from xml.sax.saxutils import escape

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from core.analysis.intelligence import IntelligenceService  # noqa: E402
from core.database.persistence import PersistenceAdapter  # noqa: E402
from core.database.store import MemoryStore  # noqa: E402
from core.exceptions import IntelligenceUnavailableError  # noqa: E402
from core.models.article import Article, ArticleCore, Bias, Enrichment  # noqa: E402
from core.models.comparison import TopicCluster  # noqa: E402
from core.sources.base import SourceCategory, SourceProfile  # noqa: E402


class FakeResponse:
    def __init__(self, status_code: int = 200, content: Union[str, bytes] = b"") -> None:
        self.status_code = status_code
        self.content = content.encode("utf-8") if isinstance(content, str) else content
        self.text = self.content.decode("utf-8", errors="replace")


class FakeSession:
    """requests.Session stand-in keyed by URL; unknown URLs return 404."""

    def __init__(self, routes: Optional[Dict[str, Union[FakeResponse, Exception]]] = None) -> None:
        self.routes: Dict[str, Union[FakeResponse, Exception]] = dict(routes or {})
        self.headers: Dict[str, str] = {}
        self.calls: List[Dict[str, Any]] = []

    def get(self, url: str, timeout: Optional[float] = None) -> FakeResponse:
        self.calls.append({"url": url, "timeout": timeout})
        route = self.routes.get(url, FakeResponse(404))
        if isinstance(route, Exception):
            raise route
        return route


class FakeIntelligence(IntelligenceService):
    """Scripted intelligence service recording every call."""

    name = "fake"

    def __init__(
        self,
        article_verdict: Optional[Callable[[Article], Dict[str, Any]]] = None,
        comparison_verdict: Optional[Dict[str, Any]] = None,
        fail_articles: bool = False,
        fail_comparisons: bool = False,
    ) -> None:
        self.article_verdict = article_verdict or (lambda article: default_article_verdict())
        self.comparison_verdict = comparison_verdict if comparison_verdict is not None else default_comparison_verdict()
        self.fail_articles = fail_articles
        self.fail_comparisons = fail_comparisons
        self.analyzed: List[str] = []
        self.compared: List[TopicCluster] = []

    def analyze_article(self, article: Article) -> Dict[str, Any]:
        self.analyzed.append(article.url)
        if self.fail_articles:
            raise IntelligenceUnavailableError("fake", "fake-model", TimeoutError("timed out"))
        return self.article_verdict(article)

    def compare_cluster(self, cluster: TopicCluster) -> Dict[str, Any]:
        self.compared.append(cluster)
        if self.fail_comparisons:
            raise IntelligenceUnavailableError("fake", "fake-model", ConnectionError("refused"))
        return dict(self.comparison_verdict)


def default_article_verdict(**overrides: Any) -> Dict[str, Any]:
    verdict = {
        "propaganda_techniques": [],
        "key_topics": ["Budget"],
        "politicians_involved": ["Finance Minister"],
        "factuality_score": 80,
        "emotional_tone": "neutral",
        "bias_analysis": "center",
        "claims": [{"claim": "The budget adds $10B", "evidence": "Budget tables",
                    "verifiable": True, "contradictions": []}],
        "propaganda_analysis": "None detected",
        "credibility_assessment": "Well sourced",
    }
    verdict.update(overrides)
    return verdict


def default_comparison_verdict(**overrides: Any) -> Dict[str, Any]:
    verdict = {
        "consensus_level": 72,
        "major_discrepancies": ["Cost estimates differ"],
        "propaganda_patterns": [],
        "factual_accuracy": 81,
        "political_bias": {"left": 0, "center": 50, "right": 50},
        "media_manipulation": "",
        "public_impact": "Affects federal spending",
        "recommended_action": "Read both outlets",
    }
    verdict.update(overrides)
    return verdict


def build_rss(items: List[Dict[str, Any]], title: str = "Test Feed") -> str:
    """RSS 2.0 document; item keys: title, link, guid, description, published (datetime)."""
    parts = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<rss version="2.0"><channel>',
        f"<title>{escape(title)}</title><link>https://example.ca</link><description>feed</description>",
    ]
    for item in items:
        parts.append("<item>")
        if item.get("title") is not None:
            parts.append(f"<title>{escape(item['title'])}</title>")
        if item.get("link"):
            parts.append(f"<link>{escape(item['link'])}</link>")
        if item.get("guid"):
            parts.append(f"<guid>{escape(item['guid'])}</guid>")
        if item.get("description") is not None:
            parts.append(f"<description>{escape(item['description'])}</description>")
        if item.get("published"):
            parts.append(f"<pubDate>{format_datetime(item['published'])}</pubDate>")
        parts.append("</item>")
    parts.append("</channel></rss>")
    return "".join(parts)


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 5, 14, 15, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_source() -> Callable[..., SourceProfile]:
    def _make(name: str = "Maple Daily", bias: Bias = Bias.CENTER, credibility: int = 80,
              category: SourceCategory = SourceCategory.MAINSTREAM,
              feed_url: Optional[str] = None) -> SourceProfile:
        slug = name.lower().replace(" ", "-")
        return SourceProfile(
            name=name,
            url=f"https://{slug}.example.ca",
            feed_url=feed_url or f"https://{slug}.example.ca/rss",
            bias=bias,
            credibility=credibility,
            category=category,
        )
    return _make


@pytest.fixture
def make_article(now) -> Callable[..., Article]:
    def _make(url: str = "https://maple.example.ca/a", title: str = "Parliament debates the budget",
              source: str = "Maple Daily", summary: str = "MPs debated the federal budget on Tuesday.",
              bias: Bias = Bias.CENTER, credibility: int = 80,
              published: Optional[datetime] = None, **enrichment: Any) -> Article:
        article = Article(core=ArticleCore(
            url=url,
            title=title,
            source=source,
            summary=summary,
            body=summary,
            published=published or now,
            bias=bias,
            credibility=credibility,
        ))
        if enrichment:
            article = article.with_enrichment(Enrichment(**enrichment))
        return article
    return _make


@pytest.fixture
def fake_intelligence() -> FakeIntelligence:
    return FakeIntelligence()


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def persistence(memory_store) -> PersistenceAdapter:
    return PersistenceAdapter(memory_store)


@pytest.fixture
def fake_session_factory() -> Callable[..., FakeSession]:
    return FakeSession


@pytest.fixture
def fake_response() -> type:
    return FakeResponse


@pytest.fixture
def intelligence_factory() -> type:
    return FakeIntelligence


@pytest.fixture
def article_verdict() -> Callable[..., Dict[str, Any]]:
    return default_article_verdict


@pytest.fixture
def comparison_verdict() -> Callable[..., Dict[str, Any]]:
    return default_comparison_verdict


@pytest.fixture
def rss() -> Callable[..., str]:
    return build_rss


@pytest.fixture
def hours_ago(now) -> Callable[[float], datetime]:
    return lambda hours: now - timedelta(hours=hours)


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch):
    """Keep developer settings out of configuration tests."""
    for key in (
        "INTELLIGENCE_BACKEND", "OPENAI_API_KEY", "OPENAI_MODEL", "OPENAI_TIMEOUT", "OPENAI_MAX_TOKENS",
        "STORAGE_BACKEND", "SUPABASE_URL", "SUPABASE_DB_PASSWORD", "SUPABASE_SERVICE_KEY",
        "SUPABASE_ANON_KEY", "DB_CONNECTION_TIMEOUT", "FEED_TIMEOUT", "PAGE_TIMEOUT", "FEED_USER_AGENT",
        "MAX_ENTRIES_PER_SOURCE", "SOURCE_DELAY_SECONDS", "ARTICLE_DELAY_SECONDS", "MAX_SOURCE_WORKERS",
        "BODY_CHAR_BUDGET", "COMPARISON_EXCERPT_CHARS", "CLUSTER_STRATEGY", "LEXICAL_SIMILARITY_THRESHOLD",
        "CYCLE_INTERVAL_HOURS", "LLM_DEBUG_LOG", "LOG_LEVEL", "VERBOSE_LOGGING",
    ):
        monkeypatch.delenv(key, raising=False)
