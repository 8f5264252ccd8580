#!/usr/bin/env python3
"""
News analysis orchestrator.

Drives one cycle through fetching, enriching, clustering, comparing,
scoring and persisting. Every unit reports a UnitResult; a failing source,
article, topic or write never stops the cycle.
"""

import time
import uuid
import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from .analysis.clustering import TopicClusterer
from .analysis.comparator import CrossSourceComparator
from .analysis.enricher import ArticleEnricher
from .analysis.scoring import ScoringEngine
from .database.persistence import PersistenceAdapter
from .models.article import Article
from .models.comparison import Comparison, TopicCluster
from .models.results import RunReport, UnitResult
from .sources.base import SourceProfile
from .sources.registry import SourceRegistry
from .sources.rss.parser import FeedFetcher

logger = logging.getLogger(__name__)

DEFAULT_SOURCE_DELAY = 2.0
DEFAULT_ARTICLE_DELAY = 1.0
DEFAULT_INTERVAL_HOURS = 2.0

SourceOutcome = Tuple[UnitResult, List[UnitResult]]


class RunState(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    ENRICHING = "enriching"
    CLUSTERING = "clustering"
    COMPARING = "comparing"
    SCORING = "scoring"
    PERSISTING = "persisting"


class NewsAnalysisOrchestrator:
    """Runs analysis cycles over an injected source catalog."""

    def __init__(self,
                 registry: SourceRegistry,
                 feed_fetcher: FeedFetcher,
                 enricher: ArticleEnricher,
                 clusterer: TopicClusterer,
                 comparator: CrossSourceComparator,
                 scoring: ScoringEngine,
                 persistence: PersistenceAdapter,
                 source_delay: float = DEFAULT_SOURCE_DELAY,
                 article_delay: float = DEFAULT_ARTICLE_DELAY,
                 max_workers: int = 1,
                 sleep: Callable[[float], None] = time.sleep):
        """
        Args:
            registry: Source catalog, fixed for the orchestrator's lifetime
            feed_fetcher: Fetches one source's feed
            enricher: Enriches one article
            clusterer: Groups enriched articles by topic
            comparator: Compares multi-source clusters
            scoring: Computes persisted indices
            persistence: Upserts articles and comparisons
            source_delay: Seconds to wait after each source
            article_delay: Seconds to wait between enrichments
            max_workers: Sources processed at once
            sleep: Delay function, replaceable in tests
        """
        self.registry = registry
        self.feed_fetcher = feed_fetcher
        self.enricher = enricher
        self.clusterer = clusterer
        self.comparator = comparator
        self.scoring = scoring
        self.persistence = persistence
        self.source_delay = source_delay
        self.article_delay = article_delay
        self.max_workers = max(1, max_workers)
        self.sleep = sleep

        self.state = RunState.IDLE
        self.current_source: Optional[str] = None
        self.last_report: Optional[RunReport] = None

    def run_cycle(self, source_names: Optional[Iterable[str]] = None) -> RunReport:
        """
        Run one full analysis cycle.

        Args:
            source_names: Restrict the cycle to these sources; None for all

        Raises:
            KeyError: If a requested source is not in the catalog
        """
        profiles = self.registry.select(source_names)
        report = RunReport(run_id=uuid.uuid4().hex[:12], started_at=datetime.now(timezone.utc))
        logger.info(f"Starting run {report.run_id} over {len(profiles)} sources")

        try:
            articles = self._collect(profiles, report)

            self.state = RunState.CLUSTERING
            clusters = self.clusterer.cluster(articles)
            report.clusters_formed = len(clusters)

            self.state = RunState.COMPARING
            compared = self._compare(clusters, report)

            self.state = RunState.SCORING
            records = [self.scoring.score_article(article) for article in articles]
            comparisons = [self.scoring.score_comparison(comparison, cluster)
                           for comparison, cluster in compared]

            self.state = RunState.PERSISTING
            for record in records:
                report.record(self.persistence.upsert_article(record), 'store_article')
            for comparison in comparisons:
                report.record(self.persistence.upsert_comparison(comparison), 'store_comparison')
        finally:
            self.state = RunState.IDLE
            self.current_source = None
            report.finished_at = datetime.now(timezone.utc)

        self.last_report = report
        logger.info(
            f"Run {report.run_id} finished in {report.processing_time:.1f}s: "
            f"{report.articles_collected} articles ({report.articles_degraded} degraded), "
            f"{len(report.sources_failed)} failed sources, {len(report.topics_compared)} comparisons, "
            f"{len(report.persistence_failures)} storage failures"
        )
        return report

    def _collect(self, profiles: Sequence[SourceProfile], report: RunReport) -> List[Article]:
        # Every source but the last is followed by the per-source delay
        pauses = [index < len(profiles) - 1 for index in range(len(profiles))]
        if self.max_workers > 1 and len(profiles) > 1:
            # Workers run side by side, so no single source is "current"
            self.state = RunState.FETCHING
            self.current_source = None
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                # map yields in submission order, which is catalog order
                outcomes = list(executor.map(
                    lambda profile, pause: self._process_source(profile, pause, track=False),
                    profiles, pauses))
        else:
            outcomes = [self._process_source(profile, pause) for profile, pause in zip(profiles, pauses)]

        articles: List[Article] = []
        seen_urls = set()
        for fetch_result, article_results in outcomes:
            report.record(fetch_result, 'source')
            report.articles_collected += len(fetch_result.value or [])
            for result in article_results:
                report.record(result, 'article')
                if not result.ok or result.value is None:
                    continue
                if result.value.url in seen_urls:
                    logger.debug(f"Dropping duplicate article {result.value.url}")
                    continue
                seen_urls.add(result.value.url)
                articles.append(result.value)
        return articles

    def _process_source(self, profile: SourceProfile, pause: bool = True, track: bool = True) -> SourceOutcome:
        """Fetch and enrich one source, then observe the per-source delay."""
        if track:
            self.current_source = profile.name
            self.state = RunState.FETCHING
        try:
            fetch_result = self.feed_fetcher.fetch(profile)
        except Exception as e:
            logger.exception(f"Fetching {profile.name} crashed")
            fetch_result = UnitResult.failed(profile.name, f"unexpected error: {e}")

        article_results: List[UnitResult] = []
        bare_articles = fetch_result.value or []
        if bare_articles and track:
            self.state = RunState.ENRICHING
        for index, article in enumerate(bare_articles):
            if index:
                self.sleep(self.article_delay)
            article_results.append(self._enrich(article))

        if pause and self.source_delay:
            self.sleep(self.source_delay)
        return fetch_result, article_results

    def _enrich(self, article: Article) -> UnitResult:
        try:
            return self.enricher.enrich(article)
        except Exception as e:
            logger.exception(f"Enriching {article.url} crashed")
            return UnitResult.failed(article.url, f"unexpected error: {e}")

    def _compare(self, clusters: Sequence[TopicCluster],
                 report: RunReport) -> List[Tuple[Comparison, TopicCluster]]:
        compared = []
        for cluster in clusters:
            try:
                result = self.comparator.compare(cluster)
            except Exception as e:
                logger.exception(f"Comparing '{cluster.topic}' crashed")
                result = UnitResult.failed(cluster.topic, f"unexpected error: {e}")
            report.record(result, 'comparison')
            if result.ok and result.value is not None:
                compared.append((result.value, cluster))
        return compared

    def run_forever(self, interval_hours: float = DEFAULT_INTERVAL_HOURS,
                    source_names: Optional[Iterable[str]] = None,
                    max_cycles: Optional[int] = None) -> None:
        """
        Run a cycle now and then every interval.

        A cycle that crashes is logged and the schedule continues.

        Args:
            interval_hours: Hours between cycle starts
            source_names: Restrict cycles to these sources
            max_cycles: Stop after this many cycles; None runs until interrupted
        """
        names = list(source_names) if source_names is not None else None
        cycles = 0
        while max_cycles is None or cycles < max_cycles:
            try:
                self.run_cycle(names)
            except Exception:
                logger.exception("Analysis cycle crashed; waiting for the next one")
            cycles += 1
            if max_cycles is not None and cycles >= max_cycles:
                break
            logger.info(f"Next cycle in {interval_hours} hours")
            self.sleep(interval_hours * 3600)

    def close(self) -> None:
        self.persistence.close()


def build_orchestrator(config, dry_run: bool = False, llm_logger=None, intelligence=None,
                       persistence: Optional[PersistenceAdapter] = None,
                       registry: Optional[SourceRegistry] = None) -> NewsAnalysisOrchestrator:
    """
    Wire an orchestrator from configuration.

    Args:
        config: core.config.Config
        dry_run: Keep results in memory instead of the configured store
        llm_logger: Optional LLMLogger for the openai backend
        intelligence: Pre-built IntelligenceService, or None to build one
        persistence: Pre-built PersistenceAdapter, or None to build one
        registry: Source catalog, or None for the full Canadian catalog

    Raises:
        ConfigurationError: If the configuration cannot support a run
    """
    from .analysis.intelligence import create_intelligence_service
    from .config import ConfigManager
    from .content.fetcher import ContentFetcher
    from .database.persistence import create_store
    from .database.store import MemoryStore
    from .exceptions import ConfigurationError

    problems = ConfigManager.validate(config)
    if problems:
        raise ConfigurationError.from_problems(problems)

    app = config.app
    if intelligence is None:
        intelligence = create_intelligence_service(config, llm_logger=llm_logger)
    if dry_run:
        persistence = PersistenceAdapter(MemoryStore())
    elif persistence is None:
        persistence = PersistenceAdapter(create_store(config))

    return NewsAnalysisOrchestrator(
        registry=registry or SourceRegistry(),
        feed_fetcher=FeedFetcher(
            timeout=app.feed_timeout,
            user_agent=app.feed_user_agent,
            max_entries=app.max_entries_per_source,
        ),
        enricher=ArticleEnricher(
            intelligence,
            ContentFetcher(timeout=app.page_timeout, user_agent=app.feed_user_agent),
        ),
        clusterer=TopicClusterer(app.cluster_strategy, app.lexical_similarity_threshold),
        comparator=CrossSourceComparator(intelligence),
        scoring=ScoringEngine(),
        persistence=persistence,
        source_delay=app.source_delay_seconds,
        article_delay=app.article_delay_seconds,
        max_workers=app.max_source_workers,
    )
