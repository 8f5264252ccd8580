#!/usr/bin/env python3
"""
Cross-source comparison of topic clusters.
"""

import math
import logging
from typing import Dict, Any, Optional

from ..exceptions import IntelligenceError
from ..models.comparison import BiasDistribution, Comparison, TopicCluster
from ..models.results import UnitResult
from .enricher import clamp_score, string_list
from .intelligence import IntelligenceService

logger = logging.getLogger(__name__)

DEFAULT_CONSENSUS = 50
DEFAULT_ACCURACY = 50
MIN_DISTINCT_SOURCES = 2


class CrossSourceComparator:
    """Asks the intelligence service to compare how outlets covered a topic."""

    def __init__(self, intelligence: IntelligenceService):
        self.intelligence = intelligence

    def compare(self, cluster: TopicCluster) -> UnitResult[Optional[Comparison]]:
        """
        Compare one cluster.

        Returns:
            SUCCESS with None when fewer than two distinct sources cover the
            topic, SUCCESS with a Comparison otherwise, or FAILED when the
            service gives no usable verdict. The topic is then dropped for
            this run.
        """
        sources = cluster.distinct_sources
        if len(sources) < MIN_DISTINCT_SOURCES:
            logger.debug(f"Skipping '{cluster.topic}': only {len(sources)} source(s)")
            return UnitResult.success(cluster.topic, None)

        logger.info(f"Comparing '{cluster.topic}' across {len(sources)} sources ({len(cluster)} articles)")
        try:
            verdict = self.intelligence.compare_cluster(cluster)
        except IntelligenceError as e:
            logger.warning(f"Comparison for '{cluster.topic}' abandoned: {e.message}")
            return UnitResult.failed(cluster.topic, e.message)

        if not isinstance(verdict, dict):
            logger.warning(f"Comparison for '{cluster.topic}' abandoned: verdict is not an object")
            return UnitResult.failed(cluster.topic, "verdict is not a JSON object")

        try:
            comparison = self.build_comparison(cluster, verdict)
        except (ValueError, TypeError, OverflowError) as e:
            logger.warning(f"Comparison for '{cluster.topic}' abandoned: unusable verdict ({e})")
            return UnitResult.failed(cluster.topic, f"unusable verdict: {e}")
        return UnitResult.success(cluster.topic, comparison)

    def build_comparison(self, cluster: TopicCluster, verdict: Dict[str, Any]) -> Comparison:
        """Fill a Comparison from a possibly partial verdict."""
        return Comparison(
            topic=cluster.topic,
            sources=tuple(cluster.distinct_sources),
            consensus_level=clamp_score(verdict.get('consensus_level'), DEFAULT_CONSENSUS),
            factual_accuracy=clamp_score(verdict.get('factual_accuracy'), DEFAULT_ACCURACY),
            bias_distribution=self._distribution(verdict.get('political_bias')),
            article_count=len(cluster),
            major_discrepancies=tuple(string_list(verdict.get('major_discrepancies'))),
            propaganda_patterns=tuple(string_list(verdict.get('propaganda_patterns'))),
            media_manipulation=str(verdict.get('media_manipulation') or ''),
            public_impact=str(verdict.get('public_impact') or ''),
            recommended_action=str(verdict.get('recommended_action') or ''),
        )

    @staticmethod
    def _distribution(value: Any) -> BiasDistribution:
        if not isinstance(value, dict):
            return BiasDistribution()
        weights = []
        for key in ('left', 'center', 'right'):
            raw = value.get(key, 0)
            try:
                number = float(raw) if not isinstance(raw, bool) else 0.0
            except (TypeError, ValueError, OverflowError):
                number = 0.0
            if not math.isfinite(number):
                number = 0.0
            weights.append(number)
        return BiasDistribution.normalized(*weights)
