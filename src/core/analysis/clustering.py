#!/usr/bin/env python3
"""
Topic clustering of enriched articles.

Clusters are recomputed from scratch each run and never stored.
"""

import logging
from typing import Dict, List, Sequence

from ..models.article import Article
from ..models.comparison import TopicCluster
from .keywords import significant_words, jaccard, most_common

logger = logging.getLogger(__name__)

DEFAULT_SIMILARITY_THRESHOLD = 0.6


class TopicClusterer:
    """
    Groups articles into topic clusters.

    Strategies:
        topic: one cluster per topic label; an article with several topics
            joins several clusters
        lexical: single-link grouping by keyword overlap of title and summary
    """

    STRATEGIES = ('topic', 'lexical')

    def __init__(self, strategy: str = 'topic',
                 similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD):
        if strategy not in self.STRATEGIES:
            raise ValueError(f"Unknown clustering strategy: {strategy}")
        self.strategy = strategy
        self.similarity_threshold = similarity_threshold

    def cluster(self, articles: Sequence[Article]) -> List[TopicCluster]:
        enriched = [a for a in articles if a.is_enriched]
        if len(enriched) < len(articles):
            logger.warning(f"Ignoring {len(articles) - len(enriched)} unenriched articles during clustering")

        if self.strategy == 'lexical':
            clusters = self._cluster_lexical(enriched)
        else:
            clusters = self._cluster_by_topic(enriched)

        logger.info(f"Formed {len(clusters)} clusters from {len(enriched)} articles ({self.strategy})")
        return clusters

    def _cluster_by_topic(self, articles: Sequence[Article]) -> List[TopicCluster]:
        labels: Dict[str, str] = {}
        members: Dict[str, List[Article]] = {}
        for article in articles:
            seen_in_article = set()
            for topic in article.topics:
                key = topic.strip().lower()
                if not key or key in seen_in_article:
                    continue
                seen_in_article.add(key)
                labels.setdefault(key, topic.strip())
                members.setdefault(key, []).append(article)

        return [TopicCluster(topic=labels[key], articles=tuple(group)) for key, group in members.items()]

    def _cluster_lexical(self, articles: Sequence[Article]) -> List[TopicCluster]:
        word_sets = [significant_words(a.core.text_for_matching()) for a in articles]

        # Union-find over pairs above the threshold
        parent = list(range(len(articles)))

        def find(i: int) -> int:
            while parent[i] != i:
                parent[i] = parent[parent[i]]
                i = parent[i]
            return i

        for i in range(len(articles)):
            for j in range(i + 1, len(articles)):
                if jaccard(word_sets[i], word_sets[j]) >= self.similarity_threshold:
                    root_i, root_j = find(i), find(j)
                    if root_i != root_j:
                        parent[root_j] = root_i

        groups: Dict[int, List[Article]] = {}
        for index, article in enumerate(articles):
            groups.setdefault(find(index), []).append(article)

        clusters = []
        used: Dict[str, int] = {}
        for group in groups.values():
            topics = [topic for article in group for topic in article.topics]
            label = most_common(topics)
            # Comparisons are keyed by topic, so labels must stay unique
            used[label] = used.get(label, 0) + 1
            if used[label] > 1:
                label = f"{label} ({used[label]})"
            clusters.append(TopicCluster(topic=label, articles=tuple(group)))
        return clusters
