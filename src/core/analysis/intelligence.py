#!/usr/bin/env python3
"""
Intelligence service abstraction.

The pipeline talks to the language-analysis service only through
IntelligenceService. Two implementations exist: the OpenAI-backed one used
in production and a deterministic keyword-based one for offline runs.
"""

import re
import logging
from abc import ABC, abstractmethod
from collections import Counter
from itertools import combinations
from typing import Dict, Any

from ..models.article import Article
from ..models.comparison import TopicCluster
from .keywords import extract_basic_topics, extract_officials, significant_words, jaccard

logger = logging.getLogger(__name__)


class IntelligenceService(ABC):
    """
    Contract for the language-analysis service.

    Implementations return raw verdict dictionaries shaped like the JSON
    schemas in core.schemas, and raise IntelligenceError subclasses when no
    verdict can be produced.
    """

    name = "abstract"

    @abstractmethod
    def analyze_article(self, article: Article) -> Dict[str, Any]:
        """Bias, propaganda and factuality verdict for one article."""
        pass

    @abstractmethod
    def compare_cluster(self, cluster: TopicCluster) -> Dict[str, Any]:
        """Cross-source verdict for one topic cluster."""
        pass

    def health_check(self) -> Dict[str, Any]:
        return {'backend': self.name, 'available': True}


class OpenAIIntelligenceService(IntelligenceService):
    """Production implementation backed by OpenAI chat completions."""

    name = "openai"

    def __init__(self, client):
        """
        Args:
            client: integrations.openai_client.OpenAIClient
        """
        self.client = client

    def analyze_article(self, article: Article) -> Dict[str, Any]:
        return self.client.analyze_article(article)

    def compare_cluster(self, cluster: TopicCluster) -> Dict[str, Any]:
        return self.client.compare_topic(cluster.topic, cluster.articles)

    def health_check(self) -> Dict[str, Any]:
        return {'backend': self.name, 'model': self.client.model,
                'available': self.client.test_connection()}


# Loaded-language cues, lowercase whole words -> technique label
_TECHNIQUE_CUES = {
    'Loaded language': ('radical', 'extremist', 'disastrous', 'catastrophic', 'outrageous', 'shameful'),
    'Appeal to fear': ('threat', 'danger', 'dangerous', 'chaos', 'collapse', 'crisis'),
    'Ad hominem attacks': ('incompetent', 'corrupt', 'liar', 'hypocrite', 'clueless'),
    'False dichotomy': ('either', 'only option', 'no alternative'),
}

_TONE_CUES = (
    ('angry', ('outrage', 'furious', 'slams', 'blasts', 'fury', 'anger')),
    ('fearful', ('fear', 'threat', 'warning', 'alarm', 'danger', 'crisis')),
    ('hopeful', ('hope', 'promise', 'breakthrough', 'optimism', 'recovery')),
    ('positive', ('success', 'win', 'boost', 'growth', 'praise', 'agreement')),
    ('negative', ('fail', 'failure', 'decline', 'cut', 'cuts', 'loss', 'scandal')),
)

_SENTENCE_SPLIT = re.compile(r'(?<=[.!?])\s+')
_HAS_DIGIT = re.compile(r'\d')


def _contains_word(text: str, cue: str) -> bool:
    return re.search(r'\b' + re.escape(cue) + r'\b', text) is not None


class LocalIntelligenceService(IntelligenceService):
    """
    Deterministic keyword heuristics.

    Needs no network access. Comparisons are derived from keyword overlap
    between the cluster's articles.
    """

    name = "local"

    def __init__(self, base_factuality: int = 70, technique_penalty: int = 5):
        self.base_factuality = base_factuality
        self.technique_penalty = technique_penalty

    def analyze_article(self, article: Article) -> Dict[str, Any]:
        text = f"{article.title} {article.core.body or article.core.summary}"
        lower = text.lower()

        techniques = [label for label, cues in _TECHNIQUE_CUES.items()
                      if any(_contains_word(lower, cue) for cue in cues)]
        tone = next((tone for tone, cues in _TONE_CUES
                     if any(_contains_word(lower, cue) for cue in cues)), 'neutral')

        claims = []
        for sentence in _SENTENCE_SPLIT.split(article.core.summary or ''):
            sentence = sentence.strip()
            if sentence and _HAS_DIGIT.search(sentence):
                claims.append({'claim': sentence, 'evidence': '', 'verifiable': True, 'contradictions': []})

        topics = extract_basic_topics(f"{article.title} {article.core.summary}")
        return {
            'propaganda_techniques': techniques,
            'key_topics': topics,
            'politicians_involved': extract_officials(text),
            'factuality_score': self.base_factuality - self.technique_penalty * len(techniques),
            'emotional_tone': tone,
            'bias_analysis': article.core.bias.value,
            'claims': claims[:5],
            'propaganda_analysis': ', '.join(techniques) if techniques else 'No manipulation cues found',
            'credibility_assessment': f"Source baseline credibility {article.core.credibility}",
        }

    def compare_cluster(self, cluster: TopicCluster) -> Dict[str, Any]:
        articles = list(cluster.articles)
        word_sets = [significant_words(a.core.text_for_matching()) for a in articles]

        pairs = list(combinations(range(len(articles)), 2))
        if pairs:
            overlap = sum(jaccard(word_sets[i], word_sets[j]) for i, j in pairs) / len(pairs)
        else:
            overlap = 1.0

        discrepancies = []
        for i, j in pairs:
            first, second = articles[i], articles[j]
            if first.source == second.source or not (first.enrichment and second.enrichment):
                continue
            if first.enrichment.tone != second.enrichment.tone:
                discrepancies.append(
                    f"{first.source} reads {first.enrichment.tone} while {second.source} reads "
                    f"{second.enrichment.tone}"
                )

        technique_counts = Counter(
            technique for a in articles if a.enrichment for technique in set(a.enrichment.techniques)
        )
        patterns = [technique for technique, count in technique_counts.items() if count >= 2]

        factualities = [a.enrichment.factuality for a in articles if a.enrichment]
        accuracy = round(sum(factualities) / len(factualities)) if factualities else 50

        leanings = Counter(a.effective_bias.value for a in articles)
        return {
            'consensus_level': round(overlap * 100),
            'major_discrepancies': discrepancies[:5],
            'propaganda_patterns': patterns,
            'factual_accuracy': accuracy,
            'political_bias': {
                'left': leanings.get('left', 0),
                'center': leanings.get('center', 0),
                'right': leanings.get('right', 0),
            },
            'media_manipulation': ', '.join(patterns) if patterns else '',
            'public_impact': f"{len(cluster.distinct_sources)} outlets covered {cluster.topic}",
            'recommended_action': 'Compare the original sources before drawing conclusions',
        }


def create_intelligence_service(config, llm_logger=None, client=None) -> IntelligenceService:
    """
    Build the service selected by INTELLIGENCE_BACKEND.

    Args:
        config: core.config.Config
        llm_logger: Optional LLMLogger for the openai backend
        client: Optional pre-built OpenAIClient
    """
    backend = config.intelligence.backend
    if backend == 'local':
        logger.info("Using local keyword intelligence service")
        return LocalIntelligenceService()

    if client is None:
        from integrations.openai_client import OpenAIClient
        client = OpenAIClient(
            api_key=config.intelligence.openai_api_key,
            model=config.intelligence.model,
            timeout=config.intelligence.timeout,
            max_tokens=config.intelligence.max_tokens,
            body_char_budget=config.app.body_char_budget,
            excerpt_chars=config.app.comparison_excerpt_chars,
            llm_logger=llm_logger,
        )
    logger.info(f"Using OpenAI intelligence service ({client.model})")
    return OpenAIIntelligenceService(client)
