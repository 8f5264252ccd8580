import random

import pytest

from core.analysis import scoring
from core.analysis.comparator import CrossSourceComparator
from core.analysis.scoring import ScoringEngine
from core.models.article import Bias
from core.models.comparison import TopicCluster

VOCABULARY = (
    scoring.OFFICIAL_TERMS + scoring.POLICY_TERMS + scoring.SAFETY_TERMS
    + scoring.ECONOMIC_TERMS + scoring.CONTROVERSY_TERMS + ("hockey", "weather")
)
EXTREME_NUMBERS = (0, -1, 101, 10 ** 12, -10 ** 12, 1e308, -1e308,
                   float("inf"), float("-inf"), float("nan"), None)


def _random_article(rng: random.Random) -> dict:
    words = rng.choices(VOCABULARY, k=rng.randint(0, 60))
    credibility = rng.choice(EXTREME_NUMBERS + (rng.randint(0, 100),))
    return {
        "title": " ".join(words),
        "summary": " ".join(rng.choices(VOCABULARY, k=rng.randint(0, 30))),
        "credibility_score": credibility,
        "bias": rng.choice(["left", "center", "right", "unknown", None]),
        "source": rng.choice(["A", "B", "C", "D"]),
    }


def test_scores_stay_bounded_for_arbitrary_inputs():
    rng = random.Random(20240514)
    for _ in range(1000):
        articles = [_random_article(rng) for _ in range(rng.randint(0, 12))]
        accuracy = rng.choice(EXTREME_NUMBERS[:-1] + (rng.uniform(-500, 500),))

        assert 0 <= scoring.public_interest_score(articles) <= 100
        assessment = scoring.overall_credibility(articles, accuracy)
        assert 0 <= assessment.overall_score <= 100
        assert 0 <= assessment.factual_accuracy <= 100
        assert 0 <= scoring.bias_spread(articles) <= 100

        impact = scoring.article_public_impact(
            ["PM"] * rng.randint(0, 3),
            ["technique"] * rng.randint(0, 500),
            rng.choice(["angry", "fearful", "neutral", "hopeful"]),
            rng.choice(EXTREME_NUMBERS[:-1] + (None,)),
        )
        assert 0 <= impact <= 100


@pytest.mark.parametrize("spread,label", [
    (0, "homogeneous"),
    (19, "homogeneous"),
    (20, "moderate diversity"),
    (49, "moderate diversity"),
    (50, "high diversity"),
    (100, "high diversity"),
])
def test_diversity_label_boundaries(spread, label):
    assert scoring.diversity_label(spread) == label


def test_diversity_label_is_monotonic():
    order = ["homogeneous", "moderate diversity", "high diversity"]
    ranks = [order.index(scoring.diversity_label(spread)) for spread in range(0, 101)]
    assert ranks == sorted(ranks)


def test_policy_terms_count_inflected_forms():
    assert scoring.keyword_factor([{"title": "Budget bill tabled", "summary": ""}], "policy") == 30
    # "taxes" hits "tax", "budgets" hits "budget"
    assert scoring.keyword_factor([{"title": "New taxes and budgets unveiled", "summary": ""}], "policy") == 30
    assert scoring.keyword_factor([{"title": "Hockey night", "summary": ""}], "policy") == 0


def test_official_terms_match_plurals():
    assert scoring.keyword_factor([{"title": "Ministers meet premiers", "summary": ""}], "officials") == 20


def test_public_interest_for_budget_bill_pair():
    articles = [
        {"title": "Bill C-12 budget hearing", "summary": "", "credibility_score": 80},
        {"title": "Bill C-12 budget hearing", "summary": "", "credibility_score": 40},
    ]

    factors = scoring.public_interest_factors(articles)

    assert factors["policy"] == 60
    assert factors["credibility"] == 60
    assert factors["officials"] == 0
    # 60 * 0.25 + 60 * 0.10
    assert scoring.public_interest_score(articles) == 21


def test_average_credibility_of_nothing_is_zero():
    assert scoring.average_credibility([]) == 0
    assert scoring.average_credibility([{"credibility_score": None}, {"credibility_score": 70}]) == 60
    assert scoring.average_credibility([{"credibility_score": 0}, {"credibility_score": 70}]) == 60


def test_bias_spread_uses_effective_bias(make_article):
    articles = [
        make_article(url="https://a.example.ca/1", bias=Bias.LEFT),
        make_article(url="https://b.example.ca/1", bias=Bias.CENTER, topics=("Budget",),
                     bias_override=Bias.RIGHT),
    ]

    assert scoring.bias_spread(articles) == 100
    assert scoring.bias_spread(articles[:1]) == 0
    assert scoring.bias_spread([]) == 0


def test_overall_credibility_counts_distinct_sources():
    articles = [
        {"source": "A", "credibility_score": 90, "bias": "left"},
        {"source": "A", "credibility_score": 90, "bias": "left"},
        {"source": "B", "credibility_score": 60, "bias": "center"},
    ]

    assessment = scoring.overall_credibility(articles, 80)

    assert assessment.source_diversity == 2
    # 80 * 0.4 + 20 * 0.3 + 80 * 0.3
    assert assessment.overall_score == 62
    assert assessment.bias_level == "high diversity"


@pytest.mark.parametrize("tone,sentiment", [
    ("positive", 75), ("hopeful", 75), ("angry", -75), ("fearful", -75), ("negative", -75), ("neutral", 0),
])
def test_tone_to_sentiment(tone, sentiment):
    assert scoring.tone_to_sentiment(tone) == sentiment


def test_score_article_builds_record(make_article):
    article = make_article(credibility=45, topics=("Budget",), officials=("Premier",),
                           techniques=("fear appeal", "loaded language"), tone="angry")

    record = ScoringEngine().score_article(article)

    # 50 + 20 + 2 * 5 + 15 + 10
    assert record.public_impact == 100
    assert record.bias_score == 0
    assert record.sentiment_score == -75


def test_score_article_rejects_bare_article(make_article):
    with pytest.raises(ValueError):
        ScoringEngine().score_article(make_article())


def test_score_comparison_fills_indices(make_article, fake_intelligence, comparison_verdict):
    cluster = TopicCluster(topic="Budget", articles=(
        make_article(url="https://a.example.ca/1", source="A", bias=Bias.LEFT, topics=("Budget",)),
        make_article(url="https://b.example.ca/1", source="B", bias=Bias.RIGHT, topics=("Budget",)),
    ))
    comparison = CrossSourceComparator(fake_intelligence).build_comparison(cluster, comparison_verdict())

    scored = ScoringEngine().score_comparison(comparison, cluster)

    assert scored.is_scored
    assert scored.source_diversity == 2
    assert scored.bias_spread == 100
    assert scored.diversity_label == "high diversity"
    assert 0 <= scored.public_interest_score <= 100
    assert scored.consensus_level == 72
