import pytest

from core.analysis.comparator import CrossSourceComparator
from core.models.comparison import BiasDistribution, Comparison, TopicCluster
from core.models.results import UnitStatus


@pytest.fixture
def cross_source_cluster(make_article):
    return TopicCluster(topic="Budget", articles=(
        make_article(url="https://a.example.ca/1", source="A", topics=("Budget",)),
        make_article(url="https://a.example.ca/2", source="A", topics=("Budget",)),
        make_article(url="https://b.example.ca/1", source="B", topics=("Budget",)),
    ))


def test_single_source_cluster_is_skipped_without_calling_service(make_article, fake_intelligence):
    cluster = TopicCluster(topic="Budget", articles=(
        make_article(url="https://a.example.ca/1", source="A", topics=("Budget",)),
        make_article(url="https://a.example.ca/2", source="A", topics=("Budget",)),
    ))

    result = CrossSourceComparator(fake_intelligence).compare(cluster)

    assert result.status is UnitStatus.SUCCESS
    assert result.value is None
    assert fake_intelligence.compared == []


def test_comparison_from_verdict(cross_source_cluster, fake_intelligence):
    result = CrossSourceComparator(fake_intelligence).compare(cross_source_cluster)

    comparison = result.value
    assert result.status is UnitStatus.SUCCESS
    assert comparison.sources == ("A", "B")
    assert comparison.article_count == 3
    assert comparison.consensus_level == 72
    assert comparison.factual_accuracy == 81
    assert comparison.bias_distribution == BiasDistribution(0, 50, 50)
    assert comparison.major_discrepancies == ("Cost estimates differ",)
    assert not comparison.is_scored


def test_service_failure_abandons_topic(cross_source_cluster, intelligence_factory):
    result = CrossSourceComparator(intelligence_factory(fail_comparisons=True)).compare(cross_source_cluster)

    assert result.status is UnitStatus.FAILED
    assert result.value is None
    assert result.unit == "Budget"


def test_missing_scores_default_to_fifty(cross_source_cluster, intelligence_factory):
    verdict = {"consensus_level": "high", "political_bias": "mixed"}

    comparison = CrossSourceComparator(intelligence_factory(comparison_verdict=verdict)).compare(
        cross_source_cluster).value

    assert comparison.consensus_level == 50
    assert comparison.factual_accuracy == 50
    assert comparison.bias_distribution == BiasDistribution()


def test_bias_distribution_is_normalized(cross_source_cluster, intelligence_factory, comparison_verdict):
    verdict = comparison_verdict(political_bias={"left": 1, "center": 1, "right": 1})

    distribution = CrossSourceComparator(intelligence_factory(comparison_verdict=verdict)).compare(
        cross_source_cluster).value.bias_distribution

    assert distribution.left + distribution.center + distribution.right == 100
    assert sorted(distribution.to_dict().values()) == [33, 33, 34]


@pytest.mark.parametrize("weights,expected", [
    ((0, 0, 0), (33, 34, 33)),
    ((20, 30, 10), (33, 50, 17)),
    ((-5, 10, 0), (0, 100, 0)),
])
def test_largest_remainder_normalization(weights, expected):
    distribution = BiasDistribution.normalized(*weights)

    assert (distribution.left, distribution.center, distribution.right) == expected


def test_comparison_requires_two_distinct_sources():
    with pytest.raises(ValueError):
        Comparison(topic="Budget", sources=("A", "A"), consensus_level=50, factual_accuracy=50,
                   bias_distribution=BiasDistribution(), article_count=2)


@pytest.mark.parametrize("weights,expected", [
    ((1e308, 1e308, 1e308), (33, 34, 33)),
    ((float("inf"), 1, 1), (33, 34, 33)),
    ((1e307, 0, 0), (100, 0, 0)),
])
def test_huge_weights_never_break_normalization(weights, expected):
    distribution = BiasDistribution.normalized(*weights)

    assert (distribution.left, distribution.center, distribution.right) == expected


def test_oversized_integer_bias_keeps_the_comparison(cross_source_cluster, intelligence_factory,
                                                     comparison_verdict):
    verdict = comparison_verdict(political_bias={"left": 10 ** 400, "center": 1, "right": 1})

    result = CrossSourceComparator(intelligence_factory(comparison_verdict=verdict)).compare(cross_source_cluster)

    assert result.status is UnitStatus.SUCCESS
    # The unreadable weight counts as zero
    assert result.value.bias_distribution == BiasDistribution(0, 50, 50)


def test_float_overflow_bias_falls_back_to_default_split(cross_source_cluster, intelligence_factory,
                                                         comparison_verdict):
    verdict = comparison_verdict(political_bias={"left": 1e308, "center": 1e308, "right": 1e308})

    result = CrossSourceComparator(intelligence_factory(comparison_verdict=verdict)).compare(cross_source_cluster)

    assert result.status is UnitStatus.SUCCESS
    assert result.value.bias_distribution == BiasDistribution()
