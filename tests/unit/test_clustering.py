import logging

import pytest

from core.analysis.clustering import TopicClusterer


def test_topic_strategy_groups_case_insensitively(make_article):
    articles = [
        make_article(url="https://a.example.ca/1", source="A", topics=("Budget",)),
        make_article(url="https://b.example.ca/1", source="B", topics=("budget ",)),
        make_article(url="https://c.example.ca/1", source="C", topics=("Healthcare",)),
    ]

    clusters = TopicClusterer().cluster(articles)

    by_topic = {c.topic: [a.url for a in c.articles] for c in clusters}
    assert by_topic == {
        "Budget": ["https://a.example.ca/1", "https://b.example.ca/1"],
        "Healthcare": ["https://c.example.ca/1"],
    }


def test_article_with_several_topics_joins_each_cluster_once(make_article):
    article = make_article(topics=("Budget", "Taxation", "BUDGET"))

    clusters = TopicClusterer().cluster([article])

    assert [c.topic for c in clusters] == ["Budget", "Taxation"]
    assert all(len(c) == 1 for c in clusters)


def test_unenriched_articles_are_ignored(make_article, caplog):
    caplog.set_level(logging.WARNING)

    clusters = TopicClusterer().cluster([make_article(), make_article(url="https://x.example.ca", topics=("Budget",))])

    assert [c.topic for c in clusters] == ["Budget"]
    assert "Ignoring 1 unenriched" in caplog.text


def test_lexical_strategy_links_similar_coverage(make_article):
    title = "Finance minister tables federal budget with record deficit"
    articles = [
        make_article(url="https://a.example.ca/1", source="A", title=title, summary="", topics=("Budget",)),
        make_article(url="https://b.example.ca/1", source="B", title=title, summary="", topics=("Deficit",)),
        make_article(url="https://c.example.ca/1", source="C", title="Wildfire evacuation ordered near Kelowna",
                     summary="", topics=("Budget",)),
    ]

    clusters = TopicClusterer(strategy="lexical").cluster(articles)

    assert [len(c) for c in clusters] == [2, 1]
    assert clusters[0].distinct_sources == ["A", "B"]
    assert clusters[0].topic == "Budget"
    # Labels stay unique so comparisons never collide
    assert clusters[1].topic == "Budget (2)"


def test_unknown_strategy_is_rejected():
    with pytest.raises(ValueError):
        TopicClusterer(strategy="semantic")
