import pytest

from core.models.article import Bias
from core.sources.base import SourceCategory
from core.sources.catalog import CANADIAN_SOURCES
from core.sources.registry import SourceRegistry


def test_catalog_duplicate_is_skipped(caplog):
    registry = SourceRegistry()

    assert len(CANADIAN_SOURCES) == 62
    assert len(registry) == 61
    assert "Parliamentary Hill Times" not in registry.list_available_sources()
    assert "Skipping duplicate source entry" in caplog.text


def test_catalog_leanings():
    breakdown = SourceRegistry().bias_breakdown()

    assert breakdown == {"left": 10, "center": 43, "right": 8}


def test_lookup_is_case_insensitive():
    assert SourceRegistry().get_source("  cbc news ").name == "CBC News"


def test_unknown_source_raises_key_error():
    with pytest.raises(KeyError, match="Nowhere Gazette"):
        SourceRegistry().get_source("Nowhere Gazette")


def test_select_keeps_catalog_order(make_source):
    profiles = [make_source("Alpha"), make_source("Bravo"), make_source("Charlie")]
    registry = SourceRegistry(profiles)

    selected = registry.select(["charlie", "Alpha"])

    assert [p.name for p in selected] == ["Alpha", "Charlie"]
    assert registry.select() == tuple(profiles)


def test_select_with_unknown_name_raises(make_source):
    with pytest.raises(KeyError):
        SourceRegistry([make_source("Alpha")]).select(["Alpha", "Bravo"])


def test_filter_by_bias_and_category(make_source):
    registry = SourceRegistry([
        make_source("Alpha", bias=Bias.LEFT, category=SourceCategory.MAINSTREAM),
        make_source("Bravo", bias=Bias.LEFT, category=SourceCategory.ALTERNATIVE),
        make_source("Charlie", bias=Bias.RIGHT, category=SourceCategory.ALTERNATIVE),
    ])

    assert [p.name for p in registry.filter(bias=Bias.LEFT)] == ["Alpha", "Bravo"]
    assert [p.name for p in registry.filter(category=SourceCategory.ALTERNATIVE)] == ["Bravo", "Charlie"]
    assert [p.name for p in registry.filter(Bias.LEFT, SourceCategory.ALTERNATIVE)] == ["Bravo"]


def test_profiles_are_validated(make_source):
    with pytest.raises(ValueError):
        make_source("Alpha", credibility=120)
    with pytest.raises(ValueError):
        make_source("Alpha", feed_url="ftp://alpha.example.ca/rss")
