import logging
from unittest.mock import MagicMock

import psycopg
import pytest
from psycopg.types.json import Jsonb

from core.config import Config
from core.database import postgres_store
from core.database.persistence import PersistenceAdapter, create_store
from core.database.postgres_store import PostgresStore
from core.database.store import ARTICLE_UPDATE_COLUMNS, MemoryStore, NewsStore
from core.database.supabase_store import SupabaseStore
from core.exceptions import DatabaseOperationError
from core.models.article import ArticleRecord, Bias
from core.models.comparison import BiasDistribution, Comparison
from core.models.results import UnitStatus


@pytest.fixture
def make_record(make_article):
    def _make(title="Parliament debates the budget", factuality=80, impact=70, **kwargs):
        article = make_article(title=title, topics=("Budget",), factuality=factuality, **kwargs)
        return ArticleRecord(article=article, public_impact=impact, bias_score=0, sentiment_score=0)
    return _make


def _comparison(consensus=60, accuracy=70, sources=("A", "B"), pattern="Loaded language"):
    return Comparison(topic="Budget", sources=sources, consensus_level=consensus, factual_accuracy=accuracy,
                      bias_distribution=BiasDistribution(20, 50, 30), article_count=3,
                      propaganda_patterns=(pattern,))


def test_article_upsert_refreshes_analysis_but_keeps_identity(persistence, memory_store, make_record, hours_ago):
    first = make_record(published=hours_ago(5), factuality=80, impact=70)
    second = make_record(title="Edited headline", published=hours_ago(1), factuality=40, impact=90,
                         bias=Bias.RIGHT)

    assert persistence.upsert_article(first).status is UnitStatus.SUCCESS
    assert persistence.upsert_article(second).status is UnitStatus.SUCCESS

    assert len(memory_store.articles) == 1
    row = memory_store.get_article("https://maple.example.ca/a")
    assert row["title"] == "Parliament debates the budget"
    assert row["published_at"] == hours_ago(5)
    assert row["factuality_score"] == 40
    assert row["public_impact"] == 90
    assert row["bias"] == "right"


def test_comparison_upsert_refreshes_scores_only(persistence, memory_store):
    persistence.upsert_comparison(_comparison(consensus=60, accuracy=70))
    persistence.upsert_comparison(_comparison(consensus=85, accuracy=40, sources=("A", "B", "C"),
                                              pattern="Appeal to fear"))

    row = memory_store.get_comparison("Budget")
    assert row["consensus_level"] == 85
    assert row["factual_accuracy"] == 40
    assert row["sources"] == ["A", "B"]
    assert row["propaganda_patterns"] == ["Loaded language"]
    assert row["political_bias"] == {"left": 20, "center": 50, "right": 30}


class BrokenStore(NewsStore):
    name = "broken"

    def upsert_article(self, record):
        raise DatabaseOperationError("upsert", "news_articles", RuntimeError("connection reset"))

    def upsert_comparison(self, comparison):
        raise DatabaseOperationError("upsert", "news_comparisons", RuntimeError("connection reset"))

    def get_article(self, url):
        return None

    def get_comparison(self, topic):
        return None


def test_store_failures_become_failed_units(make_record, caplog):
    caplog.set_level(logging.ERROR)
    adapter = PersistenceAdapter(BrokenStore())

    article_result = adapter.upsert_article(make_record())
    comparison_result = adapter.upsert_comparison(_comparison())

    assert article_result.status is UnitStatus.FAILED
    assert article_result.unit == "https://maple.example.ca/a"
    assert comparison_result.status is UnitStatus.FAILED
    assert comparison_result.unit == "Budget"
    assert "Failed to store article" in caplog.text
    assert "Failed to store comparison" in caplog.text


@pytest.fixture
def cursor():
    return MagicMock()


@pytest.fixture
def connection_manager(cursor):
    manager = MagicMock()
    manager.get_cursor.return_value.__enter__.return_value = cursor
    return manager


def test_postgres_article_upsert_uses_on_conflict(connection_manager, cursor, make_record):
    PostgresStore(connection_manager).upsert_article(make_record())

    sql, params = cursor.execute.call_args[0]
    assert sql.startswith("INSERT INTO news_articles (url, title")
    assert "ON CONFLICT (url) DO UPDATE SET" in sql
    assert "title = EXCLUDED.title" not in sql
    assert "published_at = EXCLUDED.published_at" not in sql
    assert "factuality_score = EXCLUDED.factuality_score" in sql
    assert params["url"] == "https://maple.example.ca/a"
    assert isinstance(params["key_topics"], Jsonb)
    assert params["key_topics"].obj == ["Budget"]


def test_postgres_comparison_sql_overwrites_scores_only():
    update_clause = postgres_store.COMPARISON_UPSERT_SQL.split("DO UPDATE SET ", 1)[1]

    assert "ON CONFLICT (topic)" in postgres_store.COMPARISON_UPSERT_SQL
    assert update_clause == ("consensus_level = EXCLUDED.consensus_level, "
                             "factual_accuracy = EXCLUDED.factual_accuracy, "
                             "analysis_date = EXCLUDED.analysis_date")


def test_postgres_errors_are_wrapped(connection_manager, cursor):
    cursor.execute.side_effect = psycopg.OperationalError("server closed the connection")

    with pytest.raises(DatabaseOperationError) as exc_info:
        PostgresStore(connection_manager).upsert_comparison(_comparison())

    assert exc_info.value.context["table"] == "news_comparisons"


def test_postgres_select_returns_row(connection_manager, cursor):
    cursor.fetchone.return_value = {"topic": "Budget", "consensus_level": 60}

    row = PostgresStore(connection_manager).get_comparison("Budget")

    assert row == {"topic": "Budget", "consensus_level": 60}
    assert cursor.execute.call_args[0][1] == ("Budget",)


def test_supabase_updates_existing_row(make_record):
    client = MagicMock()
    table = client.table.return_value
    table.select.return_value.eq.return_value.execute.return_value.data = [{"id": 7}]

    SupabaseStore(client).upsert_article(make_record())

    payload = table.update.call_args[0][0]
    assert set(payload) == set(ARTICLE_UPDATE_COLUMNS)
    assert isinstance(payload["analysis_date"], str)
    table.update.return_value.eq.assert_called_once_with("url", "https://maple.example.ca/a")
    table.insert.assert_not_called()


def test_supabase_inserts_new_row(make_record):
    client = MagicMock()
    table = client.table.return_value
    table.select.return_value.eq.return_value.execute.return_value.data = []

    SupabaseStore(client).upsert_article(make_record())

    inserted = table.insert.call_args[0][0]
    assert inserted["url"] == "https://maple.example.ca/a"
    assert isinstance(inserted["published_at"], str)
    table.update.assert_not_called()


def test_supabase_errors_are_wrapped(make_record):
    client = MagicMock()
    client.table.side_effect = RuntimeError("401 Unauthorized")

    with pytest.raises(DatabaseOperationError):
        SupabaseStore(client).upsert_article(make_record())


def test_memory_backend_selected_from_config():
    config = Config()
    config.storage.backend = "memory"

    assert isinstance(create_store(config), MemoryStore)
