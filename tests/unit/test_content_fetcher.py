import requests

from core.content import fetcher as fetcher_module
from core.content.fetcher import ContentFetcher

ARTICLE_URL = "https://maple.example.ca/budget"

ARTICLE_HTML = """
<html><body>
  <nav><p>Home</p></nav>
  <article>
    <p>The finance minister tabled the budget on Tuesday.</p>
    <p>It projects a deficit of $40 billion.</p>
    <script>track()</script>
    <p>Opposition parties criticised the spending plan.</p>
  </article>
</body></html>
"""


def test_selector_extraction_joins_article_paragraphs(fake_session_factory, fake_response):
    session = fake_session_factory({ARTICLE_URL: fake_response(200, ARTICLE_HTML)})

    body = ContentFetcher(session=session).fetch_body(ARTICLE_URL)

    assert body.splitlines() == [
        "The finance minister tabled the budget on Tuesday.",
        "It projects a deficit of $40 billion.",
        "Opposition parties criticised the spending plan.",
    ]
    assert "track()" not in body


def test_non_2xx_page_yields_none(fake_session_factory, fake_response):
    session = fake_session_factory({ARTICLE_URL: fake_response(503, "busy")})

    assert ContentFetcher(session=session).fetch_body(ARTICLE_URL) is None


def test_transport_error_yields_none(fake_session_factory):
    session = fake_session_factory({ARTICLE_URL: requests.Timeout("slow")})

    assert ContentFetcher(session=session).fetch_body(ARTICLE_URL) is None
    assert len(session.calls) == 1


def test_falls_back_to_trafilatura_when_selectors_find_too_little(fake_session_factory, fake_response, monkeypatch):
    html = "<html><body><div><p>Only one paragraph.</p></div></body></html>"
    session = fake_session_factory({ARTICLE_URL: fake_response(200, html)})
    monkeypatch.setattr(fetcher_module.trafilatura, "extract",
                        lambda *args, **kwargs: "First line.\n\nSecond line.\nThird line.")

    body = ContentFetcher(session=session).fetch_body(ARTICLE_URL)

    assert body == "First line.\nSecond line.\nThird line."


def test_short_extraction_is_rejected(fake_session_factory, fake_response, monkeypatch):
    html = "<html><body><p>Too short.</p></body></html>"
    session = fake_session_factory({ARTICLE_URL: fake_response(200, html)})
    monkeypatch.setattr(fetcher_module.trafilatura, "extract", lambda *args, **kwargs: "Too short.")

    assert ContentFetcher(session=session).fetch_body(ARTICLE_URL) is None
