"""
Shared pytest fixtures for Brand Analyzer tests.

Outbound HTTP goes through httpx.MockTransport, the store is in-memory SQLite.
"""

import httpx
import pytest
from fastapi.testclient import TestClient

from brand_analyzer.config import Settings
from brand_analyzer.db.repo import WebsiteRepository
from brand_analyzer.db.session import Database
from brand_analyzer.main import create_app, get_enhancer, get_fetcher
from brand_analyzer.services.enhancer import GeminiEnhancer
from brand_analyzer.services.fetcher import Fetcher


PAGE_HTML = """
<html>
  <head>
    <title>Acme Rockets</title>
    <meta property="og:site_name" content="Acme">
    <meta name="description" content="Rockets, anvils and portable holes since 1949.">
  </head>
  <body><p>First paragraph.</p></body>
</html>
"""


def gemini_body(text):
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}


class FakeUpstream:
    """Routes MockTransport requests to per-test handlers for the page and Gemini."""

    def __init__(self):
        self.pages = {}
        self.gemini = lambda request: httpx.Response(200, json=gemini_body("AI text"))
        self.requests = []

    def page_handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        page = self.pages.get(str(request.url))
        if page is None:
            return httpx.Response(404, text="missing")
        if callable(page):
            return page(request)
        return httpx.Response(200, text=page, headers={"content-type": "text/html"})

    def gemini_handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.gemini(request)


@pytest.fixture
def database():
    db = Database("sqlite://")
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def repository(database):
    return WebsiteRepository(database)


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def make_fetcher(upstream):
    def _make():
        return Fetcher(timeout=5.0, transport=httpx.MockTransport(upstream.page_handler))
    return _make


@pytest.fixture
def test_settings():
    return Settings(_env_file=None, DATABASE_URL="sqlite://", GEMINI_API_KEY=None, LOG_LEVEL="DEBUG")


@pytest.fixture
def api_key():
    """Gemini key handed to the enhancer; tests set it to None to disable enhancement."""
    return {"value": "test-key"}


@pytest.fixture
def client(test_settings, database, upstream, make_fetcher, api_key):
    app = create_app(test_settings, database=database)

    async def fake_fetcher():
        fetcher = make_fetcher()
        try:
            yield fetcher
        finally:
            await fetcher.close()

    def fake_enhancer():
        return GeminiEnhancer(api_key=api_key["value"], model="gemini-test",
                              api_base="https://gemini.test/v1beta",
                              transport=httpx.MockTransport(upstream.gemini_handler))

    app.dependency_overrides[get_fetcher] = fake_fetcher
    app.dependency_overrides[get_enhancer] = fake_enhancer
    with TestClient(app) as c:
        yield c
