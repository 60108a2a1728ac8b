"""Shared fixtures: an httpx client backed by an in-memory route table."""

from __future__ import annotations

from typing import Callable, Union

import httpx
import pytest

from prospect_research.analysis.scoring import qualification_tier
from prospect_research.config import Config
from prospect_research.models import CompanyRecord, ResearchResult, ScoringResult

Route = Union[str, int, httpx.Response, Exception]


class FakeWeb:
    """Maps "scheme://host/path" to canned responses and records requests.

    Route values: a string is served as a 200 HTML page, an int is an
    empty response with that status, an exception instance is raised
    (as a transport error), a Response is served as a copy. Unknown URLs
    answer 404.
    """

    def __init__(self, routes: dict[str, Route] | None = None):
        self.routes = {_normalize(url): value for url, value in (routes or {}).items()}
        self.requested: list[str] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        key = _normalize(str(request.url))
        self.requested.append(key)
        value = self.routes.get(key, 404)
        if isinstance(value, Exception):
            raise type(value)(str(value), request=request)
        if isinstance(value, httpx.Response):
            # fresh copy, a route may be hit more than once
            return httpx.Response(
                value.status_code, headers=value.headers, content=value.content,
            )
        if isinstance(value, int):
            return httpx.Response(value)
        return httpx.Response(200, html=value)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            transport=httpx.MockTransport(self.handler),
            follow_redirects=True,
        )


def _normalize(url: str) -> str:
    parsed = httpx.URL(url)
    return f"{parsed.scheme}://{parsed.host}{parsed.path.rstrip('/')}"


@pytest.fixture
def fake_web() -> Callable[..., FakeWeb]:
    def _make(routes: dict[str, Route] | None = None) -> FakeWeb:
        return FakeWeb(routes)
    return _make


@pytest.fixture
def config() -> Config:
    return Config(batch_delay=0.0, max_concurrent=3)


@pytest.fixture
def home_page_html() -> str:
    return HOME_PAGE_HTML


@pytest.fixture
def team_page_html() -> str:
    return TEAM_PAGE_HTML


@pytest.fixture
def make_result() -> Callable[..., ResearchResult]:
    """Build a minimal ResearchResult with the given fit score."""
    def _make(name: str, score: int = 0, website: str | None = None) -> ResearchResult:
        return ResearchResult(
            company=CompanyRecord(name=name, website=website),
            scoring=ScoringResult(total_score=score, percentage=round(score * 100 / 120)),
            recommendation=qualification_tier(score),
        )
    return _make


HOME_PAGE_HTML = """
<html>
<head>
  <title>Bubble - The best way to build web apps without code</title>
  <meta name="description" content="Bubble is a no-code app builder.">
  <meta name="keywords" content="no-code, visual programming">
  <script src="https://cdn.example.com/react.production.min.js"></script>
  <script src="https://www.google-analytics.com/analytics.js"></script>
</head>
<body>
  <nav>
    <a href="/pricing">Pricing</a>
    <a href="/careers">Careers</a>
    <a href="/press">Press</a>
    <a href="/about">About</a>
  </nav>
  <h1>Build apps with no-code</h1>
  <p>Join 3,000,000 users building visual apps with our drag-and-drop editor.</p>
  <p>We raised a Series B funding round.</p>
  <p>Read a case study from our community. Open API and developer documentation.</p>
  <p>Plans start at $29 per month. Enterprise? Contact sales.</p>
</body>
</html>
"""

TEAM_PAGE_HTML = """
<html><body>
  <div class="grid">
    <div class="team-member">
      <h3>Jane Doe</h3>
      <span class="position">CEO &amp; Co-Founder</span>
      <a href="mailto:jane@acme.com">Email</a>
      <a href="https://www.linkedin.com/in/janedoe">LinkedIn</a>
    </div>
    <div class="team-member">
      <h3>John Smith</h3>
      <span class="position">VP of Sales</span>
    </div>
    <div class="team-member">
      <h3>Alice Brown</h3>
      <span class="position">Chief Technology Officer (CTO)</span>
    </div>
  </div>
</body></html>
"""
