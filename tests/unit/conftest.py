"""
Shared fixtures for similarity engine unit tests.

Every fixture builds fresh caches so tests never share warm state.
"""

from datetime import datetime, timedelta, timezone

import pytest
import structlog

from issue_similarity.cache.frequency_cache import FrequencyCache
from issue_similarity.cache.token_cache import TokenCache
from issue_similarity.models.document import Document
from issue_similarity.ranking.ranker import SimilarityRanker
from issue_similarity.text.analyzer import TextAnalyzer
from issue_similarity.text.stemmer import PorterStemmer


T0 = datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def reset_structlog():
    """Drop any logging configuration a test installed (e.g. via the CLI)."""
    yield
    structlog.reset_defaults()


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fixed_time():
    return T0


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def stemmer():
    return PorterStemmer(cache=TokenCache(max_size=1000))


@pytest.fixture
def analyzer(stemmer):
    return TextAnalyzer(stemmer=stemmer)


@pytest.fixture
def ranker(analyzer, fake_clock):
    return SimilarityRanker(
        analyzer=analyzer,
        frequency_cache=FrequencyCache(ttl_seconds=300, clock=fake_clock),
        debug=False,
    )


@pytest.fixture
def login_query():
    """Query issue from the login duplicate scenario."""
    return Document(
        id="PROJ-1",
        summary="Login button not responding",
        description="Users report the login button does nothing when clicked",
        reporter="u1",
        labels={"frontend"},
        issue_type="Bug",
        created=T0,
    )


@pytest.fixture
def login_duplicate():
    """Candidate phrased differently but describing the same failure."""
    return Document(
        id="PROJ-2",
        summary="Sign in button unresponsive",
        description="Clicking sign in does nothing",
        reporter="u1",
        labels={"frontend"},
        issue_type="Bug",
        created=T0 + timedelta(days=2),
    )


@pytest.fixture
def unrelated_issue():
    return Document(
        id="PROJ-9",
        summary="Export CSV has wrong date format",
        description="Dates in exported reports use US ordering",
        reporter="u7",
        labels={"reporting"},
        issue_type="Bug",
        created=T0 - timedelta(days=200),
    )
