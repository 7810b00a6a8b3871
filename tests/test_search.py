"""
==============================================================================
Smart Search Tests
==============================================================================

Tests for SmartSearchFilter and the name rankers. The Gemini client is
replaced by a stand-in exposing models.generate_content.

==============================================================================
"""

from types import SimpleNamespace
from typing import List

import pytest

from shelfspot.client import CatalogApiClient, CatalogItem
from shelfspot.search import (
    DEGRADED_NOTICE,
    GeminiProductRanker,
    RemoteProductRanker,
    SmartSearchError,
    SmartSearchFilter,
)

from tests.conftest import FakeRanker


def catalog() -> List[CatalogItem]:
    return [
        CatalogItem(id="1", name="Ergonomic Office Chair", price=299.99, description="Chair with lumbar support"),
        CatalogItem(id="2", name="Adjustable Desk Lamp", price=79.5, description="LED lamp for your desk"),
        CatalogItem(id="3", name="Premium Yoga Mat", price=45, description="Non-slip mat"),
    ]


class FakeGenAI:
    """Stand-in for genai.Client recording generate_content calls."""

    def __init__(self, parsed=None, text=None, error=None):
        self.calls = []
        self._response = SimpleNamespace(parsed=parsed, text=text)
        self._error = error
        self.models = SimpleNamespace(generate_content=self._generate_content)

    def _generate_content(self, **kwargs):
        self.calls.append(kwargs)
        if self._error is not None:
            raise self._error
        return self._response


class TestSmartSearchFilter:
    """Tests for the search decision flow."""

    def test_blank_query_returns_everything(self):
        """Test an empty query returns the list unchanged without ranking."""
        ranker = FakeRanker()
        products = catalog()

        outcome = SmartSearchFilter(ranker).search("   ", products)

        assert outcome.products == products
        assert outcome.degraded is False
        assert ranker.calls == []

    def test_empty_products_skip_ranker(self):
        """Test no products means no ranker call and no results."""
        ranker = FakeRanker(names=["Anything"])

        outcome = SmartSearchFilter(ranker).search("chair", [])

        assert outcome.products == []
        assert ranker.calls == []

    def test_ranker_result_keeps_list_order(self):
        """Test matches come back in catalog order, not ranker order."""
        ranker = FakeRanker(names=["Premium Yoga Mat", "Ergonomic Office Chair"])

        outcome = SmartSearchFilter(ranker).search("comfort", catalog())

        assert [p.id for p in outcome.products] == ["1", "3"]
        assert outcome.degraded is False
        assert outcome.notice is None
        assert ranker.calls == [("comfort", [p.name for p in catalog()])]

    def test_ranker_returns_nothing(self):
        outcome = SmartSearchFilter(FakeRanker(names=[])).search("spaceship", catalog())
        assert outcome.products == []
        assert outcome.degraded is False

    def test_ranker_failure_falls_back_to_keywords(self):
        """Test a failing ranker degrades to substring matching."""
        outcome = SmartSearchFilter(FakeRanker(fail=True)).search("LAMP", catalog())

        assert [p.id for p in outcome.products] == ["2"]
        assert outcome.degraded is True
        assert outcome.notice == DEGRADED_NOTICE

    def test_no_ranker_uses_keywords(self):
        outcome = SmartSearchFilter().search("lumbar", catalog())
        assert [p.id for p in outcome.products] == ["1"]
        assert outcome.degraded is True

    def test_keyword_filter_matches_description(self):
        matches = SmartSearchFilter.keyword_filter("non-slip", catalog())
        assert [p.id for p in matches] == ["3"]


class TestGeminiProductRanker:
    """Tests for GeminiProductRanker."""

    def test_requires_api_key(self):
        with pytest.raises(SmartSearchError):
            GeminiProductRanker(api_key=None)

    def test_prompt_lists_products_and_query(self):
        prompt = GeminiProductRanker.build_prompt("a lamp", ["Desk Lamp", "Yoga Mat"])
        assert "- Desk Lamp" in prompt
        assert "- Yoga Mat" in prompt
        assert "a lamp" in prompt

    def test_uses_parsed_response(self):
        """Test structured output is filtered to known names."""
        fake = FakeGenAI(parsed=["Desk Lamp", "Flying Car", "Desk Lamp"])
        ranker = GeminiProductRanker(client=fake, model="test-model")

        names = ranker.rank_names("light", ["Desk Lamp", "Yoga Mat"])

        assert names == ["Desk Lamp"]
        assert fake.calls[0]["model"] == "test-model"
        assert "Desk Lamp" in fake.calls[0]["contents"]

    def test_falls_back_to_text(self):
        """Test a JSON text response is parsed when .parsed is empty."""
        fake = FakeGenAI(text='["Yoga Mat"]')
        ranker = GeminiProductRanker(client=fake)

        assert ranker.rank_names("stretch", ["Desk Lamp", "Yoga Mat"]) == ["Yoga Mat"]

    @pytest.mark.parametrize("fake", [
        FakeGenAI(text=""),
        FakeGenAI(text="Sure! Here are the products"),
        FakeGenAI(text='{"names": ["Yoga Mat"]}'),
        FakeGenAI(error=RuntimeError("quota exceeded")),
    ])
    def test_bad_responses_raise(self, fake: FakeGenAI):
        ranker = GeminiProductRanker(client=fake)
        with pytest.raises(SmartSearchError):
            ranker.rank_names("stretch", ["Yoga Mat"])


class TestRemoteProductRanker:
    """Tests for RemoteProductRanker against the test application."""

    def test_returns_server_answer(self, api: CatalogApiClient, ranker: FakeRanker):
        ranker.names = ["Yoga Mat"]
        assert RemoteProductRanker(api).rank_names("stretch", ["Desk Lamp", "Yoga Mat"]) == ["Yoga Mat"]

    def test_server_failure_raises(self, api: CatalogApiClient, ranker: FakeRanker):
        """Test a 502 from the server becomes SmartSearchError."""
        ranker.fail = True
        with pytest.raises(SmartSearchError):
            RemoteProductRanker(api).rank_names("stretch", ["Yoga Mat"])

    def test_filter_over_remote_ranker(self, api: CatalogApiClient, ranker: FakeRanker):
        """Test the full client path: server ranking, local order."""
        ranker.names = ["Premium Yoga Mat", "Adjustable Desk Lamp"]

        outcome = SmartSearchFilter(RemoteProductRanker(api)).search("home", catalog())

        assert [p.id for p in outcome.products] == ["2", "3"]
        assert outcome.degraded is False
