"""
==============================================================================
Smart Search Filter
==============================================================================

Filters a product list by a free-text query.

Decision Flow:
-------------
    query blank ───────────────▶ full list, unchanged
    product list empty ────────▶ empty, ranker not called
    ranker answers ────────────▶ products whose name was returned
    ranker fails / missing ────▶ substring match on name and description
                                 (degraded, with a notice)

Results always keep the input list's order.

==============================================================================
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from shelfspot.client.models import CatalogItem
from shelfspot.search.ranker import ProductNameRanker, SmartSearchError


logger = logging.getLogger(__name__)

DEGRADED_NOTICE = "Smart search is unavailable. Displaying results using basic keyword matching."


@dataclass
class SearchOutcome:
    """Result of one search."""

    products: List[CatalogItem]
    degraded: bool = False
    notice: Optional[str] = None


class SmartSearchFilter:
    """
    Query-relevance filter over cached products.

    Attributes:
        _ranker: Name ranker; None means always use keyword matching

    Example:
        >>> search = SmartSearchFilter(RemoteProductRanker(api))
        >>> outcome = search.search("something to sit on", cache.products)
        >>> [p.name for p in outcome.products]
        ['Ergonomic Office Chair']
    """

    def __init__(self, ranker: Optional[ProductNameRanker] = None) -> None:
        self._ranker = ranker

    def search(self, query: str, products: Sequence[CatalogItem]) -> SearchOutcome:
        if not query.strip():
            return SearchOutcome(products=list(products))

        if not products:
            return SearchOutcome(products=[])

        if self._ranker is None:
            return SearchOutcome(
                products=self.keyword_filter(query, products),
                degraded=True,
                notice=DEGRADED_NOTICE,
            )

        try:
            names = self._ranker.rank_names(query, [p.name for p in products])
        except SmartSearchError as e:
            logger.warning(f"Smart search failed, using keyword matching: {e}")
            return SearchOutcome(
                products=self.keyword_filter(query, products),
                degraded=True,
                notice=DEGRADED_NOTICE,
            )

        relevant = set(names)
        return SearchOutcome(products=[p for p in products if p.name in relevant])

    @staticmethod
    def keyword_filter(query: str, products: Sequence[CatalogItem]) -> List[CatalogItem]:
        """Case-insensitive substring match on name or description."""
        needle = query.strip().lower()
        return [
            p for p in products
            if needle in p.name.lower() or needle in (p.description or "").lower()
        ]
