"""
==============================================================================
Search Package
==============================================================================

Smart search over the client's product list.

Classes:
--------
- SmartSearchFilter: Query filtering with keyword fallback
- GeminiProductRanker / RemoteProductRanker: Name rankers

==============================================================================
"""

from .filter import DEGRADED_NOTICE, SearchOutcome, SmartSearchFilter
from .ranker import (
    GeminiProductRanker,
    ProductNameRanker,
    RemoteProductRanker,
    SmartSearchError,
)

__all__ = [
    "DEGRADED_NOTICE",
    "SearchOutcome",
    "SmartSearchFilter",
    "GeminiProductRanker",
    "ProductNameRanker",
    "RemoteProductRanker",
    "SmartSearchError",
]
