"""
==============================================================================
Smart Search Endpoint
==============================================================================

Server-side access to the text-generation model, so API keys never leave
the server.

    POST /api/ai/smart-search   {query, availableProducts}  ->  [name, ...]

==============================================================================
"""

import asyncio
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends

from shelfspot.core import exceptions
from shelfspot.core.dependencies import get_product_ranker
from shelfspot.schemas.product import SmartSearchRequest
from shelfspot.search.ranker import ProductNameRanker, SmartSearchError


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["Smart Search"])


@router.post("/smart-search", response_model=List[str])
async def smart_search(
    payload: SmartSearchRequest,
    ranker: Optional[ProductNameRanker] = Depends(get_product_ranker)
):
    """
    Names from availableProducts relevant to the query.

    An empty query or product list answers [] without calling the model,
    even when smart search is not configured.
    """
    if not payload.query.strip() or not payload.available_products:
        return []

    if ranker is None:
        raise exceptions.smart_search_unavailable()

    try:
        # The genai client is blocking
        return await asyncio.to_thread(
            ranker.rank_names,
            payload.query,
            payload.available_products,
        )
    except SmartSearchError as e:
        logger.warning(f"Smart search failed: {e}")
        raise exceptions.smart_search_failed() from e
