"""
==============================================================================
Product Name Rankers
==============================================================================

A ranker answers one question: which of these product names are relevant
to this query?

Classes:
--------
- ProductNameRanker: Interface
- GeminiProductRanker: Asks Google Gemini through google-genai
- RemoteProductRanker: Asks the catalog server's /ai/smart-search endpoint

Rankers raise SmartSearchError for every failure so callers can fall back
without knowing which backend was used.

==============================================================================
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence

from google import genai
from google.genai import types

from shelfspot.client.api_client import CatalogApiClient
from shelfspot.client.errors import CatalogClientError


logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"

PROMPT_TEMPLATE = """You are a shopping assistant helping a user find products in a catalog.

Available products:
{product_lines}

User's query: {query}

Respond with a JSON array containing only the names of the available products that match the query, copied exactly as listed. Respond with [] when nothing matches. Add no other text."""


class SmartSearchError(Exception):
    """The ranker could not produce an answer."""


class ProductNameRanker(ABC):
    """Selects the product names relevant to a query."""

    @abstractmethod
    def rank_names(self, query: str, available_products: Sequence[str]) -> List[str]:
        """
        Relevant names, drawn from available_products.

        Raises:
            SmartSearchError: On any failure
        """


class GeminiProductRanker(ProductNameRanker):
    """
    Ranker backed by a Gemini text-generation model.

    Names the model invents (not present in available_products) are
    dropped, as are duplicates.

    Example:
        >>> ranker = GeminiProductRanker(api_key=os.environ["GEMINI_API_KEY"])
        >>> ranker.rank_names("something to sit on", ["Office Chair", "Kettle"])
        ['Office Chair']
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        temperature: float = 0.0,
        client: Optional[Any] = None
    ) -> None:
        if client is None:
            if not api_key:
                raise SmartSearchError("GEMINI_API_KEY is missing")
            client = genai.Client(api_key=api_key)

        self._client = client
        self.model = model
        self.temperature = temperature

    @staticmethod
    def build_prompt(query: str, available_products: Sequence[str]) -> str:
        product_lines = "\n".join(f"- {name}" for name in available_products)
        return PROMPT_TEMPLATE.format(product_lines=product_lines, query=query)

    def rank_names(self, query: str, available_products: Sequence[str]) -> List[str]:
        prompt = self.build_prompt(query, available_products)

        try:
            response = self._client.models.generate_content(
                model=self.model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    temperature=self.temperature,
                    response_mime_type="application/json",
                    response_schema=list[str],
                ),
            )
        except Exception as e:
            logger.error(f"Gemini request failed: {type(e).__name__}: {e}")
            raise SmartSearchError(f"Text generation request failed: {e}") from e

        names = self._parse_names(response)

        allowed = set(available_products)
        relevant: List[str] = []
        for name in names:
            if name in allowed and name not in relevant:
                relevant.append(name)

        logger.info(f"Smart search '{query[:80]}' matched {len(relevant)} of {len(allowed)} products")
        return relevant

    @staticmethod
    def _parse_names(response: Any) -> List[str]:
        parsed = getattr(response, "parsed", None)

        if parsed is None:
            text = (getattr(response, "text", "") or "").strip()
            if not text:
                raise SmartSearchError("Text generation returned an empty response")
            try:
                parsed = json.loads(text)
            except json.JSONDecodeError as e:
                raise SmartSearchError(f"Text generation returned invalid JSON: {e}") from e

        if not isinstance(parsed, list) or not all(isinstance(n, str) for n in parsed):
            raise SmartSearchError("Text generation did not return a list of names")

        return parsed


class RemoteProductRanker(ProductNameRanker):
    """Ranker delegating to the catalog server's smart search endpoint."""

    def __init__(self, api: CatalogApiClient) -> None:
        self._api = api

    def rank_names(self, query: str, available_products: Sequence[str]) -> List[str]:
        try:
            return self._api.smart_search(query, list(available_products))
        except CatalogClientError as e:
            raise SmartSearchError(e.message) from e
