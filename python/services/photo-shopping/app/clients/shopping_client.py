"""
Shopping provider client.
Sends shopping queries to the external product-search service.
"""

import logging
from typing import List, Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from app.core.config import settings
from app.core.exceptions import ShoppingQueryError, ShoppingQueryErrorKind
from shared_schemas.photo_shopping import Product, ShoppingQueryInput

logger = logging.getLogger(__name__)

_PRODUCTS = TypeAdapter(List[Product])


class ShoppingQuerier:
    """Client for the product-search provider."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None
    ):
        """
        Args:
            client: Shared HTTP client
            base_url: Provider URL (defaults to settings.SHOPPING_SERVICE_URL)
            api_key: Optional provider API key
        """
        self.client = client
        self.base_url = (base_url or settings.SHOPPING_SERVICE_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.SHOPPING_API_KEY

    async def query(self, query_input: ShoppingQueryInput) -> List[Product]:
        """
        Query the provider for products matching the input.

        Args:
            query_input: Query text, language and result cap

        Returns:
            Up to max_results_number products, in provider order

        Raises:
            ShoppingQueryError: On invalid input, connection failure or I/O failure
        """
        if not query_input.query.strip():
            raise ShoppingQueryError(
                "Shopping query must not be empty.",
                ShoppingQueryErrorKind.INVALID_ARGUMENT
            )

        params = {
            "q": query_input.query,
            "hl": query_input.language,
            "num": query_input.max_results_number,
        }
        headers = {"X-API-Key": self.api_key} if self.api_key else {}

        try:
            response = await self.client.get(
                f"{self.base_url}/search",
                params=params,
                headers=headers,
                timeout=settings.SHOPPING_TIMEOUT_SECONDS
            )
            response.raise_for_status()
        except (httpx.ConnectError, httpx.TimeoutException) as e:
            logger.error(f"Could not connect to shopping provider: {e}")
            raise ShoppingQueryError(
                f"Could not connect to shopping provider: {e}",
                ShoppingQueryErrorKind.CONNECTION
            ) from e
        except httpx.HTTPStatusError as e:
            logger.error(f"Shopping provider returned HTTP {e.response.status_code}")
            raise ShoppingQueryError(
                f"Shopping provider returned HTTP {e.response.status_code}",
                ShoppingQueryErrorKind.CONNECTION
            ) from e
        except httpx.RequestError as e:
            logger.error(f"Shopping provider request failed: {e}")
            raise ShoppingQueryError(
                f"Shopping provider request failed: {e}",
                ShoppingQueryErrorKind.IO
            ) from e

        try:
            payload = response.json()
            if isinstance(payload, dict):
                payload = payload.get("products", [])
            products = _PRODUCTS.validate_python(payload)
        except (ValueError, ValidationError) as e:
            logger.error(f"Invalid response from shopping provider: {e}")
            raise ShoppingQueryError(
                "Invalid response from shopping provider",
                ShoppingQueryErrorKind.IO
            ) from e

        products = products[:query_input.max_results_number]
        logger.info(f"Shopping query '{query_input.query}' returned {len(products)} products")
        return products
