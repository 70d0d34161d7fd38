"""
Photo Shopping Service API schemas.
Type-safe contracts for blob metadata, shopping queries and product results.
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


# Identifier of an uploaded blob inside the uploads bucket
BlobKey = str


# ============================================================================
# Blob Store
# ============================================================================

class BlobInfo(BaseModel):
    """Metadata for a stored blob."""
    key: BlobKey
    size: int = Field(..., ge=0, description="Blob size in bytes")
    content_type: Optional[str] = None
    filename: Optional[str] = None
    created_at: Optional[datetime] = None


# ============================================================================
# Shopping Query
# ============================================================================

class ShoppingQueryInput(BaseModel):
    """
    Immutable request sent to the shopping provider.

    Build through the fluent builder:
        ShoppingQueryInput.builder("Fountain pen").language("en").max_results_number(24).build()
    """
    model_config = ConfigDict(frozen=True)

    query: str = Field(..., min_length=1, description="Search text sent to the provider")
    language: str = Field(default="en", description="Interface language (hl)")
    max_results_number: int = Field(default=24, ge=1, description="Maximum number of products returned")

    @classmethod
    def builder(cls, query: str) -> "ShoppingQueryInputBuilder":
        return ShoppingQueryInputBuilder(query)


class ShoppingQueryInputBuilder:
    """Fluent builder for ShoppingQueryInput."""

    def __init__(self, query: str):
        self._query = query
        self._language = "en"
        self._max_results_number = 24

    def language(self, language: str) -> "ShoppingQueryInputBuilder":
        self._language = language
        return self

    def max_results_number(self, max_results_number: int) -> "ShoppingQueryInputBuilder":
        self._max_results_number = max_results_number
        return self

    def build(self) -> ShoppingQueryInput:
        """
        Build the query input.

        Raises:
            ValueError: If the query text is blank
        """
        if not self._query or not self._query.strip():
            raise ValueError("Shopping query must not be empty.")

        return ShoppingQueryInput(
            query=self._query,
            language=self._language,
            max_results_number=self._max_results_number
        )


class Product(BaseModel):
    """
    Single product returned by the shopping provider.
    Passed through to the client untouched, unknown fields included.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    title: Optional[str] = None
    link: Optional[str] = None
    image_link: Optional[str] = Field(default=None, alias="imageLink")
    price_and_seller: Optional[str] = Field(default=None, alias="priceAndSeller")
    shipping_price: Optional[str] = Field(default=None, alias="shippingPrice")


# ============================================================================
# Health Check
# ============================================================================

class ServiceStatus(BaseModel):
    """Status of a downstream dependency."""
    name: str
    status: str  # "online", "offline"


class HealthResponse(BaseModel):
    """Health check response."""
    status: str  # "healthy", "degraded"
    version: str
    services: Optional[List[ServiceStatus]] = None
