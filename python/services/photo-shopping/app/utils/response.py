"""
JSON response body for shopping results.
"""

import json
from typing import List, Sequence

from pydantic import TypeAdapter

from shared_schemas.photo_shopping import Product

_PRODUCTS = TypeAdapter(List[Product])


def compose_shopping_response(shopping_query: str, products: Sequence[Product]) -> bytes:
    """
    Serialize the shopping query and its products as a two-element JSON array.

    Example:
        >>> compose_shopping_response("Fountain pen", [])
        b'["Fountain pen",[]]'
    """
    query_json = json.dumps(shopping_query, ensure_ascii=False)
    products_json = _PRODUCTS.dump_json(list(products), by_alias=True, exclude_unset=True).decode("utf-8")
    return f"[{query_json},{products_json}]".encode("utf-8")
