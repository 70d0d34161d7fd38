"""
Photo content classifiers.
Turn an uploaded photo into the text used to query the shopping provider.
"""

import logging
from typing import Dict, Protocol

from app.core.exceptions import InvalidCategoryError

logger = logging.getLogger(__name__)


class PhotoClassifier(Protocol):
    def classify(self, image_bytes: bytes) -> str: ...


class StubPhotoClassifier:
    """Classifier that ignores the image and returns a fixed query."""

    def __init__(self, query: str):
        self.query = query

    def classify(self, image_bytes: bytes) -> str:
        return self.query


# Photo category -> classifier
# TODO: replace the stubs with product, shopping-list and barcode detection
CLASSIFIERS: Dict[str, PhotoClassifier] = {
    "product": StubPhotoClassifier("Fountain pen"),
    "shopping-list": StubPhotoClassifier("Fuzzy socks"),
    "barcode": StubPhotoClassifier("Running shoes"),
}


def get_classifier(photo_category: str) -> PhotoClassifier:
    """
    Look up the classifier for a photo category.

    Raises:
        InvalidCategoryError: If the category is not product, shopping-list or barcode
    """
    classifier = CLASSIFIERS.get(photo_category)
    if classifier is None:
        raise InvalidCategoryError(
            "Photo category has to be either product, shopping-list or barcode."
        )
    return classifier


def resolve_query(photo_category: str, image_bytes: bytes) -> str:
    """Return the shopping query for the photo, based on its category."""
    query = get_classifier(photo_category).classify(image_bytes)
    logger.info(f"Resolved shopping query for category '{photo_category}': {query}")
    return query
