"""
Photo shopping endpoints.
Turn an uploaded photo into product shopping results.
"""

import asyncio
import logging
from typing import Dict, List

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import PlainTextResponse, Response
from starlette.datastructures import FormData

from app.blobstore.base import BlobStore
from app.blobstore.reader import read_blob_bytes
from app.blobstore.uploads import discard_uploads, extract_upload
from app.classifiers.photo import resolve_query
from app.clients.shopping_client import ShoppingQuerier
from app.core.config import settings
from app.core.dependencies import BlobStoreDep, ShoppingQuerierDep
from app.core.exceptions import BlobFetchError, InvalidCategoryError, ShoppingQueryError
from app.utils.response import compose_shopping_response
from shared_schemas.photo_shopping import BlobKey, ShoppingQueryInput

logger = logging.getLogger(__name__)

router = APIRouter(tags=["photo-shopping"])

PHOTO_FIELD = "photo"
PHOTO_CATEGORY_FIELD = "photo-category"


@router.get("/blobstore-upload-url", response_class=PlainTextResponse)
async def get_upload_url():
    """
    Return the URL the upload form posts to.
    """
    return f"{settings.PUBLIC_SERVICE_URL.rstrip('/')}/handle-photo-shopping"


@router.post("/handle-photo-shopping")
async def handle_photo_shopping(
    request: Request,
    blob_store: BlobStoreDep,
    querier: ShoppingQuerierDep
):
    """
    Return the shopping results for an uploaded photo.

    Expects a multipart form with:
        photo: Image file
        photo-category: product, shopping-list or barcode

    Every blob stored for the request is deleted once the response is built,
    whether the request succeeds or fails.

    Returns:
        JSON array of [shopping query, products]
    """
    async with request.form() as form:
        uploads = await blob_store.get_uploads(form)
        try:
            return await _shop_for_photo(form, uploads, blob_store, querier)
        finally:
            await discard_uploads(blob_store, uploads)


async def _shop_for_photo(
    form: FormData,
    uploads: Dict[str, List[BlobKey]],
    blob_store: BlobStore,
    querier: ShoppingQuerier
) -> Response:
    # Key of the image uploaded by the user
    blob_key = await extract_upload(blob_store, uploads, PHOTO_FIELD)
    if blob_key is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing input image file."
        )

    photo_category = form.get(PHOTO_CATEGORY_FIELD)
    if not isinstance(photo_category, str) or not photo_category:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing photo category."
        )

    try:
        image_bytes = await asyncio.to_thread(
            read_blob_bytes, blob_store, blob_key, settings.BLOB_FETCH_SIZE
        )
    except BlobFetchError as e:
        logger.error(f"Failed to read uploaded image {blob_key}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to read uploaded image"
        )

    try:
        shopping_query = resolve_query(photo_category, image_bytes)
    except InvalidCategoryError as e:
        logger.warning(f"Invalid photo category: '{photo_category}'")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )

    shopping_query_input = (
        ShoppingQueryInput.builder(shopping_query)
        .language(settings.SHOPPING_QUERY_LANGUAGE)
        .max_results_number(settings.SHOPPING_MAX_RESULTS)
        .build()
    )

    try:
        products = await querier.query(shopping_query_input)
    except ShoppingQueryError as e:
        logger.error(f"Shopping query failed ({e.kind.value}): {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )

    return Response(
        content=compose_shopping_response(shopping_query, products),
        media_type="application/json"
    )
