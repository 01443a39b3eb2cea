"""
Price endpoints for API v1.

CRUD over the ``prices`` collection plus a paginated, filterable
listing.  Listing loads the whole collection and filters it in memory
(see ``core.pagination``).  Database failures are logged and answered
with a generic 500 message; the body of every error is ``{"error": ...}``.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, HTTPException, Query, status

from catalog_dashboard.app.core.db import StoreError
from catalog_dashboard.app.core.pagination import parse_page_params
from catalog_dashboard.app.schemas.common import CountResult, DeleteResult, MutationResult, Page
from catalog_dashboard.app.services.price_service import PriceService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/count", response_model=CountResult)
async def count_prices() -> CountResult:
    """Return the number of documents in the collection."""
    try:
        return CountResult(count=await PriceService.count())
    except StoreError:
        logger.exception("Error getting prices count")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to get prices count")


@router.get("", response_model=Page)
async def list_prices(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    search: str = Query(""),
    env: str = Query(""),
) -> Dict[str, Any]:
    """Return one page of prices.

    ``search`` matches ``id`` and ``code`` case‑insensitively; ``env``
    (``HML`` or ``PRD``) keeps records priced in that environment.
    """
    page_number, page_limit = parse_page_params(page, limit)
    try:
        return await PriceService.list_page(page_number, page_limit, search=search, env=env)
    except StoreError:
        logger.exception("Error getting prices")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to get prices")


@router.get("/{price_id}")
async def get_price(price_id: str) -> Dict[str, Any]:
    try:
        price = await PriceService.get(price_id)
    except StoreError:
        logger.exception("Error getting price %s", price_id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to get price")
    if price is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Price not found")
    return price


@router.post("", response_model=MutationResult, status_code=status.HTTP_201_CREATED)
async def create_price(body: Optional[Dict[str, Any]] = Body(None)) -> MutationResult:
    """Create (or overwrite) the price identified by ``body["id"]``."""
    if not body or not body.get("id"):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing price data or id")
    try:
        created = await PriceService.create(body)
    except StoreError:
        logger.exception("Error creating price")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create price")
    return MutationResult(data=created)


@router.put("/{price_id}", response_model=MutationResult)
async def update_price(price_id: str, body: Optional[Dict[str, Any]] = Body(None)) -> MutationResult:
    """Merge the given fields into a price."""
    if not body:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing price data")
    try:
        updated = await PriceService.update(price_id, body)
    except StoreError:
        logger.exception("Error updating price %s", price_id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update price")
    return MutationResult(data=updated)


@router.delete("/{price_id}", response_model=DeleteResult)
async def delete_price(price_id: str) -> DeleteResult:
    try:
        await PriceService.delete(price_id)
    except StoreError:
        logger.exception("Error deleting price %s", price_id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to delete price")
    return DeleteResult(message="Price deleted successfully")
