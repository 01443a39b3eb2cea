"""
Collection browser endpoints for API v1.

``GET /collections`` lists the root collection names and
``GET /collections/{id}`` returns every document of one collection.
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, HTTPException, status

from catalog_dashboard.app.core.db import StoreError
from catalog_dashboard.app.services.collection_service import CollectionService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=List[str])
async def list_collections() -> List[str]:
    try:
        return await CollectionService.list_collections()
    except StoreError:
        logger.exception("Error getting collections")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to get collections")


@router.get("/{collection_id}")
async def list_collection_documents(collection_id: str) -> List[Dict[str, Any]]:
    try:
        return await CollectionService.list_documents(collection_id)
    except StoreError:
        logger.exception("Error getting collection documents")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get collection documents",
        )
