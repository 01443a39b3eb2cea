"""
Service endpoints for API v1.

CRUD over the ``services`` collection plus a paginated, filterable
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
from catalog_dashboard.app.services.service_service import ServiceService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/count", response_model=CountResult)
async def count_services() -> CountResult:
    """Return the number of documents in the collection."""
    try:
        return CountResult(count=await ServiceService.count())
    except StoreError:
        logger.exception("Error getting services count")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to get services count")


@router.get("", response_model=Page)
async def list_services(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    search: str = Query(""),
    categoria: str = Query(""),
    segmento: str = Query(""),
) -> Dict[str, Any]:
    """Return one page of services.

    ``search`` matches ``id``, ``tipo`` and ``servico`` case‑insensitively;
    ``categoria`` and ``segmento`` must match exactly.  ``page`` and
    ``limit`` default to 1 and 20 when missing or not numeric.
    """
    page_number, page_limit = parse_page_params(page, limit)
    try:
        return await ServiceService.list_page(
            page_number, page_limit, search=search, categoria=categoria, segmento=segmento
        )
    except StoreError:
        logger.exception("Error getting services")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to get services")


@router.get("/{service_id}")
async def get_service(service_id: str) -> Dict[str, Any]:
    try:
        service = await ServiceService.get(service_id)
    except StoreError:
        logger.exception("Error getting service %s", service_id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to get service")
    if service is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Service not found")
    return service


@router.post("", response_model=MutationResult, status_code=status.HTTP_201_CREATED)
async def create_service(body: Optional[Dict[str, Any]] = Body(None)) -> MutationResult:
    """Create (or overwrite) the service identified by ``body["id"]``."""
    if not body or not body.get("id"):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing service data or id")
    try:
        created = await ServiceService.create(body)
    except StoreError:
        logger.exception("Error creating service")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create service")
    return MutationResult(data=created)


@router.put("/{service_id}", response_model=MutationResult)
async def update_service(service_id: str, body: Optional[Dict[str, Any]] = Body(None)) -> MutationResult:
    """Merge the given fields into a service."""
    if not body:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing service data")
    try:
        updated = await ServiceService.update(service_id, body)
    except StoreError:
        logger.exception("Error updating service %s", service_id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update service")
    return MutationResult(data=updated)


@router.delete("/{service_id}", response_model=DeleteResult)
async def delete_service(service_id: str) -> DeleteResult:
    try:
        await ServiceService.delete(service_id)
    except StoreError:
        logger.exception("Error deleting service %s", service_id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to delete service")
    return DeleteResult(message="Service deleted successfully")
