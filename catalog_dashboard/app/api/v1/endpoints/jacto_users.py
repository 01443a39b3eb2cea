"""
Endpoints for the ``jactoUsers`` collection.

Users are listed without pagination and can be read, updated (merge)
and deleted.  There is no create endpoint: user documents are written
by the mobile application.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, HTTPException, status

from catalog_dashboard.app.core.db import StoreError
from catalog_dashboard.app.schemas.common import DeleteResult, MutationResult
from catalog_dashboard.app.services.jacto_user_service import JactoUserService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("")
async def list_jacto_users() -> List[Dict[str, Any]]:
    try:
        return await JactoUserService.list_documents()
    except StoreError:
        logger.exception("Error getting jactoUsers")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get jactoUsers collection",
        )


@router.get("/{user_id}")
async def get_jacto_user(user_id: str) -> Dict[str, Any]:
    try:
        user = await JactoUserService.get(user_id)
    except StoreError:
        logger.exception("Error getting jactoUser %s", user_id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to get user")
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@router.put("/{user_id}", response_model=MutationResult)
async def update_jacto_user(user_id: str, body: Optional[Dict[str, Any]] = Body(None)) -> MutationResult:
    if not body:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing user data")
    try:
        updated = await JactoUserService.update(user_id, body)
    except StoreError:
        logger.exception("Error updating jactoUser %s", user_id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update user")
    return MutationResult(data=updated)


@router.delete("/{user_id}", response_model=DeleteResult)
async def delete_jacto_user(user_id: str) -> DeleteResult:
    try:
        await JactoUserService.delete(user_id)
    except StoreError:
        logger.exception("Error deleting jactoUser %s", user_id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to delete user")
    return DeleteResult(message="User deleted successfully")
