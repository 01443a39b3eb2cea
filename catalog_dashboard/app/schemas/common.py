"""
Response envelopes shared by the resource endpoints.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, Field


class Pagination(BaseModel):
    """Pagination metadata returned next to every page of records."""

    page: int = Field(..., examples=[1])
    limit: int = Field(..., examples=[20])
    total: int = Field(..., examples=[42])
    totalPages: int = Field(..., examples=[3])
    hasNext: bool = Field(..., examples=[True])
    hasPrev: bool = Field(..., examples=[False])


class Page(BaseModel):
    """One page of documents and the pagination it was cut with."""

    data: List[Dict[str, Any]]
    pagination: Pagination


class MutationResult(BaseModel):
    """Result of a create or update: the document as stored."""

    success: bool = True
    data: Dict[str, Any]


class DeleteResult(BaseModel):
    success: bool = True
    message: str


class CountResult(BaseModel):
    count: int


class ErrorResponse(BaseModel):
    error: str
