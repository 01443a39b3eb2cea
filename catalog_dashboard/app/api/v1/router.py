"""
Top‑level router for version 1 of the API.

Aggregates the resource routers.  Prefixes match the paths the
dashboard frontend calls (``/services``, ``/prices``, ``/collections``
and ``/jacto-users``).
"""

from fastapi import APIRouter

from .endpoints import collections, jacto_users, prices, services

router = APIRouter()

router.include_router(collections.router, prefix="/collections", tags=["collections"])
router.include_router(services.router, prefix="/services", tags=["services"])
router.include_router(prices.router, prefix="/prices", tags=["prices"])
router.include_router(jacto_users.router, prefix="/jacto-users", tags=["jacto-users"])
