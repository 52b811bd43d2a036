"""WebApp API Router.

Storefront endpoints for the public shop pages.
Combines all sub-routers into a single router with prefix /api.
"""

from fastapi import APIRouter

from .cart import router as cart_router

router = APIRouter(prefix="/api", tags=["webapp"])

router.include_router(cart_router)

__all__ = ["router"]
