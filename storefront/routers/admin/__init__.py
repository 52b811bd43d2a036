"""
Admin API Router

Administrator-only endpoints for accounts and the members dashboard.
Combines all sub-routers into a single router with tag "admin".
"""
from fastapi import APIRouter

from .members import router as members_router
from .users import router as users_router

router = APIRouter(tags=["admin"])

router.include_router(users_router)
router.include_router(members_router)

__all__ = ["router"]
