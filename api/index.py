"""
Storefront - Main FastAPI Application

Single entry point for the shop's cart API and the admin API.
Deployed as one Vercel serverless function.
"""
import os
import sys
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Vercel runs this file from api/, the packages live one level up
_base_path = Path(__file__).parent.parent
if str(_base_path) not in sys.path:
    sys.path.insert(0, str(_base_path))

from storefront.errors import StorefrontError  # noqa: E402
from storefront.logging import get_logger  # noqa: E402
from storefront.routers.admin import router as admin_router  # noqa: E402
from storefront.routers.webapp import router as webapp_router  # noqa: E402

logger = get_logger(__name__)

ALLOWED_ORIGINS = [o for o in os.environ.get("ALLOWED_ORIGINS", "*").split(",") if o]


# ==================== FASTAPI APP ====================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    if not os.environ.get("ADMIN_EMAIL"):
        logger.warning("ADMIN_EMAIL is not set: every admin request will be refused")
    yield


app = FastAPI(
    title="Storefront",
    description="Shop cart and member administration API",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(webapp_router)
app.include_router(admin_router, prefix="/api/admin")


# ==================== ERRORS ====================

@app.exception_handler(StorefrontError)
async def storefront_error_handler(request: Request, exc: StorefrontError):
    """Render classified errors as {success, error: {code, message}}"""
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.to_dict()},
    )


# ==================== HEALTH CHECK ====================

@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok", "service": "storefront"}
