# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Volunteer Match API.
# It configures the FastAPI application with middleware, routers, and the
# error sink.
#
# Usage:
#   uvicorn app.main:app --reload
#   python -m app.main
# =============================================================================

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app import __version__
from app.config import settings
from app.exceptions import VolunteerMatchException, error_response, exception_handler
from app.routers import health
from app.routers.resources import build_resource_router, build_owned_listing_router
from app.auth import routes as auth_routes
from core.models import ORGANIZATION, PROJECT, VOLUNTEER

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: validate store configuration
    - Shutdown: log only; the store holds no connections that need closing
    """
    logger.info(f"Starting Volunteer Match API in {settings.ENVIRONMENT} mode")
    logger.info(f"Document store backend: {settings.STORE_BACKEND}")
    settings.validate_store_backend()

    yield

    logger.info("Shutting down Volunteer Match API")


# Create FastAPI application
app = FastAPI(
    title="Volunteer Match API",
    description="""
## Organizations, projects and volunteers

Every endpoint requires a bearer token. Documents can only be changed or
deleted by the user who controls them:

| Resource | Controlled by |
|----------|---------------|
| Organization | the user who created it |
| Project | the owner of its organization |
| Volunteer | the user who created it |

Request and response bodies wrap documents in an envelope named after the
resource, e.g. `{"volunteer": {"description": "...", "skills": "..."}}`.
""",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Auth", "description": "Verify bearer tokens"},
        {"name": "Organizations", "description": "Organizations owned by users"},
        {"name": "Projects", "description": "Projects run by organizations"},
        {"name": "Volunteers", "description": "Volunteer profiles"},
        {"name": "Health", "description": "API health and readiness checks"},
    ],
)


# =============================================================================
# Middleware
# =============================================================================

@app.middleware("http")
async def catch_unexpected_errors(request: Request, call_next):
    """
    Turn unclassified failures into the 500 response.

    Sits inside CORSMiddleware, so the 500 carries CORS headers and the
    exception never reaches the server.
    """
    try:
        return await call_next(request)
    except Exception as exc:
        return error_response(exc)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Error Sink
# =============================================================================
# One mapping for every failure; see app/exceptions.py. Expected failures
# are handled by class here; catch_unexpected_errors() above handles the rest.

app.add_exception_handler(VolunteerMatchException, exception_handler)
app.add_exception_handler(RequestValidationError, exception_handler)


# =============================================================================
# Routers
# =============================================================================

app.include_router(
    auth_routes.router,
    prefix=f"{API_PREFIX}/auth",
    tags=["Auth"]
)

app.include_router(
    health.router,
    prefix=API_PREFIX,
    tags=["Health"]
)

app.include_router(
    build_resource_router(ORGANIZATION),
    prefix=f"{API_PREFIX}/organizations",
    tags=["Organizations"]
)

# Projects run by one organization: GET /organizations/{id}/projects
app.include_router(
    build_owned_listing_router(PROJECT),
    prefix=f"{API_PREFIX}/organizations",
    tags=["Projects"]
)

app.include_router(
    build_resource_router(PROJECT),
    prefix=f"{API_PREFIX}/projects",
    tags=["Projects"]
)

app.include_router(
    build_resource_router(VOLUNTEER),
    prefix=f"{API_PREFIX}/volunteers",
    tags=["Volunteers"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "Volunteer Match API",
        "version": __version__,
        "docs": "/docs",
        "health": f"{API_PREFIX}/health",
    }


def run() -> None:
    """Serve the app with uvicorn on the configured host and port."""
    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.is_development,
    )


if __name__ == "__main__":
    run()
