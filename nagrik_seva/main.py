"""
Nagrik Seva - FastAPI Application Entry Point

Civic issue reporting with a simulated status lifecycle and
keyword-based complaint routing.

DESIGN PRINCIPLES:
- One in-memory store per process, injected into routes
- Classification is deterministic keyword matching, not NLU
- Errors map to 400 / 404 / 500 with a plain {"message"} body
- Internal error details are logged, never returned
"""

import logging
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from nagrik_seva.core.errors import IssueNotFoundError, ValidationError
from nagrik_seva.core.settings import settings
from nagrik_seva.routes import analyze, health, issues, messages


logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


# Initialize FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Civic issue reporting, lifecycle simulation and complaint routing",
    debug=settings.DEBUG
)


# Global exception handler to catch ALL exceptions
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Log unhandled exceptions with full traceback; return a generic 500."""
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error"}
    )


# Pydantic validation error handler
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies and parameters are a 400."""
    logger.warning(f"Invalid input on {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Invalid input", "errors": jsonable_encoder(exc.errors())}
    )


@app.exception_handler(ValidationError)
async def domain_validation_handler(request: Request, exc: ValidationError):
    logger.warning(f"Rejected {request.method} {request.url.path}: {exc.message} {exc.errors}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Invalid input", "errors": exc.errors}
    )


@app.exception_handler(IssueNotFoundError)
async def issue_not_found_handler(request: Request, exc: IssueNotFoundError):
    logger.warning(f"Issue {exc.issue_id} not found ({request.method} {request.url.path})")
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"message": "Issue not found"}
    )


# CORS configuration - only the configured frontend origins, no wildcard.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Application lifecycle events
@app.on_event("startup")
async def startup_event():
    """
    Build the store (and seed it) before the first request.
    """
    from nagrik_seva.services.issue_store import get_issue_store

    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    counts = get_issue_store().counts()
    logger.info(f"Store ready: {counts['issues']} issue(s), {counts['messages']} message(s)")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info(f"Shutting down {settings.APP_NAME}")


# Include routers
app.include_router(health.router)
app.include_router(issues.router, prefix=settings.API_PREFIX)
app.include_router(messages.router, prefix=settings.API_PREFIX)
app.include_router(analyze.router, prefix=settings.API_PREFIX)


# Root endpoint
@app.get("/")
async def root():
    """
    Root endpoint - API information.
    """
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "docs": "/docs",
        "health": "/health",
        "issues": f"{settings.API_PREFIX}/issues"
    }
