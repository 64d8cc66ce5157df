"""
FastAPI application entry point for the BeeConta backend.

This module creates the FastAPI app instance and registers all routers.
"""

import logging
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from beeconta.config import settings
from beeconta.routes.auth import router as auth_router
from beeconta.routes.bank_accounts import router as bank_accounts_router
from beeconta.routes.categories import router as categories_router
from beeconta.routes.companies import router as companies_router
from beeconta.routes.credit_cards import router as credit_cards_router
from beeconta.routes.groups import router as groups_router
from beeconta.routes.health import router as health_router
from beeconta.routes.reports import router as reports_router
from beeconta.routes.session import router as session_router
from beeconta.routes.transactions import router as transactions_router

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


def _get_cors_origins() -> list[str]:
    """
    Get allowed CORS origins based on environment.

    - ENVIRONMENT=production: CORS_ALLOWED_ORIGINS (no origins when unset)
    - anything else: all origins, for local development of the web client

    Returns:
        List of allowed origin URLs, or ["*"] for development.
    """
    if settings.is_production():
        origins = settings.CORS_ALLOWED_ORIGINS
        if origins:
            logger.info(f"CORS configured for production with {len(origins)} allowed origins")
        else:
            logger.warning(
                "CORS_ALLOWED_ORIGINS not set in production. "
                "No web origins allowed."
            )
        return list(origins)

    logger.info(f"CORS configured for {settings.ENVIRONMENT}: allowing all origins")
    return ["*"]


# Create FastAPI app
app = FastAPI(
    title="BeeConta API",
    description="Multi-company financial management backend",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc"
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Log detailed validation errors and return them as 422.
    """
    logger.error(
        f"Validation error on {request.method} {request.url.path}: {jsonable_errors(exc)}"
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "validation_error",
            "details": jsonable_errors(exc)
        }
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    """Validation errors without the raw input, which may hold passwords."""
    return [
        {key: value for key, value in error.items() if key not in ("input", "ctx")}
        for error in exc.errors()
    ]


# Configure CORS with environment-based origins
cors_origins = _get_cors_origins()
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(session_router)
app.include_router(companies_router)
app.include_router(groups_router)
app.include_router(bank_accounts_router)
app.include_router(credit_cards_router)
app.include_router(transactions_router)
app.include_router(categories_router)
app.include_router(reports_router)

logger.info("FastAPI app initialized successfully")
