"""
Reunion Chatbot Backend.

FastAPI application relaying reunion questions to the Gemini API.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from reunion_chat.api import chat
from reunion_chat.config import settings
from reunion_chat.context import CONTEXT_VERSION
from reunion_chat.models.common import ErrorResponse, HealthResponse, NotFoundResponse
from reunion_chat.rate_limit import limiter, rate_limit_exceeded_handler
from reunion_chat.services.relay import MISSING_MESSAGE_ERROR

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Application lifespan handler for startup and shutdown."""
    logger.info(f"Starting {settings.api_title} v{settings.api_version}")
    logger.info(f"Reunion context version: {CONTEXT_VERSION}")
    logger.info(f"CORS origins: {settings.cors_origins} (+ pattern {settings.cors_origin_regex})")
    logger.info(
        f"Rate limit: {settings.chat_rate_limit} per address"
        f" ({'enabled' if settings.rate_limit_enabled else 'disabled'})"
    )
    if not settings.gemini_api_key:
        logger.warning("GEMINI_API_KEY is not set; every chat request will fail")
    yield
    logger.info(f"Shutting down {settings.api_title}")


# Create FastAPI app
app = FastAPI(
    title=settings.api_title,
    version=settings.api_version,
    description=settings.api_description,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

# Register rate limiter
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_origin_regex=settings.cors_origin_regex,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
    allow_credentials=False,
)

# Include routers
app.include_router(chat.router)


@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    """Add security headers to all responses."""
    response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    response.headers["X-XSS-Protection"] = "0"
    # Strict CSP for API routes; skip for docs pages that need inline scripts
    if request.url.path not in ("/docs", "/redoc", "/openapi.json"):
        response.headers["Content-Security-Policy"] = "default-src 'none'"
    return response


@app.get("/health", response_model=HealthResponse)
async def health_check(response: Response):
    """
    Health check endpoint.

    Not rate limited and never contacts the provider.
    """
    # Set no-cache headers
    response.headers["Cache-Control"] = "no-cache, no-store, must-revalidate"
    response.headers["Pragma"] = "no-cache"
    response.headers["Expires"] = "0"

    return HealthResponse(
        status="healthy",
        service=settings.service_name,
        version=settings.api_version,
        context_version=CONTEXT_VERSION,
        timestamp=datetime.now(timezone.utc),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(_request: Request, exc: RequestValidationError):
    """
    Handle unparseable request bodies and return 400 instead of 422.
    """
    logger.warning(f"Validation error: {exc.errors()}")

    body = ErrorResponse(error=MISSING_MESSAGE_ERROR)
    return JSONResponse(status_code=400, content=body.model_dump(mode="json"))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(_request: Request, exc: StarletteHTTPException):
    """
    Return the JSON 404 body for unknown routes; other HTTP errors keep their detail.

    A known path hit with the wrong method has no route either, so 405 is
    answered the same way.
    """
    if exc.status_code in (404, 405):
        return JSONResponse(status_code=404, content=NotFoundResponse().model_dump())

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def global_exception_handler(_request, exc):
    """
    Global exception handler for unhandled errors.
    """
    logger.error(f"Unhandled exception: {exc}", exc_info=True)

    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "message": "An unexpected error occurred.",
        },
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "reunion_chat.main:app",
        host=settings.host,
        port=settings.port,
        log_level="info",
    )
