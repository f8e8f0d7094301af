# app/main.py
"""
FastAPI application entry point.
Includes security middleware, domain error handlers, and all routers.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from app.routers import amenities, webhooks, health
from app.database import create_tables
from app.config import settings
from app.exceptions import AmenityValidationError, AmenityConflictError, InternalServiceError
from app.utils.logger import get_logger
import time

logger = get_logger(__name__)

app = FastAPI(
    title="TripTogether Rentals API",
    description="Cab, bus and bike rentals — amenity catalog and Stripe payments.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── CORS ─────────────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── API Key Middleware ───────────────────────────────────────────────────────
class APIKeyMiddleware(BaseHTTPMiddleware):
    """
    Optional lightweight API key auth for write endpoints.
    Stripe webhook is excluded — Stripe authenticates with its signature instead.
    Set API_KEY in .env. Leave empty to disable auth.
    """
    OPEN_PATHS = {"/api/v1/webhooks/stripe", "/api/v1/health", "/docs", "/redoc", "/openapi.json"}

    async def dispatch(self, request: Request, call_next):
        # Amenity listing is public; creating one is not
        is_public_read = request.method == "GET" and request.url.path == "/api/v1/amenities"
        if request.url.path in self.OPEN_PATHS or is_public_read or not settings.API_KEY:
            return await call_next(request)

        api_key = request.headers.get("X-API-Key") or request.query_params.get("api_key")
        if api_key != settings.API_KEY:
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"error": "Invalid or missing API key"},
            )
        return await call_next(request)


if settings.API_KEY:
    app.add_middleware(APIKeyMiddleware)


# ── Request Timing Middleware ────────────────────────────────────────────────
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    duration = round((time.time() - start) * 1000, 2)
    logger.debug(f"{request.method} {request.url.path} → {response.status_code} ({duration}ms)")
    return response


# ── Domain Error Handlers ────────────────────────────────────────────────────
@app.exception_handler(AmenityValidationError)
async def validation_error_handler(request: Request, exc: AmenityValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": exc.message, "details": exc.violations},
    )


@app.exception_handler(AmenityConflictError)
async def conflict_error_handler(request: Request, exc: AmenityConflictError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": exc.message},
    )


@app.exception_handler(InternalServiceError)
async def internal_error_handler(request: Request, exc: InternalServiceError):
    # Cause already logged by the service that raised it
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


# ── Global Exception Handler ─────────────────────────────────────────────────
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


# ── Routers ──────────────────────────────────────────────────────────────────
app.include_router(amenities.router, prefix="/api/v1", tags=["🧩 Amenities"])
app.include_router(webhooks.router,  prefix="/api/v1", tags=["💳 Stripe Webhooks"])
app.include_router(health.router,    prefix="/api/v1", tags=["💚 Health"])


# ── Startup ───────────────────────────────────────────────────────────────────
@app.on_event("startup")
async def startup():
    logger.info("🚀 TripTogether backend starting up...")
    create_tables()
    logger.info("✅ Database tables ready")
    logger.info(f"💳 Stripe: {'configured' if settings.STRIPE_CONFIGURED else 'NOT configured'}")
    logger.info(f"🌐 Listening on http://{settings.BACKEND_IP}:{settings.BACKEND_PORT}")
    logger.info("📖 API docs at /docs")


@app.on_event("shutdown")
async def shutdown():
    logger.info("🛑 TripTogether backend shutting down...")
