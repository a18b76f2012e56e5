"""
SecurePOS Audit Ledger — FastAPI Application Entry Point

Builds the ledger service object, aggregates all routers, configures
middleware and translates ledger errors into JSON responses.
"""
import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from securepos.config import Settings, get_settings
from securepos.errors import LedgerError
from securepos.logging_config import configure_logging
from securepos.routes import sales_router, audit_router, admin_router, roles_router
from securepos.schemas.schemas import ErrorResponse, HealthResponse
from securepos.services.ledger import AuditLedger
from securepos.utils.storage import ensure_storage_directory

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, ledger: Optional[AuditLedger] = None) -> FastAPI:
    """Application factory. Pass ``ledger`` to reuse an existing service object."""
    settings = settings or get_settings()
    configure_logging(settings)

    boot_time = time.time()
    owns_ledger = ledger is None

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        ensure_storage_directory(settings.STORAGE_PATH)
        logger.info(
            "\n%s\n  %s v%s\n  TIME: %s\n  DATABASE: %s\n  GENESIS ADMIN: %s\n  HASH: %s\n  DEBUG: %s\n%s",
            "=" * 60, settings.APP_NAME, settings.APP_VERSION, datetime.now().isoformat(),
            settings.DATABASE_URL, settings.ADMIN_ADDRESS, settings.HASH_ALGORITHM, settings.DEBUG, "=" * 60,
        )
        yield
        if owns_ledger:
            app.state.ledger.close()

    # ─── Application Instance ───────────────────────────────────────────
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description=(
            "Role-gated point-of-sale audit ledger. Cashiers record the digest of daily "
            "sales files, auditors re-upload files to check the digest still matches, "
            "and admins manage who holds which role."
        ),
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.ledger = ledger or AuditLedger.from_settings(settings)

    # ─── Middleware ──────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log every API request with timing."""
        start = time.time()
        response = await call_next(request)
        duration = round((time.time() - start) * 1000, 1)

        if request.url.path.startswith("/api"):
            logger.info("%s %s -> %s (%sms)", request.method, request.url.path, response.status_code, duration)

        return response

    # ─── Error Handling ─────────────────────────────────────────────────
    @app.exception_handler(LedgerError)
    async def ledger_error_handler(request: Request, exc: LedgerError):
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(message=exc.message, error_code=exc.code).model_dump(),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                message=f"Internal server error: {exc}" if settings.DEBUG else "Internal server error",
                error_code="INTERNAL_ERROR",
            ).model_dump(),
        )

    # ─── API Routers ─────────────────────────────────────────────────────
    app.include_router(sales_router)
    app.include_router(audit_router)
    app.include_router(admin_router)
    app.include_router(roles_router)

    @app.get("/api/health", response_model=HealthResponse, tags=["Health"])
    def health():
        return HealthResponse(
            status="healthy",
            service=settings.APP_NAME,
            version=settings.APP_VERSION,
            timestamp=datetime.now(),
            uptime_seconds=round(time.time() - boot_time, 1),
        )

    return app
