"""FastAPI application entry point."""
import logging
import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text

from surrogacy_admin.core.config import settings
from surrogacy_admin.core.logging_config import configure_logging
from surrogacy_admin.core.structured_logging import (
    build_log_context,
    reset_request_id,
    set_request_id,
)
from surrogacy_admin.db.session import engine

configure_logging()
logger = logging.getLogger(__name__)

# ============================================================================
# Sentry Integration (optional, for production error tracking)
# ============================================================================

if settings.SENTRY_DSN and settings.ENV != "dev":
    import sentry_sdk
    from sentry_sdk.integrations.fastapi import FastApiIntegration
    from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENV,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            SqlalchemyIntegration(),
        ],
        traces_sample_rate=0.1,
        send_default_pii=False,  # Participant records are PHI
    )
    logger.info("Sentry initialized for error tracking")

# ============================================================================
# Rate Limiting
# ============================================================================

from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from surrogacy_admin.core.rate_limit import limiter

# ============================================================================
# FastAPI App
# ============================================================================

app = FastAPI(
    title="Surrogacy Admin API",
    description="Back office API for surrogacy agency intake, matching and journeys",
    version=settings.VERSION,
    docs_url="/docs" if settings.ENV == "dev" else None,
    redoc_url="/redoc" if settings.ENV == "dev" else None,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,  # Required for cookies
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Requested-With", "X-Request-ID"],
    expose_headers=["X-Request-ID"],
)


@app.middleware("http")
async def request_context(request: Request, call_next):
    """Bind an X-Request-ID (incoming or generated) for logs and the response."""
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    request.state.request_id = request_id
    token = set_request_id(request_id)
    try:
        response = await call_next(request)
    finally:
        reset_request_id(token)
    response.headers["X-Request-ID"] = request_id
    return response


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    request_id = getattr(request.state, "request_id", None)
    logger.exception(
        "Unhandled error",
        extra=build_log_context(
            request_id=request_id,
            route=request.url.path,
            method=request.method,
        ),
    )
    headers = {"X-Request-ID": request_id} if request_id else None
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "request_id": request_id},
        headers=headers,
    )


# ============================================================================
# Routers
# ============================================================================

from surrogacy_admin.routers import (
    appointments,
    auth,
    baby_watch,
    cases,
    contracts,
    conversations,
    dashboard,
    financials,
    inquiries,
    journeys,
    matches,
    medical,
    participants,
    tasks,
)

app.include_router(auth.router)

# Participants and intake
app.include_router(participants.surrogates_router)
app.include_router(participants.parents_router)
app.include_router(inquiries.router)

# Matching and stage progression
app.include_router(matches.router)
app.include_router(cases.router)
app.include_router(journeys.router)
app.include_router(baby_watch.router)

# Medical
app.include_router(medical.screenings_router)
app.include_router(medical.router)

# Money and paperwork
app.include_router(financials.router)
app.include_router(financials.payments_router)
app.include_router(contracts.router)

# Day-to-day
app.include_router(tasks.router)
app.include_router(appointments.router)
app.include_router(conversations.router)
app.include_router(dashboard.router)

# Uploaded media (baby watch images); directory may not exist yet
app.mount("/media", StaticFiles(directory=settings.MEDIA_ROOT, check_dir=False), name="media")


# ============================================================================
# Health Check
# ============================================================================

@app.get("/health")
def health():
    """
    Health check endpoint.

    Verifies database connectivity and returns environment info.
    """
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    return {"status": "ok", "env": settings.ENV, "version": settings.VERSION}
