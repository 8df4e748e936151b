"""FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from sentinel.api.deps import Runtime
from sentinel.api.limiter import limiter
from sentinel.config import settings
from sentinel.core.context import SentinelContext
from sentinel.db import SnapshotStore, init_db
from sentinel.errors import NotFoundError, PersistenceError, ValidationError

ALLOWED_ORIGINS = settings.cors_origins.split(",")

logger = logging.getLogger(__name__)


def build_runtime() -> Runtime:
    """Create the database, restore the last snapshot and wire the runtime."""
    init_db()
    context = SentinelContext(store=SnapshotStore())
    if context.hydrate():
        logger.info(
            f"Restored snapshot: {len(context.watchlist)} companies, {len(context.ledger)} alerts"
        )
    return Runtime(context)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Restore state on startup, halt the monitor on shutdown."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if getattr(app.state, "runtime", None) is None:
        app.state.runtime = build_runtime()
    yield
    await app.state.runtime.halt()


app = FastAPI(
    title="Job Sentinel API",
    description="Autonomous job watch over a company list",
    version="0.1.0",
    lifespan=lifespan,
)

app.state.limiter = limiter


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    """Return 429 with a clear message when rate limit is exceeded."""
    return JSONResponse(
        status_code=429,
        content={"detail": f"Rate limit exceeded: {exc.detail}"},
    )


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(PersistenceError)
async def persistence_error_handler(request: Request, exc: PersistenceError):
    logger.error(f"Persistence error in {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"detail": "Storage unavailable"})


app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)


# Import and include routers
from sentinel.api.routes import activity, alerts, monitor, profile, watchlist  # noqa: E402

app.include_router(profile.router, prefix="/profile", tags=["Profile"])
app.include_router(watchlist.router, prefix="/watchlist", tags=["Watchlist"])
app.include_router(alerts.router, prefix="/alerts", tags=["Alerts"])
app.include_router(monitor.router, prefix="/monitor", tags=["Monitor"])
app.include_router(activity.router, tags=["Dashboard"])


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
