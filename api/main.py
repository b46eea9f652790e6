"""Returns Hub API: FastAPI entry point.

Registers middleware, the routing configuration router, and lifecycle
hooks.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.middleware import ShopMiddleware
from core.config import HubConfig
from core.database import close_db, init_engine
from core.logging import configure_logging, get_logger

VERSION = "0.1.0"

# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

config = HubConfig.from_env()
configure_logging(config.logging)
logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup/shutdown hooks."""
    init_engine(config.database)
    logger.info("Returns Hub API started", version=VERSION)
    yield
    await close_db()
    logger.info("Returns Hub API shutting down")


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

app = FastAPI(
    title="Returns Hub",
    description="Disposition routing for returned items",
    version=VERSION,
    lifespan=lifespan,
    debug=config.api.debug,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(config.api.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Per-shop isolation
app.add_middleware(ShopMiddleware)

# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------

from shop_returns.router import router as routing_router  # noqa: E402

app.include_router(routing_router, prefix="/api/routing", tags=["Routing"])


# ---------------------------------------------------------------------------
# Health & root
# ---------------------------------------------------------------------------

@app.get("/health")
async def health():
    return {"status": "healthy", "version": VERSION}


@app.get("/")
async def root():
    return {
        "name": "Returns Hub",
        "version": VERSION,
        "docs": "/docs",
        "description": "Disposition routing for returned items",
    }
