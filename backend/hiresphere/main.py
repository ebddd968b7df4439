"""HireSphere API — FastAPI shell over the identity and record stores.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map HireSphereError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Storage and both stores opened on startup and closed on shutdown via lifespan,
      in dependency order (storage → identity → records) and reverse

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Stores held on app.state, not module globals: tests swap them via dependency overrides
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hiresphere.api.error_handlers import register_error_handlers
from hiresphere.api.routes import accounts, applications, auth, health, jobs
from hiresphere.config import Settings, get_settings
from hiresphere.core.repository_protocols import KeyValueStorage
from hiresphere.infrastructure.observability import setup_logging
from hiresphere.infrastructure.storage_factory import create_storage
from hiresphere.services.identity_store import IdentityStore
from hiresphere.services.record_store import RecordStore

logger = logging.getLogger(__name__)


def build_stores(
    settings: Settings,
) -> tuple[KeyValueStorage, IdentityStore, RecordStore]:
    """Compose the stores over a fresh storage surface. Nothing is opened yet."""
    storage = create_storage(settings.storage_url)
    identity = IdentityStore(
        storage,
        key_prefix=settings.storage_key_prefix,
        password_iterations=settings.password_hash_iterations,
    )
    records = RecordStore(
        storage,
        identity,
        key_prefix=settings.storage_key_prefix,
        seed_sample_jobs=settings.seed_sample_jobs,
    )
    return storage, identity, records


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    storage, identity, records = build_stores(settings)
    storage.open()
    identity.open()
    records.open()
    app.state.storage = storage
    app.state.identity = identity
    app.state.records = records
    logger.info("HireSphere API started")
    try:
        yield
    finally:
        records.close()
        identity.close()
        storage.close()
        logger.info("HireSphere API shutting down")


app = FastAPI(
    title="HireSphere API", version="1.0.0", lifespan=lifespan,
)

# CORS: origins come from settings
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes: explicit registration
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(accounts.router)
app.include_router(jobs.router)
app.include_router(applications.router)

register_error_handlers(app)
