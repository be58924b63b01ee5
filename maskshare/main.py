"""
FastAPI Application - Mask Share API
Backend for the mask-sharing community app
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from maskshare.config import settings
from maskshare.core.database import create_engine, create_session_factory, create_tables
from maskshare.core.errors import register_exception_handlers
from maskshare.core.logging import configure_logging, get_logger, request_context_middleware
from maskshare.core.storage import PUBLIC_FILES_ROUTE, LocalBlobStore, create_blob_store

configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Build the document store and blob store once, release them on shutdown"""
    engine = create_engine()
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.blob_store = create_blob_store()

    if settings.DB_CREATE_TABLES:
        await create_tables(engine)

    logger.info(
        "startup",
        environment=settings.ENVIRONMENT,
        database=settings.DATABASE_URL.split("@")[1] if "@" in settings.DATABASE_URL else "configured",
        storage=settings.STORAGE_TYPE,
    )
    yield
    await engine.dispose()
    logger.info("shutdown")


# Create FastAPI application
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Backend for sharing, rating and discussing masks",
    version=settings.VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(request_context_middleware)

register_exception_handlers(app)

# Locally stored public uploads are served by the app itself
if settings.STORAGE_TYPE == "local":
    public_store = LocalBlobStore(settings.STORAGE_PATH, settings.IMAGE_BASE_URL)
    app.mount(
        PUBLIC_FILES_ROUTE,
        StaticFiles(directory=public_store.public_dir, check_dir=False),
        name="files",
    )


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint - API information"""
    return {
        "name": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint"""
    return {"status": "healthy"}


# Import and include routers
from maskshare.api.v1 import router as api_v1_router  # noqa: E402

app.include_router(api_v1_router, prefix=settings.API_V1_STR)
