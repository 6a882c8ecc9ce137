import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.config import get_settings
from app.routers import albums, artist, auth, blog, metadata, songs
from app.services.http_client import HTTPClientManager

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup/shutdown events.
    """
    logger.info(f"Starting {settings.app_name}...")
    yield
    await HTTPClientManager.close()
    logger.info(f"Shutting down {settings.app_name}...")


app = FastAPI(
    title=settings.app_name,
    description="API for SongRank - a personal music rating and collections site",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    """Uniqueness and constraint violations on write: report the store's message."""
    message = str(exc.orig) if exc.orig is not None else str(exc)
    logger.warning(f"Write rejected by database on {request.url.path}: {message}")
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": message})


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Database error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": f"Database error: {exc}"},
    )


# Include routers
app.include_router(
    auth.router,
    prefix=f"{settings.api_prefix}/admin",
    tags=["Admin"]
)
app.include_router(
    artist.router,
    prefix=f"{settings.api_prefix}/artists",
    tags=["Artists"]
)
app.include_router(
    albums.router,
    prefix=f"{settings.api_prefix}/albums",
    tags=["Albums"]
)
app.include_router(
    songs.router,
    prefix=f"{settings.api_prefix}/songs",
    tags=["Songs"]
)
app.include_router(
    songs.history_router,
    prefix=settings.api_prefix,
    tags=["Songs"]
)
app.include_router(
    blog.router,
    prefix=f"{settings.api_prefix}/blog",
    tags=["Blog"]
)
app.include_router(
    metadata.router,
    prefix=f"{settings.api_prefix}/metadata",
    tags=["Metadata"]
)


@app.get("/", tags=["Health"])
async def root():
    """Root endpoint - API info."""
    return {
        "name": settings.app_name,
        "version": "1.0.0",
        "docs": "/docs",
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
