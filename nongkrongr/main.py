"""FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dotenv import load_dotenv

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

# Load environment variables from .env file
load_dotenv()

from nongkrongr import models  # noqa: F401,E402
from nongkrongr.api.routes import router  # noqa: E402
from nongkrongr.core.config import settings  # noqa: E402
from nongkrongr.core.exceptions import NongkrongrError  # noqa: E402
from nongkrongr.core.logging import configure_logging  # noqa: E402
from nongkrongr.db.init_db import init_db  # noqa: E402
from nongkrongr.services.catalog import catalog  # noqa: E402

configure_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Initialize database artifacts."""
    init_db()
    yield


app = FastAPI(title=settings.project_name, lifespan=lifespan)
app.include_router(router, prefix=settings.api_v1_prefix)


@app.exception_handler(NongkrongrError)
async def handle_domain_error(request: Request, exc: NongkrongrError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.get("/", tags=["root"])
async def root() -> dict[str, str]:
    """Basic sanity endpoint."""
    return {"message": "Nongkrongr API is running"}


@app.get("/health", tags=["health"])
async def health() -> dict[str, object]:
    """Health check with the state of the cafe catalog."""
    return {
        "status": "healthy",
        "catalog_loading": catalog.loading,
        "catalog_error": catalog.error,
        "catalog_size": len(catalog.cafes),
    }
