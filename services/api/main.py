"""
FastAPI application for the tabledraft schema designer.
"""
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import CONFIG
from core.schema_store import SchemaStore
from logger import get_logger
from services.api.routers import export, tables
from services.api.schemas import HealthResponse
from services.api.store import get_store, reset_store

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    The schema lives only in process memory; shutdown discards it.
    """
    logger.info("Starting tabledraft API...")
    get_store()

    yield

    logger.info("Shutting down tabledraft API...")
    reset_store()


app = FastAPI(
    title=CONFIG.api.title,
    description="Design a relational schema and export it as SQL, Drizzle, Spring or Prisma code",
    version=CONFIG.app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(tables.router)
app.include_router(export.router)


@app.get("/", tags=["root"])
async def root():
    """Root endpoint."""
    return {
        "service": CONFIG.app_name,
        "version": CONFIG.app_version,
        "status": "operational",
    }


@app.get("/health", response_model=HealthResponse, tags=["health"])
async def health_check(store: SchemaStore = Depends(get_store)):
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        tables=len(store),
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "services.api.main:app",
        host=CONFIG.api.host,
        port=CONFIG.api.port,
        reload=False,
    )
