"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from portal.config import get_settings
from portal.database import init_db, AsyncSessionLocal
from portal.api import api_router
from portal.connectors.document_store import get_document_store
from portal.services import health_service, maximo_service
from portal.services.seed_data import seed_all

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


async def seed_mock_data():
    """Seed every collection on first start."""
    async with AsyncSessionLocal() as db:
        await seed_all(db)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    await init_db()
    if get_document_store() is None:
        logger.warning("DOCUMENT_STORE_URL not set, serving every collection from the local cache")
    if settings.seed_mock_data:
        await seed_mock_data()
    yield


app = FastAPI(
    title=settings.app_name,
    version="1.0.0",
    description="Maximo Version Portal - tickets, deployments and commits of Maximo configurations",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in settings.cors_origins.split(",")],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "app": settings.app_name}


@app.get("/readyz")
async def readiness_check():
    """Reachability of the document store and the Maximo API."""
    return await health_service.check_connectors(
        get_document_store(), maximo_service.get_maximo_client()
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("portal.main:app", host="0.0.0.0", port=8000, reload=True)
