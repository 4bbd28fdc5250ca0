"""
FastAPI application for the document intake service.
"""
import logging

from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware

from intake.api.v1.documents import router as documents_router, get_storage_service, shutdown_storage
from intake.config import get_settings
from intake.services.storage_service import StorageService

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Document Intake API",
    description="Keyword-based tagging, complexity scoring and section extraction for uploaded text documents",
    version="1.0.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(documents_router)


@app.on_event("startup")
async def startup_event():
    """Create storage indexes when running against MongoDB."""
    storage = app.dependency_overrides.get(get_storage_service, get_storage_service)()
    if hasattr(storage, "initialize_indexes"):
        await storage.initialize_indexes()
    logger.info(f"Document intake API started with {type(storage).__name__}")


@app.on_event("shutdown")
async def shutdown_event():
    await shutdown_storage()


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Document Intake API",
        "version": "1.0.0",
        "status": "operational",
        "endpoints": {
            "upload": "/api/v1/documents/upload",
            "documents": "/api/v1/documents",
            "search": "/api/v1/documents/search",
            "health": "/health"
        }
    }


@app.get("/health")
async def health_check(storage: StorageService = Depends(get_storage_service)):
    """Health check endpoint with storage status."""
    return {
        "status": "ok",
        "service": "Document Intake API",
        "storage": await storage.health_check()
    }
