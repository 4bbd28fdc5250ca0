"""
REST API endpoints for document intake.

This module provides endpoints for uploading documents, listing and
filtering stored records, and searching section content.
"""
import logging
import time
from typing import List, Optional

from fastapi import (
    APIRouter,
    HTTPException,
    UploadFile,
    File,
    Depends,
    Query,
    Path as PathParam,
)
from pydantic import BaseModel, Field

from intake.config import get_settings
from intake.models.document import (
    BatchItem,
    BusinessDomain,
    ComplexityLevel,
    Document,
    ProcessingStatus,
    Section,
)
from intake.services.document_processor import DocumentProcessor
from intake.services.storage_service import (
    StorageService,
    StorageError,
    DocumentNotFoundError,
    DocumentFilters,
    InMemoryStorage,
)


logger = logging.getLogger(__name__)

# Initialize router
router = APIRouter(prefix="/api/v1/documents", tags=["documents"])


# ============================================================================
# REQUEST/RESPONSE MODELS
# ============================================================================

class UploadResponse(BaseModel):
    """Response for a batch upload."""
    items: List[BatchItem]
    completed: int
    failed: int
    processing_time_seconds: float


class ListResponse(BaseModel):
    """Response for document listing."""
    documents: List[Document]
    total: int


class DocumentResponse(BaseModel):
    """A document with its sections."""
    document: Document
    sections: List[Section]


class ClearResponse(BaseModel):
    """Counts removed by a clear."""
    documents_deleted: int
    sections_deleted: int


class SearchResponse(BaseModel):
    """Response for content or tag search."""
    query: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    sections: List[Section] = Field(default_factory=list)
    documents: List[Document] = Field(default_factory=list)
    query_time_ms: float


# ============================================================================
# DEPENDENCY INJECTION
# ============================================================================

_storage_service: Optional[StorageService] = None
_document_processor: Optional[DocumentProcessor] = None


def get_storage_service() -> StorageService:
    """Get storage service instance (MongoDB when MONGODB_URI is set)."""
    global _storage_service
    if _storage_service is None:
        settings = get_settings()
        if settings.mongodb_uri:
            from intake.services.mongodb_storage import MongoDBStorage
            _storage_service = MongoDBStorage(settings.mongodb_uri, settings.database_name)
        else:
            logger.warning("MONGODB_URI not set. Using in-memory storage.")
            _storage_service = InMemoryStorage()
    return _storage_service


def get_document_processor(storage: StorageService = Depends(get_storage_service)) -> DocumentProcessor:
    """Get document processor instance."""
    global _document_processor
    if _document_processor is None or _document_processor.storage_service is not storage:
        _document_processor = DocumentProcessor(storage_service=storage)
    return _document_processor


async def shutdown_storage() -> None:
    """Close the storage service if one was created."""
    global _storage_service, _document_processor
    if _storage_service is not None:
        await _storage_service.close()
    _storage_service = None
    _document_processor = None


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.post("/upload", response_model=UploadResponse)
async def upload_documents(
    files: List[UploadFile] = File(...),
    processor: DocumentProcessor = Depends(get_document_processor),
):
    """
    Upload one or more documents and process them in order.

    Files that fail validation or cannot be read are reported with status
    "error"; the remaining files are still processed.

    Args:
        files: Files (multipart/form-data)

    Returns:
        Per-file progress and results in upload order
    """
    if not files:
        raise HTTPException(status_code=400, detail="No files uploaded")

    start_time = time.time()
    batch = []
    for file in files:
        content = await file.read()
        batch.append((file.filename or "upload.txt", content))

    result = await processor.process_batch(batch)

    return UploadResponse(
        items=result.items,
        completed=result.completed,
        failed=result.failed,
        processing_time_seconds=round(time.time() - start_time, 3),
    )


@router.get("", response_model=ListResponse)
async def list_documents(
    domain: Optional[BusinessDomain] = Query(None, description="Business domain filter"),
    complexity: Optional[ComplexityLevel] = Query(None, description="Complexity level filter"),
    status: Optional[ProcessingStatus] = Query(None, description="Processing status filter"),
    tags: List[str] = Query([], description="Match any of these business, context or content tags"),
    limit: int = Query(50, ge=1, le=500),
    storage: StorageService = Depends(get_storage_service),
):
    """List stored documents, newest first."""
    filters = DocumentFilters(
        business_domain=domain,
        complexity_level=complexity,
        processing_status=status,
        tags=tags,
        limit=limit,
    )
    try:
        documents = await storage.get_documents(filters)
    except StorageError as e:
        logger.error(f"Error listing documents: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to list documents: {str(e)}")

    return ListResponse(documents=documents, total=len(documents))


@router.delete("", response_model=ClearResponse)
async def clear_documents(storage: StorageService = Depends(get_storage_service)):
    """Delete all stored sections and documents."""
    try:
        deleted = await storage.clear()
    except StorageError as e:
        logger.error(f"Error clearing storage: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to clear documents: {str(e)}")

    return ClearResponse(
        documents_deleted=deleted["documents"],
        sections_deleted=deleted["sections"],
    )


@router.get("/search", response_model=SearchResponse)
async def search_documents(
    q: Optional[str] = Query(None, min_length=1, description="Text to find in section content"),
    tags: List[str] = Query([], description="Business, context or content tags to match"),
    limit: int = Query(20, ge=1, le=100),
    storage: StorageService = Depends(get_storage_service),
):
    """Search section content, documents by business tag, or both."""
    if not q and not tags:
        raise HTTPException(status_code=400, detail="Provide a query (q) or at least one tag")

    start_time = time.time()
    try:
        sections = await storage.search_content(q, limit) if q else []
        documents = await storage.search_by_tags(tags, limit) if tags else []
    except StorageError as e:
        logger.error(f"Error searching documents: {e}")
        raise HTTPException(status_code=500, detail=f"Search failed: {str(e)}")

    return SearchResponse(
        query=q,
        tags=tags,
        sections=sections,
        documents=documents,
        query_time_ms=round((time.time() - start_time) * 1000, 2),
    )


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(
    document_id: str = PathParam(..., description="Document ID"),
    storage: StorageService = Depends(get_storage_service),
):
    """Get a document with its sections."""
    try:
        document = await storage.get_document(document_id)
        sections = await storage.get_sections(document_id)
    except DocumentNotFoundError:
        raise HTTPException(status_code=404, detail=f"Document {document_id} not found")
    except StorageError as e:
        logger.error(f"Error retrieving document {document_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to retrieve document: {str(e)}")

    return DocumentResponse(document=document, sections=sections)


@router.get("/{document_id}/sections", response_model=List[Section])
async def get_document_sections(
    document_id: str = PathParam(..., description="Document ID"),
    storage: StorageService = Depends(get_storage_service),
):
    """Get the sections of a document ordered by position."""
    try:
        await storage.get_document(document_id)
        return await storage.get_sections(document_id)
    except DocumentNotFoundError:
        raise HTTPException(status_code=404, detail=f"Document {document_id} not found")
    except StorageError as e:
        logger.error(f"Error retrieving sections for {document_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to retrieve sections: {str(e)}")
