"""
Storage service interface for document records.

The pipeline talks to persistence only through StorageService. The
in-memory implementation backs development runs and tests; MongoDBStorage
is the production implementation.
"""
import logging
from typing import Any, Dict, List, Optional, Set
from uuid import uuid4

from pydantic import BaseModel, Field

from intake.models.document import (
    ComplexityLevel,
    BusinessDomain,
    Document,
    ProcessingStatus,
    Section,
)


logger = logging.getLogger(__name__)


# ============================================================================
# CUSTOM EXCEPTIONS
# ============================================================================

class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class DocumentNotFoundError(StorageError):
    """Document not found in the store."""
    pass


# ============================================================================
# QUERY FILTERS
# ============================================================================

class DocumentFilters(BaseModel):
    """Filters accepted by StorageService.get_documents."""
    business_domain: Optional[BusinessDomain] = None
    complexity_level: Optional[ComplexityLevel] = None
    tags: List[str] = Field(
        default_factory=list,
        description="Match documents carrying any of these business, context or content tags",
    )
    processing_status: Optional[ProcessingStatus] = None
    limit: int = Field(50, ge=1, le=500)

    class Config:
        use_enum_values = True

    def matches(self, document: Document) -> bool:
        """Check a document against the filters (used by in-memory stores)."""
        if self.business_domain and document.business_domain != self.business_domain:
            return False
        if self.complexity_level and document.complexity_level != self.complexity_level:
            return False
        if self.processing_status and document.processing_status != self.processing_status:
            return False
        if self.tags and not set(self.tags) & document_tags(document):
            return False
        return True


def document_tags(document: Document) -> Set[str]:
    """All tags a document can be searched by."""
    return set(document.business_tags) | set(document.context_tags) | set(document.content_tags)


def new_record_id() -> str:
    return uuid4().hex


# ============================================================================
# STORAGE SERVICE INTERFACE
# ============================================================================

class StorageService:
    """
    Storage service interface for document and section records.

    insert() and insert_many() are the only operations the pipeline needs;
    the query operations serve the HTTP API.
    """

    async def insert(self, document: Document) -> Document:
        """Insert a document record and return it with its identifier."""
        raise NotImplementedError

    async def insert_many(self, sections: List[Section]) -> List[Section]:
        """Insert section records and return them with identifiers."""
        raise NotImplementedError

    async def get_documents(self, filters: Optional[DocumentFilters] = None) -> List[Document]:
        """List documents, newest first."""
        raise NotImplementedError

    async def get_document(self, document_id: str) -> Document:
        """Retrieve a document by ID, raising DocumentNotFoundError if missing."""
        raise NotImplementedError

    async def get_sections(self, document_id: str) -> List[Section]:
        """Sections of a document ordered by order_index."""
        raise NotImplementedError

    async def search_content(self, query: str, limit: int = 20) -> List[Section]:
        """Sections whose content contains the query."""
        raise NotImplementedError

    async def search_by_tags(self, tags: List[str], limit: int = 50) -> List[Document]:
        """Documents sharing at least one business, context or content tag with tags."""
        return await self.get_documents(DocumentFilters(tags=tags, limit=limit))

    async def clear(self) -> Dict[str, int]:
        """Delete every section, then every document. Returns deleted counts."""
        raise NotImplementedError

    async def health_check(self) -> Dict[str, Any]:
        return {"status": "healthy"}

    async def close(self) -> None:
        pass


# ============================================================================
# IN-MEMORY STORAGE
# ============================================================================

class InMemoryStorage(StorageService):
    """Process-local store keyed by generated identifiers."""

    def __init__(self):
        self.documents: Dict[str, Document] = {}
        self.sections: Dict[str, Section] = {}
        logger.info("In-memory storage initialized")

    async def insert(self, document: Document) -> Document:
        stored = document.model_copy(update={"id": new_record_id()})
        self.documents[stored.id] = stored
        logger.info(f"Saved document: {stored.id}")
        return stored

    async def insert_many(self, sections: List[Section]) -> List[Section]:
        stored = [section.model_copy(update={"id": new_record_id()}) for section in sections]
        for section in stored:
            self.sections[section.id] = section
        return stored

    async def get_documents(self, filters: Optional[DocumentFilters] = None) -> List[Document]:
        filters = filters or DocumentFilters()
        documents = sorted(self.documents.values(), key=lambda d: d.created_at, reverse=True)
        return [d for d in documents if filters.matches(d)][:filters.limit]

    async def get_document(self, document_id: str) -> Document:
        document = self.documents.get(document_id)
        if document is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        return document

    async def get_sections(self, document_id: str) -> List[Section]:
        sections = [s for s in self.sections.values() if s.document_id == document_id]
        return sorted(sections, key=lambda s: s.order_index)

    async def search_content(self, query: str, limit: int = 20) -> List[Section]:
        query_lower = query.lower()
        return [s for s in self.sections.values() if query_lower in s.content.lower()][:limit]

    async def clear(self) -> Dict[str, int]:
        deleted = {"sections": len(self.sections), "documents": len(self.documents)}
        self.sections.clear()
        self.documents.clear()
        logger.info(f"Cleared in-memory storage: {deleted}")
        return deleted

    async def health_check(self) -> Dict[str, Any]:
        return {
            "status": "healthy",
            "database": "in-memory",
            "documents": len(self.documents),
            "sections": len(self.sections),
        }
