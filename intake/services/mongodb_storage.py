"""
MongoDB storage service for the document intake pipeline.

Uses Motor (async MongoDB driver) for non-blocking operations.
"""
import logging
from typing import List, Dict, Any, Optional
from datetime import datetime
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING, TEXT
from pymongo.errors import PyMongoError

from intake.models.document import Document, Section
from intake.services.storage_service import (
    StorageService,
    StorageError,
    DocumentNotFoundError,
    DocumentFilters,
    new_record_id,
)


logger = logging.getLogger(__name__)

TAG_FIELDS = ("business_tags", "context_tags", "content_tags")


# ============================================================================
# CUSTOM EXCEPTIONS
# ============================================================================

class MongoStorageError(StorageError):
    """Base exception for MongoDB storage operations."""
    pass


def _to_document(doc: Dict[str, Any]) -> Document:
    doc = dict(doc)
    doc["id"] = str(doc.pop("_id"))
    doc.pop("inserted_at", None)
    return Document(**doc)


def _to_section(doc: Dict[str, Any]) -> Section:
    doc = dict(doc)
    doc["id"] = str(doc.pop("_id"))
    doc.pop("inserted_at", None)
    return Section(**doc)


def build_query(filters: DocumentFilters) -> Dict[str, Any]:
    """Translate DocumentFilters into a MongoDB query."""
    query: Dict[str, Any] = {}
    if filters.business_domain:
        query["business_domain"] = filters.business_domain
    if filters.complexity_level:
        query["complexity_level"] = filters.complexity_level
    if filters.processing_status:
        query["processing_status"] = filters.processing_status
    if filters.tags:
        tags = list(filters.tags)
        query["$or"] = [{field: {"$in": tags}} for field in TAG_FIELDS]
    return query


# ============================================================================
# MONGODB STORAGE SERVICE
# ============================================================================

class MongoDBStorage(StorageService):
    """
    MongoDB storage service for document records.

    Documents and sections live in separate collections; a section points
    at its document through document_id. The two inserts are independent,
    so a document can be stored while its sections are not.
    """

    def __init__(self, mongodb_uri: str, database_name: str = "document_intake"):
        """
        Initialize MongoDB storage.

        Args:
            mongodb_uri: MongoDB connection string
            database_name: Database name
        """
        self.client: AsyncIOMotorClient = AsyncIOMotorClient(mongodb_uri)
        self.db: AsyncIOMotorDatabase = self.client[database_name]

        # Collections
        self.documents = self.db.documents
        self.sections = self.db.sections

        logger.info(f"MongoDB storage initialized: {database_name}")

    async def initialize_indexes(self):
        """Create indexes for the list, filter and search queries."""
        try:
            await self.documents.create_index([("created_at", DESCENDING)])
            await self.documents.create_index([("business_domain", ASCENDING)])
            await self.documents.create_index([("complexity_level", ASCENDING)])
            for field in TAG_FIELDS:
                await self.documents.create_index([(field, ASCENDING)])
            await self.documents.create_index([("processing_status", ASCENDING)])

            await self.sections.create_index([("document_id", ASCENDING), ("order_index", ASCENDING)])
            await self.sections.create_index([("content", TEXT)])

            logger.info("MongoDB indexes created successfully")

        except PyMongoError as e:
            logger.error(f"Error creating indexes: {e}")
            raise MongoStorageError(f"Failed to create indexes: {e}")

    # ========================================================================
    # INSERT OPERATIONS
    # ========================================================================

    async def insert(self, document: Document) -> Document:
        """
        Insert a document record.

        Args:
            document: Document snapshot without identifier

        Returns:
            The same document carrying its new identifier
        """
        try:
            doc_dict = document.model_dump(exclude={"id"})
            doc_dict["_id"] = new_record_id()
            doc_dict["inserted_at"] = datetime.now()

            await self.documents.insert_one(doc_dict)

            logger.info(f"Saved document to MongoDB: {doc_dict['_id']}")
            return document.model_copy(update={"id": doc_dict["_id"]})

        except PyMongoError as e:
            logger.error(f"Error saving document: {e}")
            raise MongoStorageError(f"Failed to save document: {e}")

    async def insert_many(self, sections: List[Section]) -> List[Section]:
        """Insert section records in one batch."""
        if not sections:
            return []

        try:
            section_docs = []
            for section in sections:
                section_dict = section.model_dump(exclude={"id"})
                section_dict["_id"] = new_record_id()
                section_dict["inserted_at"] = datetime.now()
                section_docs.append(section_dict)

            await self.sections.insert_many(section_docs)

            logger.info(f"Saved {len(section_docs)} sections to MongoDB")
            return [
                section.model_copy(update={"id": section_dict["_id"]})
                for section, section_dict in zip(sections, section_docs)
            ]

        except PyMongoError as e:
            logger.error(f"Error saving sections: {e}")
            raise MongoStorageError(f"Failed to save sections: {e}")

    # ========================================================================
    # QUERY OPERATIONS
    # ========================================================================

    async def get_documents(self, filters: Optional[DocumentFilters] = None) -> List[Document]:
        """List documents, newest first."""
        filters = filters or DocumentFilters()
        try:
            cursor = self.documents.find(build_query(filters)).sort("created_at", DESCENDING).limit(filters.limit)
            docs = await cursor.to_list(None)
            return [_to_document(doc) for doc in docs]

        except PyMongoError as e:
            logger.error(f"Error listing documents: {e}")
            raise MongoStorageError(f"Failed to list documents: {e}")

    async def get_document(self, document_id: str) -> Document:
        """Retrieve document by ID."""
        try:
            doc = await self.documents.find_one({"_id": document_id})
        except PyMongoError as e:
            logger.error(f"Error retrieving document {document_id}: {e}")
            raise MongoStorageError(f"Failed to retrieve document: {e}")

        if not doc:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        return _to_document(doc)

    async def get_sections(self, document_id: str) -> List[Section]:
        """Get sections for document."""
        try:
            cursor = self.sections.find({"document_id": document_id}).sort("order_index", ASCENDING)
            docs = await cursor.to_list(None)
            return [_to_section(doc) for doc in docs]

        except PyMongoError as e:
            logger.error(f"Error retrieving sections: {e}")
            raise MongoStorageError(f"Failed to retrieve sections: {e}")

    async def search_content(self, query: str, limit: int = 20) -> List[Section]:
        """Full-text search over section content using the text index."""
        try:
            cursor = self.sections.find(
                {"$text": {"$search": query}},
                {"score": {"$meta": "textScore"}}
            ).sort([("score", {"$meta": "textScore"})]).limit(limit)
            docs = await cursor.to_list(None)
            return [_to_section({k: v for k, v in doc.items() if k != "score"}) for doc in docs]

        except PyMongoError as e:
            logger.error(f"Error searching sections: {e}")
            raise MongoStorageError(f"Failed to search sections: {e}")

    async def clear(self) -> Dict[str, int]:
        """Delete all sections, then all documents."""
        try:
            sections_result = await self.sections.delete_many({})
            documents_result = await self.documents.delete_many({})

        except PyMongoError as e:
            logger.error(f"Error clearing collections: {e}")
            raise MongoStorageError(f"Failed to clear storage: {e}")

        deleted = {
            "sections": sections_result.deleted_count,
            "documents": documents_result.deleted_count,
        }
        logger.info(f"Cleared MongoDB collections: {deleted}")
        return deleted

    # ========================================================================
    # UTILITY METHODS
    # ========================================================================

    async def health_check(self) -> Dict[str, Any]:
        """Check database health."""
        try:
            await self.db.command("ping")
            stats = await self.db.command("dbStats")

            return {
                "status": "healthy",
                "database": "connected",
                "collections": stats.get("collections", 0),
                "data_size_mb": round(stats.get("dataSize", 0) / (1024 * 1024), 2)
            }

        except PyMongoError as e:
            logger.error(f"Health check failed: {e}")
            return {"status": "unhealthy", "error": str(e)}

    async def close(self):
        """Close MongoDB connection."""
        self.client.close()
        logger.info("MongoDB connection closed")
