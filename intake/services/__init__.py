"""
Services module for the document intake pipeline.
"""
from intake.services.storage_service import (
    StorageService,
    InMemoryStorage,
    DocumentFilters,
    StorageError,
    DocumentNotFoundError,
)
from intake.services.document_processor import (
    DocumentProcessor,
    DocumentProcessingError,
    UploadValidationError,
)
# MongoDBStorage is imported from intake.services.mongodb_storage directly

__all__ = [
    "StorageService",
    "InMemoryStorage",
    "DocumentFilters",
    "StorageError",
    "DocumentNotFoundError",
    "DocumentProcessor",
    "DocumentProcessingError",
    "UploadValidationError",
]
