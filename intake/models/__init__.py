"""
Data models for the document intake pipeline.
"""
from intake.models.document import (
    FileType,
    ProcessingStatus,
    ComplexityLevel,
    BusinessDomain,
    UploadStatus,
    DocumentMetadata,
    Section,
    Document,
    ProcessingResult,
    UploadProgress,
    BatchItem,
    BatchResult,
)

__all__ = [
    "FileType",
    "ProcessingStatus",
    "ComplexityLevel",
    "BusinessDomain",
    "UploadStatus",
    "DocumentMetadata",
    "Section",
    "Document",
    "ProcessingResult",
    "UploadProgress",
    "BatchItem",
    "BatchResult",
]
