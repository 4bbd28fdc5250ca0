"""
Document data models for the intake pipeline.
"""
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class FileType(str, Enum):
    """Uploaded file type, taken from the file extension."""
    MARKDOWN = "md"
    TEXT = "txt"
    PDF = "pdf"
    DOC = "doc"
    DOCX = "docx"

    @property
    def is_text(self) -> bool:
        return self in (FileType.MARKDOWN, FileType.TEXT)


class ProcessingStatus(str, Enum):
    """Processing status stored on the document record."""
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


class ComplexityLevel(str, Enum):
    """Ordered complexity tiers, lowest first."""
    BASIC = "basic"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"


class BusinessDomain(str, Enum):
    """Coarse functional classification of a document."""
    FINANCE = "finance"
    MARKETING = "marketing"
    SALES = "sales"
    HUMAN_RESOURCES = "human_resources"
    STRATEGY = "strategy"
    TECHNOLOGY = "technology"
    OPERATIONS = "operations"


class UploadStatus(str, Enum):
    """Per-file progress reported while a batch is processed."""
    UPLOADING = "uploading"
    PARSING = "parsing"
    COMPLETE = "complete"
    ERROR = "error"


class DocumentMetadata(BaseModel):
    """Counts derived from the document content."""
    word_count: int = Field(0, description="Whitespace-delimited word count")
    character_count: int = Field(0, description="Number of characters in the raw content")
    section_count: int = Field(1, description="Number of sections produced by the splitter")
    has_structured_content: bool = Field(False, description="True when more than one section was found")

    class Config:
        frozen = True


class Section(BaseModel):
    """One titled subdivision of a document."""
    id: Optional[str] = Field(None, description="Identifier assigned by the store")
    document_id: Optional[str] = Field(None, description="Owning document identifier")
    title: str = Field(..., description="Heading text or placeholder title")
    content: str = Field("", description="Section body without the heading line")
    order_index: int = Field(..., ge=0, description="Zero-based position in the document")
    tags: List[str] = Field(default_factory=list, description="Insight and context tags of this section")

    class Config:
        frozen = True
        use_enum_values = True


class Document(BaseModel):
    """Immutable snapshot of an uploaded and classified document."""
    id: Optional[str] = Field(None, description="Identifier assigned by the store")
    filename: str = Field(..., description="Original file name")
    file_type: FileType = Field(FileType.TEXT, description="File type from extension")
    file_size: int = Field(0, ge=0, description="Size of the upload in bytes")
    raw_content: str = Field("", description="Text read from the file")
    created_at: datetime = Field(default_factory=datetime.now, description="When the text finished reading")
    processing_status: ProcessingStatus = Field(ProcessingStatus.COMPLETED)
    error_message: Optional[str] = None

    # Classification output
    business_tags: List[str] = Field(default_factory=list, description="Business-context labels, never empty")
    context_tags: List[str] = Field(default_factory=list, description="Topical keyword labels")
    content_tags: List[str] = Field(default_factory=list, description="Content labels, never empty")
    business_domain: BusinessDomain = Field(BusinessDomain.OPERATIONS)
    complexity_level: ComplexityLevel = Field(ComplexityLevel.BASIC)
    business_insights: List[str] = Field(default_factory=list, description="Insight categories, never empty")
    narratives: Dict[str, str] = Field(default_factory=dict, description="Narrative field excerpts")
    metadata: DocumentMetadata = Field(default_factory=DocumentMetadata)

    class Config:
        frozen = True
        use_enum_values = True

    def __str__(self) -> str:
        return f"Document(filename={self.filename}, domain={self.business_domain}, complexity={self.complexity_level})"


class ProcessingResult(BaseModel):
    """Outcome of running one document through the pipeline."""
    document: Document
    sections: List[Section] = Field(default_factory=list)
    persisted: bool = Field(False, description="Whether the document record reached the store")
    sections_persisted: bool = Field(False, description="Whether section rows reached the store")
    warnings: List[str] = Field(default_factory=list)


class UploadProgress(BaseModel):
    """Progress of one file inside a batch."""
    index: int = Field(..., ge=0, description="Position of the file in the submitted batch")
    filename: str
    status: UploadStatus = UploadStatus.UPLOADING
    progress: int = Field(0, ge=0, le=100)
    current_step: Optional[str] = None
    error: Optional[str] = None

    class Config:
        use_enum_values = True


class BatchItem(BaseModel):
    """Final progress and result of one file."""
    progress: UploadProgress
    result: Optional[ProcessingResult] = None


class BatchResult(BaseModel):
    """Results of a batch, in submission order."""
    items: List[BatchItem] = Field(default_factory=list)

    @property
    def completed(self) -> int:
        return sum(1 for item in self.items if item.progress.status == UploadStatus.COMPLETE.value)

    @property
    def failed(self) -> int:
        return sum(1 for item in self.items if item.progress.status == UploadStatus.ERROR.value)
