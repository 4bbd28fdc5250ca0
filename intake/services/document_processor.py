"""
Main document processing orchestration service.

This module reads uploaded files, runs the classification pipeline,
assembles the immutable document record and hands it to the storage
service.
"""
import logging
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple, Union

from intake.config import PatternTables, DEFAULT_PATTERN_TABLES, MAX_FILE_SIZE_MB, ALLOWED_EXTENSIONS
from intake.models.document import (
    BatchItem,
    BatchResult,
    Document,
    ProcessingResult,
    ProcessingStatus,
    UploadProgress,
    UploadStatus,
)
from intake.parser.categorizer import analyze_text
from intake.parser.extractor import DocumentReadError, detect_file_type, read_file, read_text
from intake.services.storage_service import StorageService, InMemoryStorage


logger = logging.getLogger(__name__)

FileContent = Union[bytes, bytearray, memoryview, str]
ProgressCallback = Callable[[UploadProgress], None]


# ============================================================================
# CUSTOM EXCEPTIONS
# ============================================================================

class DocumentProcessingError(Exception):
    """Base exception for document processing."""
    pass


class UploadValidationError(DocumentProcessingError):
    """Upload rejected before processing (extension or size)."""
    pass


def validate_upload(file_name: str, file_size: int) -> None:
    """
    Check an upload against the allowed extensions and size limit.

    Raises:
        UploadValidationError: If the file is not accepted
    """
    extension = "." + file_name.rsplit(".", 1)[-1].lower() if "." in file_name else ""
    if extension not in ALLOWED_EXTENSIONS:
        raise UploadValidationError(
            f"Invalid file type for {file_name}. Allowed: {', '.join(ALLOWED_EXTENSIONS)}"
        )

    if file_size > MAX_FILE_SIZE_MB * 1024 * 1024:
        raise UploadValidationError(
            f"File too large: {file_name}. Maximum size is {MAX_FILE_SIZE_MB} MB"
        )


# ============================================================================
# MAIN DOCUMENT PROCESSOR
# ============================================================================

class DocumentProcessor:
    """
    Central document processing orchestrator.

    Each document is processed on its own: the pipeline has no state shared
    between documents, so results depend only on the file content. There is
    no retry and no cancellation.
    """

    def __init__(
        self,
        storage_service: Optional[StorageService] = None,
        pattern_tables: PatternTables = DEFAULT_PATTERN_TABLES,
    ):
        """
        Initialize document processor with dependencies.

        Args:
            storage_service: Store receiving document and section records
            pattern_tables: Keyword tables used by every detector
        """
        self.storage_service = storage_service or InMemoryStorage()
        self.pattern_tables = pattern_tables

        logger.info("DocumentProcessor initialized")

    async def process(self, file_name: str, content: FileContent) -> ProcessingResult:
        """
        Process one uploaded file through the complete pipeline.

        A storage failure does not fail the document: the computed record
        is returned without an identifier and persisted=False.

        Args:
            file_name: Original file name
            content: Raw bytes or decoded text of the file

        Returns:
            ProcessingResult with the document record and its sections

        Raises:
            UploadValidationError: If the file type or size is not accepted
            DocumentReadError: If the file content cannot be read
        """
        logger.info(f"Starting processing: {file_name}")
        warnings: List[str] = []

        if isinstance(content, (bytes, bytearray, memoryview)):
            content = bytes(content)
            file_size = len(content)
        else:
            file_size = len(content.encode("utf-8"))
        validate_upload(file_name, file_size)

        text = read_text(file_name, content)
        file_type = detect_file_type(file_name)
        if not file_type.is_text:
            warnings.append(f"Content extraction is not implemented for {file_type.value} files")

        analysis = analyze_text(text, self.pattern_tables)

        document = Document(
            filename=file_name,
            file_type=file_type,
            file_size=file_size,
            raw_content=text,
            processing_status=ProcessingStatus.COMPLETED,
            **analysis.document_fields(),
        )
        sections = analysis.sections

        # Storage
        try:
            document = await self.storage_service.insert(document)
        except Exception as e:
            logger.error(f"Failed to save document {file_name}: {e}")
            warnings.append(f"Document was not saved: {e}")
            return ProcessingResult(document=document, sections=sections, persisted=False, warnings=warnings)

        sections = [section.model_copy(update={"document_id": document.id}) for section in sections]
        sections_persisted = False

        if document.metadata.has_structured_content:
            try:
                sections = await self.storage_service.insert_many(sections)
                sections_persisted = True
            except Exception as e:
                logger.error(f"Failed to save sections for {document.id}: {e}")
                warnings.append(f"Sections were not saved: {e}")

        logger.info(f"Processing complete: {file_name} -> {document.id} ({len(sections)} sections)")

        return ProcessingResult(
            document=document,
            sections=sections,
            persisted=True,
            sections_persisted=sections_persisted,
            warnings=warnings,
        )

    async def process_file(self, file_path: Union[str, Path]) -> ProcessingResult:
        """
        Process a file from disk.

        Raises:
            DocumentReadError: If the file cannot be read
        """
        file_path = Path(file_path)
        return await self.process(file_path.name, read_file(file_path))

    async def process_batch(
        self,
        files: Sequence[Tuple[str, FileContent]],
        on_progress: Optional[ProgressCallback] = None,
    ) -> BatchResult:
        """
        Process multiple files one at a time, in submission order.

        Progress for each file moves uploading -> parsing -> complete, or
        to error when the file cannot be read. One failed file does not
        stop the batch.

        Args:
            files: (file name, content) pairs
            on_progress: Called with every progress update

        Returns:
            BatchResult with one item per input, in input order
        """
        logger.info(f"Starting batch processing: {len(files)} documents")

        progress = [
            UploadProgress(index=i, filename=file_name, status=UploadStatus.UPLOADING, progress=0)
            for i, (file_name, _) in enumerate(files)
        ]
        for item in progress:
            self._report(on_progress, item)

        items: List[BatchItem] = []

        for i, (file_name, content) in enumerate(files):
            progress[i] = progress[i].model_copy(
                update={"status": UploadStatus.PARSING.value, "progress": 50, "current_step": "parsing"}
            )
            self._report(on_progress, progress[i])

            try:
                result = await self.process(file_name, content)
            except (DocumentReadError, DocumentProcessingError) as e:
                logger.error(f"Failed to process {file_name}: {e}")
                progress[i] = self._mark_failed(progress[i], str(e), on_progress)
                items.append(BatchItem(progress=progress[i]))
                continue
            except Exception as e:
                logger.exception(f"Unexpected error processing {file_name}: {e}")
                progress[i] = self._mark_failed(progress[i], f"Unexpected error: {e}", on_progress)
                items.append(BatchItem(progress=progress[i]))
                continue

            progress[i] = progress[i].model_copy(
                update={"status": UploadStatus.COMPLETE.value, "progress": 100, "current_step": None}
            )
            self._report(on_progress, progress[i])
            items.append(BatchItem(progress=progress[i], result=result))

        batch = BatchResult(items=items)
        logger.info(f"Batch processing complete: {batch.completed}/{len(files)} successful")
        return batch

    def _mark_failed(
        self,
        progress: UploadProgress,
        error: str,
        on_progress: Optional[ProgressCallback],
    ) -> UploadProgress:
        failed = progress.model_copy(
            update={"status": UploadStatus.ERROR.value, "progress": 0, "current_step": None, "error": error}
        )
        self._report(on_progress, failed)
        return failed

    def _report(self, on_progress: Optional[ProgressCallback], progress: UploadProgress) -> None:
        if on_progress is not None:
            on_progress(progress)
