"""Plain-text extraction from uploaded documents."""

from io import BytesIO

import structlog
from PyPDF2 import PdfReader
from docx import Document

from resume_enhancer.exceptions import ExtractionError
from resume_enhancer.models.resume import FileType

logger = structlog.get_logger()

PDF_MIME_TYPE = "application/pdf"
DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

MIME_FILE_TYPES: dict[str, FileType] = {
    PDF_MIME_TYPE: FileType.PDF,
    DOCX_MIME_TYPE: FileType.DOCX,
}


def extract_pdf_text(content: bytes) -> str:
    """Extract text from PDF bytes, one page per line block."""
    try:
        reader = PdfReader(BytesIO(content))
        text_parts = []

        for page in reader.pages:
            text = page.extract_text()
            if text:
                text_parts.append(text)
    except Exception as e:
        logger.warning("pdf_extraction_error", error=str(e))
        raise ExtractionError("Failed to parse PDF file") from e

    return "\n".join(text_parts)


def extract_docx_text(content: bytes) -> str:
    """Extract text from DOCX bytes, including table cells."""
    try:
        doc = Document(BytesIO(content))
        text_parts = []

        for paragraph in doc.paragraphs:
            if paragraph.text.strip():
                text_parts.append(paragraph.text)

        for table in doc.tables:
            for row in table.rows:
                for cell in row.cells:
                    if cell.text.strip():
                        text_parts.append(cell.text)
    except Exception as e:
        logger.warning("docx_extraction_error", error=str(e))
        raise ExtractionError("Failed to parse DOCX file") from e

    return "\n".join(text_parts)


def extract_text(file_type: FileType, content: bytes) -> str:
    if file_type == FileType.PDF:
        return extract_pdf_text(content)
    return extract_docx_text(content)
