"""
PDF to DOCX conversion.
"""

import logging
import re
from enum import Enum
from pathlib import Path
from typing import List, NamedTuple

from docx import Document
from pypdf import PdfReader
from pypdf.errors import PyPdfError

from ..exceptions import (
    DocxWriteError,
    InputNotFoundError,
    OutputExistsError,
    PdfReadError,
    UnsupportedConversionError,
)

logger = logging.getLogger(__name__)

# Control characters that are not allowed in XML 1.0 documents
_XML_INVALID_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")

NO_TEXT_WARNING = "PDF appears to contain no extractable text (may be image-based)"


class Format(Enum):
    """Supported conversion formats."""
    PDF = "pdf"
    DOCX = "docx"

    def __str__(self) -> str:
        return self.name


class ConvertConfig(NamedTuple):
    """Configuration for file conversion."""
    input_path: Path
    output_path: Path
    from_format: Format = Format.PDF
    to_format: Format = Format.DOCX
    force: bool = False
    verbose: bool = False


class ConvertResult(NamedTuple):
    """Result of a successful conversion."""
    pages_processed: int
    warnings: List[str]


def convert(config: ConvertConfig) -> ConvertResult:
    """
    Convert a file from one format to another.

    Args:
        config: Input/output paths, formats and overwrite policy

    Returns:
        Number of pages processed and any warnings

    Raises:
        UnsupportedConversionError: If the format pair is not PDF to DOCX
        InputNotFoundError: If the input file does not exist
        OutputExistsError: If the output exists and force is not set
        PdfReadError: If the PDF cannot be read
        DocxWriteError: If the DOCX cannot be written
    """
    if config.from_format != Format.PDF or config.to_format != Format.DOCX:
        raise UnsupportedConversionError(
            f"Unsupported conversion: {config.from_format} to {config.to_format}"
        )

    input_path = Path(config.input_path)
    output_path = Path(config.output_path)

    if not input_path.exists():
        raise InputNotFoundError(f"Input file not found: {input_path}")

    if output_path.exists() and not config.force:
        raise OutputExistsError(
            f"Output file already exists: {output_path} (use --force to overwrite)"
        )

    return _convert_pdf_to_docx(input_path, output_path)


def extract_pages(input_path: Path) -> List[str]:
    """
    Extract the text of every page of a PDF.

    Raises:
        PdfReadError: If the file is not a readable PDF
    """
    try:
        reader = PdfReader(str(input_path))
        pages = [page.extract_text() or "" for page in reader.pages]
    except (PyPdfError, OSError, ValueError) as e:
        raise PdfReadError(f"Failed to read PDF: {e}") from e

    logger.debug("Extracted text from %d page(s) of %s", len(pages), input_path)
    return pages


def _convert_pdf_to_docx(input_path: Path, output_path: Path) -> ConvertResult:
    warnings = []
    pages = extract_pages(input_path)

    if not pages or all(not text.strip() for text in pages):
        logger.warning("No extractable text in %s", input_path)
        warnings.append(NO_TEXT_WARNING)

    document = Document()

    for i, page_text in enumerate(pages):
        for line in page_text.splitlines():
            trimmed = _XML_INVALID_CHARS.sub("", line).strip()
            if trimmed:
                document.add_paragraph(trimmed)

        if i < len(pages) - 1:
            document.add_page_break()

    try:
        document.save(str(output_path))
    except (OSError, ValueError) as e:
        raise DocxWriteError(f"Failed to write DOCX: {e}") from e

    return ConvertResult(pages_processed=len(pages), warnings=warnings)
