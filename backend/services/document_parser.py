"""Decode uploaded resume documents into normalized plain text."""

import io
import logging
import re

import pdfplumber
import pytesseract
from docx import Document
from PIL import Image

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = frozenset({"pdf", "docx", "jpg", "jpeg", "png"})
IMAGE_EXTENSIONS = frozenset({"jpg", "jpeg", "png"})

# Bullet markers: standard + expanded unicode set
BULLET_MARKERS = frozenset("•-–—►▪✓*○◆⚫→▸▹◇■□●")

_HORIZONTAL_WS_RE = re.compile(r"[^\S\n]+")
_BLANK_LINES_RE = re.compile(r"\n{3,}")


class DocumentParseError(ValueError):
    """The uploaded document could not be turned into text."""


class UnsupportedFormatError(DocumentParseError):
    """The uploaded file extension is not one we can decode."""


def file_extension(filename: str) -> str:
    """Lower-cased extension without the dot ('' when there is none)."""
    if "." not in filename:
        return ""
    return filename.rsplit(".", 1)[1].lower()


def is_supported(filename: str) -> bool:
    return file_extension(filename) in SUPPORTED_EXTENSIONS


def normalize_text(text: str) -> str:
    """Clean raw extracted text while keeping its line structure.

    Unifies line endings, turns tabs and non-breaking spaces into plain
    spaces, collapses runs of horizontal whitespace, trims every line and
    squeezes consecutive blank lines down to one.
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = text.replace("\u00a0", " ")
    text = _HORIZONTAL_WS_RE.sub(" ", text)
    text = "\n".join(line.strip() for line in text.split("\n"))
    text = _BLANK_LINES_RE.sub("\n\n", text)
    return text.strip()


def extract_text_pdf(pdf_bytes: bytes) -> str:
    """Extract all text from a PDF file."""
    with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
        pages = [page.extract_text() or "" for page in pdf.pages]
    return "\n".join(pages)


def extract_text_docx(docx_bytes: bytes) -> str:
    """Extract paragraph and table text from a DOCX file."""
    doc = Document(io.BytesIO(docx_bytes))
    lines = [p.text for p in doc.paragraphs]
    for table in doc.tables:
        for row in table.rows:
            cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
            if cells:
                lines.append(" ".join(cells))
    return "\n".join(lines)


def extract_text_image(image_bytes: bytes, lang: str = "eng") -> str:
    """OCR an image resume with Tesseract."""
    with Image.open(io.BytesIO(image_bytes)) as image:
        return pytesseract.image_to_string(image, lang=lang)


def extract_text(content: bytes, filename: str, ocr_language: str = "eng") -> str:
    """Decode a resume file and return its normalized text.

    Raises UnsupportedFormatError for extensions outside SUPPORTED_EXTENSIONS
    and DocumentParseError when the decoder itself fails.
    """
    ext = file_extension(filename)
    if ext not in SUPPORTED_EXTENSIONS:
        raise UnsupportedFormatError(
            "Unsupported file format. Please upload PDF, DOCX, JPG, JPEG, or PNG."
        )

    try:
        if ext == "pdf":
            raw = extract_text_pdf(content)
        elif ext == "docx":
            raw = extract_text_docx(content)
        else:
            raw = extract_text_image(content, lang=ocr_language)
    except Exception as e:
        logger.warning("Failed to decode %s document: %s", ext, e)
        raise DocumentParseError(f"Could not read {ext.upper()} file") from e

    text = normalize_text(raw)
    logger.debug("Decoded %s document into %d characters", ext, len(text))
    return text
