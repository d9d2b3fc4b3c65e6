"""
Uploaded file ➜ raw text
– PDF through pdfplumber, DOCX through python-docx, plain text decoded as UTF-8
– strips `(cid:N)` glyph artifacts
– suppresses verbose CropBox warnings from pdfplumber/pdfminer
"""
from __future__ import annotations
import io, logging, mimetypes, re, warnings
from pathlib import Path

import docx
import pdfplumber

from resume_optimizer.errors import ExtractionError, UnsupportedFileType

log = logging.getLogger(__name__)

# silence noisy PDF logging
logging.getLogger("pdfplumber").setLevel(logging.ERROR)
logging.getLogger("pdfminer").setLevel(logging.ERROR)
warnings.filterwarnings("ignore", category=UserWarning, module="pdfminer")

PDF = "application/pdf"
DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
TEXT = "text/plain"

FILE_TYPE_LABELS = {PDF: "PDF", DOCX: "DOCX", TEXT: "Text"}

_CID_RE = re.compile(r"\(cid:\d+\)")
_NO_PDF_TEXT = (
    "No text could be extracted from this PDF. "
    "It might be a scanned document or image-based PDF."
)


def pdf_to_text(source: str | Path | bytes) -> str:
    if isinstance(source, bytes):
        source = io.BytesIO(source)
    with pdfplumber.open(source) as pdf:
        pages = [p.extract_text() or "" for p in pdf.pages]
    return _CID_RE.sub("", "\n".join(pages)).strip()


def docx_to_text(source: str | Path | bytes) -> str:
    if isinstance(source, bytes):
        source = io.BytesIO(source)
    document = docx.Document(source)
    return "\n".join(p.text for p in document.paragraphs)


def extract_text(data: bytes, mime_type: str) -> str:
    """Return the plain text of an uploaded résumé or raise ExtractionError."""
    if mime_type == PDF:
        try:
            text = pdf_to_text(data)
        except Exception as exc:
            log.error("PDF parsing error: %s", exc)
            raise ExtractionError(
                "Failed to parse PDF file. This might be a scanned document or "
                "password-protected PDF. Please try converting it to text or DOCX format."
            ) from exc
        if not text:
            raise ExtractionError(_NO_PDF_TEXT)
        return text
    if mime_type == DOCX:
        try:
            return docx_to_text(data)
        except Exception as exc:
            log.error("DOCX parsing error: %s", exc)
            raise ExtractionError(
                "Failed to parse DOCX file. Please check the file format."
            ) from exc
    if mime_type == TEXT:
        return data.decode("utf-8", errors="replace")
    raise UnsupportedFileType(mime_type)


def validate_file_type(mime_type: str | None) -> bool:
    return mime_type in FILE_TYPE_LABELS


def file_type_label(mime_type: str | None) -> str:
    return FILE_TYPE_LABELS.get(mime_type, "Unknown")


def guess_mime_type(filename: str | Path) -> str | None:
    suffix = Path(filename).suffix.lower()
    if suffix == ".docx":
        return DOCX
    return mimetypes.guess_type(str(filename))[0]
