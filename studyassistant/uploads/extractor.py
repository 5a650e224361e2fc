import io
import logging
import os
import re

from docx import Document as DocxDocument
from pdfminer.high_level import extract_text as pdf_extract_text

from studyassistant.errors import ExtractionError, UnsupportedMediaTypeError, ValidationError

logger = logging.getLogger(__name__)

IMAGE_PLACEHOLDER = "[Image content - OCR not implemented yet]"

EXTENSION_KINDS = {
    ".pdf": "pdf",
    ".docx": "docx",
    ".txt": "txt",
    ".jpg": "image",
    ".jpeg": "image",
    ".png": "image",
}

MIME_EXTENSIONS = {
    "application/pdf": (".pdf",),
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": (".docx",),
    "text/plain": (".txt",),
    "image/jpeg": (".jpg", ".jpeg"),
    "image/png": (".png",),
}


def get_media_kind(filename: str) -> str:
    ext = os.path.splitext(filename or "")[1].lower()
    return EXTENSION_KINDS.get(ext, "unknown")


def read_capped(stream, max_bytes: int) -> bytes:
    """Reads at most one byte past the limit so an oversized upload is never fully buffered."""
    return stream.read(max_bytes + 1)


def validate_upload(filename: str, content_type: str | None, size: int, max_bytes: int) -> None:
    """Size, MIME allow-list and MIME/extension agreement, checked before anything is stored."""
    if size > max_bytes:
        raise ValidationError(
            f"File too large. Maximum size is {max_bytes // (1024 * 1024)}MB.",
            error_code="FILE_TOO_LARGE",
            context={"size": size},
        )
    mime = (content_type or "").split(";")[0].strip().lower()
    allowed = MIME_EXTENSIONS.get(mime)
    if allowed is None:
        raise UnsupportedMediaTypeError(
            "Invalid file type. Only PDF, DOCX, TXT, and images are allowed.",
            context={"content_type": content_type},
        )
    ext = os.path.splitext(filename or "")[1].lower()
    if ext not in allowed:
        raise ValidationError(
            "File extension does not match file type.",
            error_code="FILE_TYPE_MISMATCH",
            context={"content_type": mime, "extension": ext},
        )


def _clean_pdf_text(raw: str) -> str:
    if not raw:
        return ""

    raw = raw.replace("\x0c", "\n\n")
    raw = raw.replace("\r\n", "\n").replace("\r", "\n")
    raw = re.sub(r"\n{3,}", "\n\n", raw)
    raw = re.sub(r"[ \t]{2,}", " ", raw)
    raw = "\n".join(line.strip() for line in raw.split("\n"))

    return raw.strip()


def _extract_pdf(data: bytes) -> str:
    return _clean_pdf_text(pdf_extract_text(io.BytesIO(data)) or "")


def _extract_docx(data: bytes) -> str:
    doc = DocxDocument(io.BytesIO(data))
    parts = [p.text for p in doc.paragraphs]
    for table in doc.tables:
        for row in table.rows:
            for cell in row.cells:
                parts.extend(p.text for p in cell.paragraphs)
    return "\n\n".join(p for p in parts if p.strip())


def extract_text(data: bytes, media_kind: str) -> str:
    """Turn an uploaded document into plain text.

    Parser failures are logged and re-raised as a generic ExtractionError so
    library messages never reach the client.
    """
    if media_kind == "image":
        return IMAGE_PLACEHOLDER
    handlers = {
        "pdf": _extract_pdf,
        "docx": _extract_docx,
        "txt": lambda b: b.decode("utf-8"),
    }
    handler = handlers.get(media_kind)
    if handler is None:
        raise UnsupportedMediaTypeError("Unsupported file type", context={"media_kind": media_kind})
    try:
        return handler(data)
    except Exception as e:
        logger.error(f"Text extraction failed for {media_kind} ({len(data)} bytes): {e}")
        raise ExtractionError("Failed to extract text from file") from e
