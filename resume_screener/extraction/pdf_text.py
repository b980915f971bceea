"""PDF résumé validation and text extraction with OCR fallback."""

import io
import logging

from resume_screener.errors import InvalidResumeFile
from resume_screener.extraction.models import ResumeFile
from resume_screener.utils.text_processing import clean_text

logger = logging.getLogger("resume_screener.extraction")

MAX_FILE_SIZE = 10 * 1024 * 1024


def validate_resume_file(resume: ResumeFile | None, max_bytes: int = MAX_FILE_SIZE) -> None:
    """Reject missing, non-PDF and oversized uploads."""
    if resume is None or resume.is_empty:
        raise InvalidResumeFile("PDF required")
    if resume.suffix != ".pdf":
        raise InvalidResumeFile("Only PDF allowed")
    if resume.size > max_bytes:
        raise InvalidResumeFile(f"Max size {max_bytes // (1024 * 1024)}MB")


def _extract_pdf_text(content: bytes) -> str:
    """Extract embedded text from a PDF using PyPDF2."""
    from PyPDF2 import PdfReader

    reader = PdfReader(io.BytesIO(content))
    if reader.is_encrypted:
        # Most "protected" résumés only carry an owner password
        reader.decrypt("")

    pages = []
    for page in reader.pages:
        text = page.extract_text()
        if text:
            pages.append(text)
    return "\n".join(pages).strip()


def _ocr_pdf(content: bytes, dpi: int = 200) -> str:
    """Render each page with PyMuPDF and read it with tesseract."""
    import fitz  # PyMuPDF
    import pytesseract
    from PIL import Image

    chunks = []
    with fitz.open(stream=content, filetype="pdf") as doc:
        for page in doc:
            pix = page.get_pixmap(dpi=dpi)
            image = Image.open(io.BytesIO(pix.tobytes("png"))).convert("RGB")
            chunks.append(pytesseract.image_to_string(image, config="--oem 3 --psm 6"))
    return "\n".join(chunks).strip()


class PdfTextExtractor:
    """Direct text extraction, falling back to OCR when the PDF has no text layer."""

    def __init__(self, ocr_enabled: bool = True, ocr_dpi: int = 200):
        self.ocr_enabled = ocr_enabled
        self.ocr_dpi = ocr_dpi

    def extract(self, resume: ResumeFile) -> str:
        """Return cleaned text, or "" when nothing could be read."""
        text = ""
        try:
            text = _extract_pdf_text(resume.content)
        except Exception as e:
            logger.warning("PDF parsing failed for %s: %s => falling back to OCR.", resume.filename, e)

        if not text.strip() and self.ocr_enabled:
            text = self._perform_ocr(resume)

        return clean_text(text)

    def _perform_ocr(self, resume: ResumeFile) -> str:
        logger.info("No text layer in %s, running OCR", resume.filename)
        try:
            return _ocr_pdf(resume.content, dpi=self.ocr_dpi)
        except Exception as e:
            logger.error("OCR failed for file %s: %s", resume.filename, e)
            return ""
