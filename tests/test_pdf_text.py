"""Tests for résumé validation and PDF text extraction."""

import pytest

from resume_screener.errors import FileSkipped, InvalidResumeFile
from resume_screener.extraction import pdf_text
from resume_screener.extraction.models import ResumeFile
from resume_screener.extraction.pdf_text import PdfTextExtractor, validate_resume_file


def resume(filename="cv.pdf", content=b"%PDF-1.4 ...") -> ResumeFile:
    return ResumeFile(filename=filename, content=content)


class TestResumeFile:
    def test_suffix_lowercased(self):
        assert resume("CV.PDF").suffix == ".pdf"

    def test_from_path(self, tmp_path):
        path = tmp_path / "jane.pdf"
        path.write_bytes(b"data")
        loaded = ResumeFile.from_path(str(path))
        assert loaded.filename == "jane.pdf"
        assert loaded.size == 4

    def test_from_missing_path(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ResumeFile.from_path(str(tmp_path / "missing.pdf"))


class TestValidateResumeFile:
    def test_accepts_pdf(self):
        validate_resume_file(resume("CV.PDF"))

    def test_rejects_missing(self):
        with pytest.raises(InvalidResumeFile, match="PDF required"):
            validate_resume_file(None)

    def test_rejects_non_pdf(self):
        with pytest.raises(InvalidResumeFile, match="Only PDF allowed"):
            validate_resume_file(resume("cv.docx"))

    def test_rejects_oversized(self):
        big = resume(content=b"x" * (2 * 1024 * 1024 + 1))
        with pytest.raises(InvalidResumeFile, match="Max size 2MB"):
            validate_resume_file(big, max_bytes=2 * 1024 * 1024)

    def test_is_a_file_skip(self):
        assert issubclass(InvalidResumeFile, FileSkipped)


class TestPdfTextExtractor:
    def test_direct_text_is_cleaned(self, monkeypatch):
        monkeypatch.setattr(pdf_text, "_extract_pdf_text", lambda content: "Jane Doe\n\nPython   SQL\r\n")
        monkeypatch.setattr(pdf_text, "_ocr_pdf", lambda *a, **kw: pytest.fail("OCR should not run"))
        assert PdfTextExtractor().extract(resume()) == "Jane Doe Python SQL"

    def test_falls_back_to_ocr_when_no_text(self, monkeypatch):
        monkeypatch.setattr(pdf_text, "_extract_pdf_text", lambda content: "  ")
        monkeypatch.setattr(pdf_text, "_ocr_pdf", lambda content, dpi=200: "Scanned\ntext")
        assert PdfTextExtractor().extract(resume()) == "Scanned text"

    def test_falls_back_to_ocr_on_parse_error(self, monkeypatch):
        def broken(content):
            raise ValueError("EOF marker not found")

        monkeypatch.setattr(pdf_text, "_extract_pdf_text", broken)
        monkeypatch.setattr(pdf_text, "_ocr_pdf", lambda content, dpi=200: "from ocr")
        assert PdfTextExtractor().extract(resume()) == "from ocr"

    def test_ocr_disabled(self, monkeypatch):
        monkeypatch.setattr(pdf_text, "_extract_pdf_text", lambda content: "")
        monkeypatch.setattr(pdf_text, "_ocr_pdf", lambda *a, **kw: pytest.fail("OCR should not run"))
        assert PdfTextExtractor(ocr_enabled=False).extract(resume()) == ""

    def test_ocr_failure_gives_empty_text(self, monkeypatch):
        def no_tesseract(content, dpi=200):
            raise OSError("tesseract is not installed")

        monkeypatch.setattr(pdf_text, "_extract_pdf_text", lambda content: "")
        monkeypatch.setattr(pdf_text, "_ocr_pdf", no_tesseract)
        assert PdfTextExtractor().extract(resume()) == ""
