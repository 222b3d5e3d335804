"""
Tests for PDF import.
"""

from io import BytesIO

import pytest
from pypdf import PdfWriter

from caselib_bundle.exceptions import DocumentImportError
from caselib_bundle.importers import DocumentImported, ImportFailed, import_pdf


class TestImportPdf:

    def test_valid_pdf(self, sample_pdf):
        result = import_pdf(sample_pdf, "sample.pdf")
        assert isinstance(result, DocumentImported)
        assert result.page_count == 2
        assert result.filename == "sample.pdf"

    @pytest.mark.parametrize("data", [None, b""])
    def test_missing_content(self, data):
        result = import_pdf(data, "lipsa.pdf")
        assert isinstance(result, ImportFailed)
        assert result.error.message == "File content is missing"

    def test_not_a_pdf(self):
        result = import_pdf(b"PK\x03\x04 zip archive", "arhiva.zip")
        assert isinstance(result, ImportFailed)
        assert isinstance(result.error, DocumentImportError)
        assert result.error.filename == "arhiva.zip"

    def test_corrupt_pdf(self, corrupt_pdf):
        result = import_pdf(corrupt_pdf, "stricat.pdf")
        assert isinstance(result, ImportFailed)
        assert "stricat.pdf" == result.filename

    def test_password_protected(self, sample_pdf):
        writer = PdfWriter(clone_from=BytesIO(sample_pdf))
        writer.encrypt(user_password="secret", owner_password="owner", algorithm="RC4-128")
        buffer = BytesIO()
        writer.write(buffer)

        result = import_pdf(buffer.getvalue(), "protejat.pdf")
        assert isinstance(result, ImportFailed)
        assert result.error.message == "PDF is password protected"

    def test_owner_password_only_opens(self, sample_pdf):
        writer = PdfWriter(clone_from=BytesIO(sample_pdf))
        writer.encrypt(user_password="", owner_password="owner", algorithm="RC4-128")
        buffer = BytesIO()
        writer.write(buffer)

        result = import_pdf(buffer.getvalue(), "restrictionat.pdf")
        assert isinstance(result, DocumentImported)
        assert result.page_count == 2
