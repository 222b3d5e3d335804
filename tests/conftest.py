"""
Pytest configuration for Caselib Bundle
"""

import logging
import sys
from io import BytesIO
from pathlib import Path

import pytest
from PIL import Image
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen.canvas import Canvas

from caselib_bundle.fonts import default_font_provider, register_fonts
from caselib_bundle.models.collection import add_document_to_annex, append_annexes, create_annex


@pytest.fixture(autouse=True)
def configure_logging():
    """Configure logging for tests to avoid file handler issues."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter('%(name)s - %(levelname)s - %(message)s'))

    root_logger.addHandler(console_handler)
    root_logger.setLevel(logging.WARNING)

    yield

    root_logger.handlers.clear()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    import tempfile
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


def make_pdf(page_count=1, label="Document", pagesize=A4):
    """Build a small PDF with ``page_count`` labelled pages."""
    buffer = BytesIO()
    canvas = Canvas(buffer, pagesize=pagesize)
    for index in range(page_count):
        canvas.drawString(72, pagesize[1] - 72, f"{label} - page {index + 1}")
        canvas.showPage()
    canvas.save()
    return buffer.getvalue()


@pytest.fixture
def pdf_factory():
    """Factory for sample PDF bytes."""
    return make_pdf


@pytest.fixture
def sample_pdf():
    """Two-page sample PDF."""
    return make_pdf(2, "Sample")


@pytest.fixture
def corrupt_pdf():
    """Bytes that look like a PDF header but cannot be parsed."""
    return b"%PDF-1.4\n" + b"\x00garbage" * 64


@pytest.fixture
def png_logo():
    """PNG logo, twice as wide as it is tall."""
    buffer = BytesIO()
    Image.new("RGB", (200, 100), (30, 58, 138)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def gif_logo():
    buffer = BytesIO()
    Image.new("RGB", (20, 20), (255, 0, 0)).save(buffer, format="GIF")
    return buffer.getvalue()


@pytest.fixture(scope="session")
def fonts():
    """Bundled faces registered with ReportLab."""
    return register_fonts(default_font_provider())


@pytest.fixture
def two_annexes():
    """Annex 1 with a single document, annex 2 with two documents."""
    first = create_annex("contract_vanzare.pdf", make_pdf(2, "Contract"))
    second = create_annex("factura-1.pdf", make_pdf(1, "Factura"))
    second = add_document_to_annex(second, "chitanta.pdf", make_pdf(3, "Chitanta"))
    return append_annexes([], [first, second])
