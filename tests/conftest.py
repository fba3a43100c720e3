import io
import json

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from docanalyzer.ingestion.models import UploadedFile


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Quarterly report prepared by J. Doe for Acme")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_txt_file() -> UploadedFile:
    """A 2KB plain-text upload."""
    content = ("Quarterly report. " * 120).encode("utf-8")[:2048]
    return UploadedFile(
        filename="report.txt",
        content=content,
        declared_mime_type="text/plain",
    )


@pytest.fixture()
def json_model_response() -> str:
    return json.dumps({"summary": "A report.", "author": "J. Doe", "entity": "Acme"})
