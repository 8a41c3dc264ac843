import io

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

SAMPLE_RESUME = """Jane Doe
jane@example.com
SUMMARY
Backend engineer with eight years of experience.
EXPERIENCE
Acme Corp - Senior Engineer
- Built billing services in Python
EDUCATION
BSc Computer Science
SKILLS
Python, PostgreSQL, Kubernetes"""

SAMPLE_TARGET = (
    "Senior Python engineer at Globex. Applications are handled through Greenhouse."
)


@pytest.fixture()
def sample_resume() -> str:
    return SAMPLE_RESUME


@pytest.fixture()
def sample_target() -> str:
    return SAMPLE_TARGET


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Hello PDF World")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def resume_pdf_bytes() -> bytes:
    """Generate a one-page résumé PDF with one line per heading and entry."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    y = 720
    for line in SAMPLE_RESUME.split("\n"):
        c.drawString(72, y, line)
        y -= 18
    c.save()
    return buf.getvalue()
