import io

import pdfplumber

from resume_review.pdf.base import BasePdfExtractor
from resume_review.pdf.exceptions import PdfExtractionError


class PdfPlumberAdapter(BasePdfExtractor):
    """Reads résumé pages with pdfplumber."""

    engine = "pdfplumber"

    def read_pages(self, pdf_bytes: bytes) -> list[str]:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                return [page.extract_text() or "" for page in pdf.pages]
        except Exception as exc:
            raise PdfExtractionError(f"{self.engine} could not read the PDF: {exc}") from exc
