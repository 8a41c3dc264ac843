import pymupdf

from resume_review.pdf.base import BasePdfExtractor
from resume_review.pdf.exceptions import PdfExtractionError


class PyMuPdfAdapter(BasePdfExtractor):
    """Reads résumé pages with PyMuPDF."""

    engine = "pymupdf"

    def read_pages(self, pdf_bytes: bytes) -> list[str]:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                return [page.get_text() for page in doc]
        except Exception as exc:
            raise PdfExtractionError(f"{self.engine} could not read the PDF: {exc}") from exc
