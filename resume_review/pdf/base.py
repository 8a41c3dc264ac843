import re
from abc import ABC, abstractmethod

_BLANK_RUN_RE = re.compile(r"\n{3,}")


class BasePdfExtractor(ABC):
    """Contract for all PDF text extraction adapters.

    Adapters read raw page text; `extract` joins the pages and tidies the
    lines so section headings stand alone on their own line.
    """

    engine: str = ""

    def extract(self, pdf_bytes: bytes) -> str:
        """Extract plain text from PDF bytes.

        Returns:
            Page texts joined by newlines, trailing spaces removed from every
            line and runs of blank lines collapsed to one.

        Raises:
            PdfExtractionError: if extraction fails for any reason.
        """
        pages = self.read_pages(pdf_bytes)
        lines = "\n".join(pages).replace("\x0c", "\n").split("\n")
        text = "\n".join(line.rstrip() for line in lines)
        return _BLANK_RUN_RE.sub("\n\n", text).strip()

    @abstractmethod
    def read_pages(self, pdf_bytes: bytes) -> list[str]:
        """Return the raw text of every page, in page order."""
