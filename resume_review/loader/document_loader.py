from pathlib import Path

from resume_review.loader.exceptions import DocumentLoadError, UnsupportedDocumentTypeError
from resume_review.logging.logger import Log
from resume_review.pdf.base import BasePdfExtractor
from resume_review.pdf.exceptions import PdfExtractionError


class DocumentLoader:
    """Reads the text of a résumé or target description from disk."""

    TEXT_SUFFIXES = frozenset({".txt", ".md", ".text"})

    def __init__(self, pdf_extractor: BasePdfExtractor) -> None:
        self._pdf_extractor = pdf_extractor

    def load(self, path: Path) -> str:
        """Return the document text, normalized to '\\n' line endings.

        Raises:
            FileNotFoundError: if the file does not exist.
            UnsupportedDocumentTypeError: if the suffix is neither text nor PDF.
            DocumentLoadError: if the file cannot be read or decoded.
        """
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        suffix = path.suffix.lower()
        if suffix == ".pdf":
            text = self._load_pdf(path)
        elif suffix in self.TEXT_SUFFIXES:
            text = self._load_text(path)
        else:
            raise UnsupportedDocumentTypeError(
                f"Unsupported document type '{suffix}' for {path}"
            )
        Log.info(f"Loaded {len(text)} chars from {path.name}")
        return text.replace("\r\n", "\n").replace("\r", "\n")

    def _load_pdf(self, path: Path) -> str:
        try:
            return self._pdf_extractor.extract(path.read_bytes())
        except PdfExtractionError as exc:
            raise DocumentLoadError(str(exc)) from exc
        except OSError as exc:
            raise DocumentLoadError(f"Failed to read {path}: {exc}") from exc

    @staticmethod
    def _load_text(path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise DocumentLoadError(f"Failed to read {path}: {exc}") from exc
