class DocumentLoadError(Exception):
    """Base exception for document loading errors."""


class UnsupportedDocumentTypeError(DocumentLoadError):
    """Raised when a document has a file type the loader cannot read."""
