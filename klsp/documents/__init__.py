"""Open-document state."""

from klsp.documents.store import Document, DocumentStore

__all__ = [
    'Document',
    'DocumentStore',
]
