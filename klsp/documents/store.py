"""
In-memory store of open documents.

Holds the full text of every document the editor has open, keyed by URI.
Writers are serialized by a single lock and readers get immutable snapshots,
so no caller ever holds a reference into the shared table.
"""

import itertools
import logging
import threading
from dataclasses import dataclass
from typing import Dict, List

from klsp.core.exceptions import UnknownDocument

# Configure logging
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Document:
    """
    Snapshot of an open document.

    Attributes:
        uri: Document identifier as sent by the editor
        text: Full document text at the time of the snapshot
        generation: Store-wide sequence number of this text; higher is newer
    """

    uri: str
    text: str
    generation: int

    @property
    def lines(self) -> List[str]:
        """Lines of the text split on line feeds."""
        return self.text.split("\n")

    def line(self, index: int) -> str:
        """Return a single line, or "" when the index is out of range."""
        lines = self.lines
        if 0 <= index < len(lines):
            return lines[index]
        return ""


class DocumentStore:
    """Table of open documents, safe to use from several threads."""

    def __init__(self):
        """Initialize an empty store."""
        self._documents: Dict[str, Document] = {}
        self._lock = threading.Lock()
        self._generations = itertools.count(1)

    def open(self, uri: str, text: str) -> Document:
        """Store a newly opened document and return its snapshot."""
        with self._lock:
            document = Document(uri=uri, text=text, generation=next(self._generations))
            self._documents[uri] = document
        logger.info(f"Opened {uri} (generation {document.generation}, {len(text)} chars)")
        return document

    def change(self, uri: str, text: str) -> Document:
        """
        Replace the full text of a document.

        A change for a document that was never opened stores it anyway.
        """
        with self._lock:
            if uri not in self._documents:
                logger.warning(f"Change received for unopened document {uri}; storing it")
            document = Document(uri=uri, text=text, generation=next(self._generations))
            self._documents[uri] = document
        logger.debug(f"Changed {uri} (generation {document.generation})")
        return document

    def close(self, uri: str) -> None:
        """Forget a document. Closing an unknown document does nothing."""
        with self._lock:
            removed = self._documents.pop(uri, None)
        if removed is None:
            logger.debug(f"Close received for unknown document {uri}")
        else:
            logger.info(f"Closed {uri}")

    def get(self, uri: str) -> Document:
        """
        Return the current snapshot of a document.

        Raises:
            UnknownDocument: If the document is not open
        """
        with self._lock:
            document = self._documents.get(uri)
        if document is None:
            raise UnknownDocument(uri)
        return document

    def is_current(self, uri: str, generation: int) -> bool:
        """Check whether a generation is still the latest text of an open document."""
        with self._lock:
            document = self._documents.get(uri)
        return document is not None and document.generation == generation

    def __contains__(self, uri: str) -> bool:
        with self._lock:
            return uri in self._documents

    def __len__(self) -> int:
        with self._lock:
            return len(self._documents)
