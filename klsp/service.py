"""
Language service tying the document store to the analysis and checker.

The service owns all server-side state and is handed to the protocol layer
explicitly, so nothing here depends on module-level singletons. Every method
takes and returns plain values; none of them knows about JSON-RPC.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from pygls.uris import to_fs_path

from klsp.analysis.rename import rename_symbol
from klsp.analysis.resolver import resolve_definition
from klsp.core.config import ServerConfig
from klsp.core.exceptions import ExternalToolFailure, UnknownDocument
from klsp.diagnostics.checker import Checker
from klsp.diagnostics.translator import translate_checker_output
from klsp.documents.store import Document, DocumentStore
from klsp.lsp.models import EditSet, LspDiagnostic, LspLocation, LspPosition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DiagnosticsReport:
    """Diagnostics for one generation of a document, ready to publish."""
    uri: str
    generation: int
    diagnostics: List[LspDiagnostic]


class KLanguageService:
    """
    Implements the language features on top of a document store.

    Designed to be driven by the pygls server, but usable on its own from
    tests and the command line.
    """

    def __init__(
        self,
        config: Optional[ServerConfig] = None,
        store: Optional[DocumentStore] = None,
        checker: Optional[Checker] = None,
    ):
        self.config = config or ServerConfig()
        self.store = store or DocumentStore()
        self.checker = checker or Checker(self.config.checker_command, self.config.checker_timeout)

    def open_document(self, uri: str, text: str) -> Document:
        """Record a newly opened document."""
        return self.store.open(uri, text)

    def change_document(self, uri: str, text: str) -> Document:
        """Replace a document's text with the editor's latest full content."""
        return self.store.change(uri, text)

    def close_document(self, uri: str) -> None:
        """Forget a closed document."""
        self.store.close(uri)

    def definition(self, uri: str, position: LspPosition) -> Optional[LspLocation]:
        """
        Resolve the symbol under the cursor to its definition.

        Raises:
            UnknownDocument: If the document is not open
        """
        definition_range = resolve_definition(self.store, uri, position)
        if definition_range is None:
            return None
        return LspLocation(uri=uri, range=definition_range)

    def rename(self, uri: str, position: LspPosition, new_name: str) -> EditSet:
        """
        Compute the edits renaming the symbol under the cursor.

        Raises:
            UnknownDocument: If the document is not open
        """
        return rename_symbol(self.store, uri, position, new_name)

    def run_diagnostics(self, uri: str) -> Optional[DiagnosticsReport]:
        """
        Check a document with the external checker.

        Blocks until the checker exits, so callers on an event loop should run
        it in a worker thread.

        Returns:
            The report to publish, or None when nothing should be published:
            the document is not open, has no path on disk, the checker could
            not run, or the document changed while the checker was running.
        """
        try:
            document = self.store.get(uri)
        except UnknownDocument:
            logger.warning(f"Skipping diagnostics for unknown document {uri}")
            return None

        path = to_fs_path(uri)
        if not path:
            logger.warning(f"Skipping diagnostics for {uri}: no filesystem path")
            return None

        try:
            result = self.checker.check(path)
        except ExternalToolFailure as e:
            logger.error(f"Diagnostics pass for {uri} abandoned: {e}")
            return None

        if result.ok:
            diagnostics: List[LspDiagnostic] = []
        else:
            document_lines = [line.strip() for line in document.lines]
            diagnostics = translate_checker_output(result.stderr, document_lines)

        if not self.store.is_current(uri, document.generation):
            logger.info(f"Dropping stale diagnostics for {uri} (generation {document.generation})")
            return None

        return DiagnosticsReport(uri=uri, generation=document.generation, diagnostics=diagnostics)
