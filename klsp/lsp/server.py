"""
LSP server for K documents.

Adapts the language service to pygls: registers the feature handlers,
converts between lsprotocol types and the package's own models, and runs the
blocking checker off the event loop.
"""

import asyncio
import logging
from typing import List, Optional

from lsprotocol import types
from pygls.exceptions import JsonRpcInvalidParams
from pygls.lsp.server import LanguageServer

from klsp.core.config import ServerConfig
from klsp.core.exceptions import UnknownDocument
from klsp.lsp.models import (
    EditSet,
    LspDiagnostic,
    LspLocation,
    LspPosition,
    LspRange,
    LspTextEdit,
)
from klsp.service import KLanguageService

# Configure logging
logger = logging.getLogger(__name__)


class KLanguageServer(LanguageServer):
    """pygls server carrying the language service it delegates to."""

    def __init__(self, service: KLanguageService):
        config = service.config
        super().__init__(
            config.server_name,
            config.server_version,
            text_document_sync_kind=types.TextDocumentSyncKind.Full,
        )
        self.service = service


def from_lsp_position(position: types.Position) -> LspPosition:
    """Convert an lsprotocol position to the internal model."""
    return LspPosition(line=position.line, character=position.character)


def to_lsp_position(position: LspPosition) -> types.Position:
    """Convert an internal position to lsprotocol."""
    return types.Position(line=position.line, character=position.character)


def to_lsp_range(span: LspRange) -> types.Range:
    """Convert an internal range to lsprotocol."""
    return types.Range(start=to_lsp_position(span.start), end=to_lsp_position(span.end))


def to_lsp_location(location: LspLocation) -> types.Location:
    """Convert an internal location to lsprotocol."""
    return types.Location(uri=location.uri, range=to_lsp_range(location.range))


def to_lsp_text_edit(edit: LspTextEdit) -> types.TextEdit:
    """Convert an internal text edit to lsprotocol."""
    return types.TextEdit(range=to_lsp_range(edit.range), new_text=edit.new_text)


def to_workspace_edit(edit_set: EditSet) -> types.WorkspaceEdit:
    """Convert an edit set to a WorkspaceEdit using the plain ``changes`` map."""
    return types.WorkspaceEdit(
        changes={
            uri: [to_lsp_text_edit(edit) for edit in edits]
            for uri, edits in edit_set.items()
        }
    )


def to_lsp_diagnostic(diagnostic: LspDiagnostic) -> types.Diagnostic:
    """Convert an internal diagnostic to lsprotocol."""
    return types.Diagnostic(
        range=to_lsp_range(diagnostic.range),
        message=diagnostic.message,
        severity=types.DiagnosticSeverity(int(diagnostic.severity)),
        source=diagnostic.source,
    )


def _publish(ls: KLanguageServer, uri: str, diagnostics: List[LspDiagnostic]) -> None:
    ls.text_document_publish_diagnostics(
        types.PublishDiagnosticsParams(
            uri=uri,
            diagnostics=[to_lsp_diagnostic(d) for d in diagnostics],
        )
    )


async def publish_diagnostics(ls: KLanguageServer, uri: str) -> None:
    """Run the checker in a worker thread and publish the result if still current."""
    report = await asyncio.to_thread(ls.service.run_diagnostics, uri)
    if report is None:
        return
    logger.debug(f"Publishing {len(report.diagnostics)} diagnostics for {uri}")
    _publish(ls, report.uri, report.diagnostics)


async def did_open(ls: KLanguageServer, params: types.DidOpenTextDocumentParams) -> None:
    """Store the opened document and check it."""
    document = params.text_document
    ls.service.open_document(document.uri, document.text)
    await publish_diagnostics(ls, document.uri)


async def did_change(ls: KLanguageServer, params: types.DidChangeTextDocumentParams) -> None:
    """Replace the document with the last full-text change and check it again."""
    uri = params.text_document.uri
    if not params.content_changes:
        logger.warning(f"Change notification for {uri} carried no content")
        return
    ls.service.change_document(uri, params.content_changes[-1].text)
    await publish_diagnostics(ls, uri)


def did_close(ls: KLanguageServer, params: types.DidCloseTextDocumentParams) -> None:
    """Forget the document and clear its diagnostics in the editor."""
    uri = params.text_document.uri
    ls.service.close_document(uri)
    _publish(ls, uri, [])


def definition(ls: KLanguageServer, params: types.DefinitionParams) -> Optional[types.Location]:
    """Answer go-to-definition for the symbol under the cursor."""
    uri = params.text_document.uri
    try:
        location = ls.service.definition(uri, from_lsp_position(params.position))
    except UnknownDocument as e:
        logger.error(f"Definition requested for {uri}: {e}")
        raise JsonRpcInvalidParams(str(e)) from e

    if location is None:
        return None
    return to_lsp_location(location)


def rename(ls: KLanguageServer, params: types.RenameParams) -> types.WorkspaceEdit:
    """Rename every whole-token occurrence of the symbol under the cursor."""
    uri = params.text_document.uri
    try:
        edit_set = ls.service.rename(uri, from_lsp_position(params.position), params.new_name)
    except UnknownDocument as e:
        logger.error(f"Rename requested for {uri}: {e}")
        raise JsonRpcInvalidParams(str(e)) from e
    return to_workspace_edit(edit_set)


def create_server(config: Optional[ServerConfig] = None) -> KLanguageServer:
    """
    Build a server with all features registered.

    Args:
        config: Server settings; read from the environment when omitted

    Returns:
        A server ready for start_io() or start_tcp()
    """
    config = config or ServerConfig.from_env()
    server = KLanguageServer(KLanguageService(config))

    server.feature(types.TEXT_DOCUMENT_DID_OPEN)(did_open)
    server.feature(types.TEXT_DOCUMENT_DID_CHANGE)(did_change)
    server.feature(types.TEXT_DOCUMENT_DID_CLOSE)(did_close)
    server.feature(types.TEXT_DOCUMENT_DEFINITION)(definition)
    server.feature(types.TEXT_DOCUMENT_RENAME)(rename)

    logger.info(f"Created {config.server_name} {config.server_version} (checker: {' '.join(config.checker_command)})")
    return server
