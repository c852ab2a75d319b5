"""
Tests for the pygls adapter in klsp/lsp/server.py.

Handlers are called directly with a stand-in server object that records the
diagnostics it is asked to publish.
"""

import asyncio
from types import SimpleNamespace
from typing import List

import pytest
from lsprotocol import types
from pygls.exceptions import JsonRpcInvalidParams

from klsp.core.config import ServerConfig
from klsp.diagnostics.checker import Checker, CheckerResult
from klsp.lsp.models import (
    DiagnosticSeverity,
    LspDiagnostic,
    LspLocation,
    LspRange,
    LspTextEdit,
)
from klsp.lsp.server import (
    KLanguageServer,
    create_server,
    definition,
    did_change,
    did_close,
    did_open,
    rename,
    to_lsp_diagnostic,
    to_lsp_location,
    to_workspace_edit,
)
from klsp.service import KLanguageService

URI = "file:///tmp/server/example.k"


class StubChecker(Checker):
    """Checker returning a fixed result."""

    def __init__(self, result: CheckerResult):
        super().__init__(["stub-k"])
        self.result = result

    def check(self, path: str) -> CheckerResult:
        return self.result


class RecordingServer:
    """Minimal stand-in for KLanguageServer."""

    def __init__(self, result: CheckerResult = CheckerResult(0, "", "")):
        self.service = KLanguageService(ServerConfig(), checker=StubChecker(result))
        self.published: List[types.PublishDiagnosticsParams] = []

    def text_document_publish_diagnostics(self, params: types.PublishDiagnosticsParams) -> None:
        self.published.append(params)


def open_params(text: str) -> types.DidOpenTextDocumentParams:
    return types.DidOpenTextDocumentParams(
        text_document=types.TextDocumentItem(uri=URI, language_id="k", version=1, text=text)
    )


def change_params(text: str):
    return SimpleNamespace(
        text_document=types.VersionedTextDocumentIdentifier(uri=URI, version=2),
        content_changes=[SimpleNamespace(text=text)],
    )


class TestHandlers:
    """Feature handlers registered on the server."""

    def test_did_open_publishes_empty_diagnostics_for_valid_file(self):
        ls = RecordingServer()

        asyncio.run(did_open(ls, open_params("x: 1\n")))

        assert ls.service.store.get(URI).text == "x: 1\n"
        assert len(ls.published) == 1
        assert ls.published[0].uri == URI
        assert ls.published[0].diagnostics == []

    def test_did_open_publishes_checker_error(self):
        ls = RecordingServer(CheckerResult(1, "", "y: x +\n      ^\n"))

        asyncio.run(did_open(ls, open_params("x: 1\ny: x +\n")))

        diagnostic = ls.published[0].diagnostics[0]
        assert diagnostic.range == types.Range(
            start=types.Position(line=1, character=6),
            end=types.Position(line=1, character=7),
        )
        assert diagnostic.severity == types.DiagnosticSeverity.Error
        assert diagnostic.source == "k-language-server"

    def test_did_change_replaces_text(self):
        ls = RecordingServer()
        asyncio.run(did_open(ls, open_params("x: 1\n")))

        asyncio.run(did_change(ls, change_params("y: 2\n")))

        assert ls.service.store.get(URI).text == "y: 2\n"
        assert len(ls.published) == 2

    def test_did_change_without_content_is_ignored(self):
        ls = RecordingServer()
        asyncio.run(did_open(ls, open_params("x: 1\n")))
        params = change_params("unused")
        params.content_changes = []

        asyncio.run(did_change(ls, params))

        assert ls.service.store.get(URI).text == "x: 1\n"
        assert len(ls.published) == 1

    def test_did_close_clears_diagnostics(self):
        ls = RecordingServer()
        asyncio.run(did_open(ls, open_params("x: 1\n")))

        did_close(ls, types.DidCloseTextDocumentParams(text_document=types.TextDocumentIdentifier(uri=URI)))

        assert URI not in ls.service.store
        assert ls.published[-1].diagnostics == []

    def test_definition(self):
        ls = RecordingServer()
        ls.service.open_document(URI, "x: 1\ny: x + 2\n")
        params = types.DefinitionParams(
            text_document=types.TextDocumentIdentifier(uri=URI),
            position=types.Position(line=1, character=3),
        )

        location = definition(ls, params)

        assert location == types.Location(
            uri=URI,
            range=types.Range(
                start=types.Position(line=0, character=0),
                end=types.Position(line=0, character=1),
            ),
        )

    def test_definition_not_found(self):
        ls = RecordingServer()
        ls.service.open_document(URI, "x: 1\n")
        params = types.DefinitionParams(
            text_document=types.TextDocumentIdentifier(uri=URI),
            position=types.Position(line=0, character=1),
        )

        assert definition(ls, params) is None

    def test_definition_unknown_document(self):
        ls = RecordingServer()
        params = types.DefinitionParams(
            text_document=types.TextDocumentIdentifier(uri=URI),
            position=types.Position(line=0, character=0),
        )

        with pytest.raises(JsonRpcInvalidParams):
            definition(ls, params)

    def test_rename(self):
        ls = RecordingServer()
        ls.service.open_document(URI, "x: 1\ny: x + 2\n")
        params = types.RenameParams(
            text_document=types.TextDocumentIdentifier(uri=URI),
            position=types.Position(line=0, character=0),
            new_name="z",
        )

        edit = rename(ls, params)

        assert [e.new_text for e in edit.changes[URI]] == ["z", "z"]
        assert [e.range.start.line for e in edit.changes[URI]] == [0, 1]

    def test_rename_noop(self):
        ls = RecordingServer()
        ls.service.open_document(URI, "x: 1\n")
        params = types.RenameParams(
            text_document=types.TextDocumentIdentifier(uri=URI),
            position=types.Position(line=0, character=1),
            new_name="z",
        )

        assert rename(ls, params).changes == {}

    def test_rename_unknown_document(self):
        ls = RecordingServer()
        params = types.RenameParams(
            text_document=types.TextDocumentIdentifier(uri=URI),
            position=types.Position(line=0, character=0),
            new_name="z",
        )

        with pytest.raises(JsonRpcInvalidParams):
            rename(ls, params)


class TestConversions:
    """Conversion from internal models to lsprotocol types."""

    def test_location(self):
        location = to_lsp_location(LspLocation(URI, LspRange.on_line(3, 0, 4)))

        assert location.uri == URI
        assert location.range.start == types.Position(line=3, character=0)
        assert location.range.end == types.Position(line=3, character=4)

    def test_workspace_edit(self):
        edit = to_workspace_edit({URI: [LspTextEdit(LspRange.on_line(1, 2, 3), "new")]})

        assert edit.changes == {
            URI: [
                types.TextEdit(
                    range=types.Range(
                        start=types.Position(line=1, character=2),
                        end=types.Position(line=1, character=3),
                    ),
                    new_text="new",
                )
            ]
        }

    def test_diagnostic(self):
        diagnostic = to_lsp_diagnostic(
            LspDiagnostic(LspRange.on_line(0, 1, 2), DiagnosticSeverity.ERROR, "k-language-server", "boom")
        )

        assert diagnostic.severity == types.DiagnosticSeverity.Error
        assert diagnostic.message == "boom"
        assert diagnostic.source == "k-language-server"


def test_create_server():
    """create_server wires a service configured from the given settings."""
    server = create_server(ServerConfig(checker_command=["k"], checker_timeout=1))

    assert isinstance(server, KLanguageServer)
    assert server.name == "K Language Server"
    assert server.service.checker.command == ["k"]
