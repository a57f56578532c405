# server/server.py
# --- bootstrap sys.path para que los módulos de src/ sean importables ---
import os, sys
_THIS_DIR = os.path.dirname(os.path.abspath(__file__))          # .../server
_REPO_ROOT = os.path.abspath(os.path.join(_THIS_DIR, os.pardir))# repo root
_SRC_DIR = os.path.join(_REPO_ROOT, "src")
if _SRC_DIR not in sys.path:
    sys.path.insert(0, _SRC_DIR)
if _THIS_DIR not in sys.path:
    sys.path.insert(0, _THIS_DIR)

import logging

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_SAVE,
    DidOpenTextDocumentParams,
    DidChangeTextDocumentParams,
    DidSaveTextDocumentParams,
)
from pygls.server import LanguageServer

from handlers import build_diagnostics
from compiler import compile_source
from semantic.diagnostics import Diagnostic

logging.basicConfig(filename="lsp_server.log", level=logging.DEBUG, filemode="w")
log = logging.getLogger(__name__)

ls = LanguageServer("minilang-ls", "v0.1")


def validate_and_publish(uri: str, code: str):
    try:
        log.debug("Starting parse/validate for uri=%s (code length=%d)", uri, len(code or ""))
        result = compile_source(code or "")
        diagnostics = build_diagnostics(code or "", result.diagnostics, result.syntax_errors)
    except Exception as ex:
        log.exception("validate error")
        diagnostics = build_diagnostics(code or "", [Diagnostic(None, f"Parser/server error: {ex}")])

    ls.publish_diagnostics(uri, diagnostics)
    log.debug("Published %d diagnostics for %s", len(diagnostics), uri)


@ls.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(server: LanguageServer, params: DidOpenTextDocumentParams):
    validate_and_publish(params.text_document.uri, params.text_document.text)


@ls.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(server: LanguageServer, params: DidChangeTextDocumentParams):
    doc = server.workspace.get_text_document(params.text_document.uri)
    validate_and_publish(doc.uri, doc.source)


@ls.feature(TEXT_DOCUMENT_DID_SAVE)
def did_save(server: LanguageServer, params: DidSaveTextDocumentParams):
    doc = server.workspace.get_text_document(params.text_document.uri)
    validate_and_publish(doc.uri, doc.source)


if __name__ == "__main__":
    try:
        ls.start_io()
    except Exception:
        log.exception("LSP server crashed")
