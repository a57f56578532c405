# server/handlers.py
from __future__ import annotations

import re
from typing import Iterable

from lsprotocol.types import Diagnostic, DiagnosticSeverity, Range, Position

# Para resaltar solo el nombre entre comillas si existe: 'x', 'main', etc.
_SNIPPET_RE = re.compile(r"'([^']+)'")

SOURCE = "minilang"


def _range_for(lines: list[str], line_no, message: str) -> Range:
    # 1-based -> 0-based; diagnostics without a line go to the top of the file
    line_idx = max((line_no or 1) - 1, 0)
    start_char = 0
    end_char = len(lines[line_idx]) if line_idx < len(lines) else 0

    m = _SNIPPET_RE.search(message)
    if m and line_idx < len(lines):
        col = lines[line_idx].find(m.group(1))
        if col != -1:
            start_char = col
            end_char = col + len(m.group(1))

    return Range(
        start=Position(line=line_idx, character=start_char),
        end=Position(line=line_idx, character=end_char),
    )


def build_diagnostics(text: str, semantic: Iterable, syntax: Iterable = ()) -> list[Diagnostic]:
    """
    Convert semantic Diagnostics and SyntaxDiagnostics into LSP diagnostics
    for the document `text`.
    """
    lines = text.splitlines()
    out: list[Diagnostic] = []

    for e in syntax:
        line_idx = max(e.line - 1, 0)
        out.append(Diagnostic(
            range=Range(
                start=Position(line=line_idx, character=e.column),
                end=Position(line=line_idx, character=e.column + max(len(e.text), 1)),
            ),
            message=e.msg,
            severity=DiagnosticSeverity.Error,
            source=SOURCE,
        ))

    for d in semantic:
        out.append(Diagnostic(
            range=_range_for(lines, d.line, d.message),
            message=d.message,
            severity=DiagnosticSeverity.Error,
            source=SOURCE,
        ))

    return out
