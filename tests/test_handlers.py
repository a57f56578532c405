# tests/test_handlers.py
from lsprotocol.types import DiagnosticSeverity

from handlers import build_diagnostics, SOURCE
from parsing.error_listener import SyntaxDiagnostic
from semantic.diagnostics import Diagnostic

TEXT = "int x = 1;\nint main() {\n    y = 2;\n    return 0;\n}\n"


def test_semantic_diagnostic_highlights_quoted_name():
    [d] = build_diagnostics(TEXT, [Diagnostic(3, "Variable 'y' was not declared before use.")])
    assert d.range.start.line == 2
    assert (d.range.start.character, d.range.end.character) == (4, 5)
    assert d.severity == DiagnosticSeverity.Error
    assert d.source == SOURCE

def test_semantic_diagnostic_without_snippet_spans_line():
    [d] = build_diagnostics(TEXT, [Diagnostic(4, "Return outside of a function.")])
    assert d.range.start.line == 3
    assert d.range.start.character == 0
    assert d.range.end.character == len("    return 0;")

def test_program_level_diagnostic_goes_to_first_line():
    [d] = build_diagnostics(TEXT, [Diagnostic(None, "Function 'main' is missing.")])
    assert d.range.start.line == 0
    # 'main' is not on line 1, so the whole line is used
    assert (d.range.start.character, d.range.end.character) == (0, len("int x = 1;"))

def test_line_past_end_of_document():
    [d] = build_diagnostics("", [Diagnostic(7, "Variable 'q' is not declared.")])
    assert d.range.start.line == 6
    assert d.range.end.character == 0

def test_syntax_diagnostics_come_first():
    out = build_diagnostics(
        TEXT,
        [Diagnostic(3, "Variable 'y' was not declared before use.")],
        [SyntaxDiagnostic(2, 11, "{", "extraneous input '{'")],
    )
    assert [d.message for d in out] == [
        "extraneous input '{'",
        "Variable 'y' was not declared before use.",
    ]
    s = out[0]
    assert (s.range.start.line, s.range.start.character, s.range.end.character) == (1, 11, 12)
