from dataclasses import dataclass
from typing import List

from antlr4.error.ErrorListener import ErrorListener


@dataclass
class SyntaxDiagnostic:
    """Contenedor para los detalles de un error de sintaxis."""
    line: int
    column: int
    text: str
    msg: str

    def __str__(self):
        return f"[line {self.line}] syntax error near '{self.text}': {self.msg}"


class CollectingErrorListener(ErrorListener):
    """Collects lexer and parser errors instead of printing them to stderr."""

    def __init__(self):
        super().__init__()
        self.errors: List[SyntaxDiagnostic] = []

    def syntaxError(self, recognizer, offendingSymbol, line, column, msg, e):
        text = getattr(offendingSymbol, "text", None) or "<EOF>"
        self.errors.append(SyntaxDiagnostic(line, column, text, msg))

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def report(self) -> str:
        return "\n".join(str(e) for e in self.errors)
