import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional

from antlr4 import InputStream, FileStream, CommonTokenStream

from ast_nodes import Program
from parsing.ast_builder import AstBuilder
from parsing.error_listener import CollectingErrorListener, SyntaxDiagnostic
from semantic.diagnostics import Diagnostic, check_main
from semantic.semantic_visitor import analyze
from symbol_table.symbol_table import SymbolTable

log = logging.getLogger(__name__)


@dataclass
class CompilationResult:
    program: Optional[Program]
    table: SymbolTable
    diagnostics: List[Diagnostic] = field(default_factory=list)
    syntax_errors: List[SyntaxDiagnostic] = field(default_factory=list)
    tokens: list = field(default_factory=list)
    symbolic_names: List[str] = field(default_factory=list)

    @property
    def errors(self) -> List[str]:
        return [str(d) for d in self.diagnostics]

    @property
    def total_errors(self) -> int:
        return len(self.diagnostics) + len(self.syntax_errors)

    @property
    def ok(self) -> bool:
        return self.total_errors == 0


def _run(input_stream) -> CompilationResult:
    # generated from parsing/MiniLang.g4
    from parsing.MiniLangLexer import MiniLangLexer
    from parsing.MiniLangParser import MiniLangParser

    listener = CollectingErrorListener()
    lexer = MiniLangLexer(input_stream)
    lexer.removeErrorListeners()
    lexer.addErrorListener(listener)

    stream = CommonTokenStream(lexer)
    parser = MiniLangParser(stream)
    parser.removeErrorListeners()
    parser.addErrorListener(listener)

    tree = parser.program()
    stream.fill()
    log.debug("parsed %d tokens, %d syntax errors", len(stream.tokens), len(listener.errors))

    # analysis still runs after syntax errors to surface semantic findings too
    program = AstBuilder().visit(tree)
    if program is None:
        program = Program()
    result = analyze(program)

    missing_main = check_main(result.table)
    if missing_main is not None:
        result.diagnostics.append(missing_main)

    return CompilationResult(
        program=program,
        table=result.table,
        diagnostics=result.diagnostics,
        syntax_errors=list(listener.errors),
        tokens=list(stream.tokens),
        symbolic_names=list(lexer.symbolicNames),
    )


def compile_source(code: str) -> CompilationResult:
    return _run(InputStream(code))


def compile_file(path: str) -> CompilationResult:
    if not os.path.exists(path):
        raise FileNotFoundError(path)
    return _run(FileStream(path, encoding="utf-8"))
