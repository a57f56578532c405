"""
Plain-text reports written by the CLI driver: tokens, global variables,
functions and the final error summary.
"""
import os
from typing import Iterable, List, Sequence

from semantic.diagnostics import Diagnostic
from symbol_table.symbol_table import SymbolTable

SEPARATOR = "-----------------------------"
SUCCESS = "Compilation succeeded! No errors found."


def _yes_no(flag: bool) -> str:
    return "YES" if flag else "NO"


def _init(text) -> str:
    return text if text is not None else "null"


def format_tokens(tokens: Iterable, symbolic_names: Sequence[str]) -> str:
    lines = []
    for tok in tokens:
        if tok.type <= 0:  # EOF
            continue
        type_name = symbolic_names[tok.type] if tok.type < len(symbolic_names) else str(tok.type)
        text = (tok.text or "").replace("\n", "\\n").replace("\r", "")
        lines.append(f"<Token: {type_name}, Lexeme: '{text}', Line: {tok.line}>")
    return "\n".join(lines)


def format_global_variables(table: SymbolTable) -> str:
    lines = ["--- Global Variables ---"]
    for v in table.global_variables:
        lines.append(f"Name: {v.name}, Type: {v.type}, Initialized with: {_init(v.init_text)}, Const: {v.is_const}")
    return "\n".join(lines)


def format_functions(table: SymbolTable) -> str:
    lines = ["--- Functions ---"]
    for f in table.functions.values():
        lines.append(f"Name: {f.name}")
        lines.append(f"  Return Type: {f.type}")
        lines.append(f"  Main: {_yes_no(f.is_main)}, Recursive: {_yes_no(f.is_recursive)}")

        lines.append("  Parameters:")
        if not f.parameters:
            lines.append("    (none)")
        for p in f.parameters:
            lines.append(f"    {p.type} {p.name}")

        lines.append("  Local Variables:")
        if not f.local_variables:
            lines.append("    (none)")
        for lv in f.local_variables:
            lines.append(f"    {lv.type} {lv.name} (Init: {_init(lv.init_text)})")

        lines.append("  Control Structures:")
        if not f.control_structures:
            lines.append("    (none)")
        for cs in f.control_structures:
            lines.append(f"    <{cs}>")

        lines.append(SEPARATOR)
    return "\n".join(lines)


def format_errors(diagnostics: List[Diagnostic], syntax_error_count: int = 0) -> str:
    total = len(diagnostics) + syntax_error_count
    if total == 0:
        return SUCCESS
    lines = [f"Found errors ({total}):"]
    if syntax_error_count > 0:
        lines.append("Syntax errors detected (see the console output for the parser details).")
    lines.extend(str(d) for d in diagnostics)
    return "\n".join(lines)


def write_reports(result, out_dir: str = ".") -> dict:
    """Write the four report files for a CompilationResult; returns name -> path."""
    os.makedirs(out_dir, exist_ok=True)
    contents = {
        "tokens": ("tokens.txt", format_tokens(result.tokens, result.symbolic_names)),
        "global_vars": ("global_vars.txt", format_global_variables(result.table)),
        "functions": ("functions.txt", format_functions(result.table)),
        "errors": ("errors.txt", format_errors(result.diagnostics, len(result.syntax_errors))),
    }
    paths = {}
    for key, (filename, text) in contents.items():
        path = os.path.join(out_dir, filename)
        with open(path, "w", encoding="utf-8") as f:
            f.write(text + "\n")
        paths[key] = path
    return paths
