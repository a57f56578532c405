import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ast_nodes import (
    ASTNode, Program, Block, VarDecl, FuncDecl, Assign, IfStmt, ForStmt,
    WhileStmt, ReturnStmt, ExprStmt, CallStmt, Call, Literal, Identifier,
    Paren, NotOp, BinaryOp, ARITHMETIC_OPS, expr_text,
)
from semantic.diagnostics import Diagnostic, MAIN
from semantic.type_system import MiniType, parse_type, are_compatible, common_type
from symbol_table.symbol_table import SymbolTable, VariableSymbol, FunctionSymbol

log = logging.getLogger(__name__)

_LITERAL_TYPES = {
    "int": MiniType.INT,
    "float": MiniType.FLOAT,
    "string": MiniType.STRING,
    "bool": MiniType.BOOL,
}


@dataclass
class AnalysisResult:
    table: SymbolTable
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def errors(self) -> List[str]:
        return [str(d) for d in self.diagnostics]


class SemanticVisitor:
    """
    Single depth-first pass over an ast_nodes tree.

    Fills the symbol table and appends one Diagnostic per semantic violation.
    Nothing here raises for a user error: every check either records a
    diagnostic and substitutes Unknown/Error or simply continues, so one pass
    surfaces every independent finding. The enclosing function is passed down
    explicitly as `fn` (None at global level).

    One instance analyzes one tree.
    """

    def __init__(self, table: Optional[SymbolTable] = None):
        self.table = table if table is not None else SymbolTable()
        self.diagnostics: List[Diagnostic] = []

    @property
    def errors(self) -> List[str]:
        return [str(d) for d in self.diagnostics]

    def _error(self, line: int, msg: str) -> None:
        self.diagnostics.append(Diagnostic(line, msg))

    # ------------------------------------------------------------------ dispatch
    def visit(self, node: Optional[ASTNode], fn: Optional[FunctionSymbol] = None) -> MiniType:
        match node:
            case None:
                # subtree lost to parser error recovery
                return MiniType.UNKNOWN
            case Program(decls=decls):
                for decl in decls:
                    self.visit(decl, None)
                return MiniType.VOID
            case VarDecl():
                return self._var_decl(node, fn)
            case FuncDecl():
                return self._func_decl(node)
            case Block(statements=stmts):
                self.table.enter_scope()
                self._statements(stmts, fn)
                self.table.exit_scope()
                return MiniType.VOID
            case Assign():
                return self._assign(node, fn)
            case IfStmt(cond=cond, then_block=then_block, else_block=else_block):
                self._mark_control(fn, "if...else", node.line)
                self.visit(cond, fn)
                self.visit(then_block, fn)
                if else_block is not None:
                    self.visit(else_block, fn)
                return MiniType.VOID
            case ForStmt(init=init, cond=cond, update=update, body=body):
                self._mark_control(fn, "for", node.line)
                for part in (init, cond, update):
                    if part is not None:
                        self.visit(part, fn)
                self.visit(body, fn)
                return MiniType.VOID
            case WhileStmt(cond=cond, body=body):
                self._mark_control(fn, "while", node.line)
                self.visit(cond, fn)
                self.visit(body, fn)
                return MiniType.VOID
            case ReturnStmt():
                return self._return(node, fn)
            case ExprStmt(expr=expr):
                self.visit(expr, fn)
                return MiniType.VOID
            case CallStmt(call=call):
                self.visit(call, fn)
                return MiniType.VOID
            case Call():
                return self._call(node, fn)
            case Literal(kind=kind):
                return _LITERAL_TYPES.get(kind, MiniType.UNKNOWN)
            case Identifier():
                return self._identifier(node)
            case Paren(expr=expr):
                return self.visit(expr, fn)
            case NotOp(expr=expr):
                self.visit(expr, fn)
                return MiniType.BOOL
            case BinaryOp(op=op, left=left, right=right):
                lt = self.visit(left, fn)
                rt = self.visit(right, fn)
                if op in ARITHMETIC_OPS:
                    return common_type(lt, rt)
                # relational, equality and logical operators
                return MiniType.BOOL
            case _:
                raise TypeError(f"Unknown syntax node kind: {type(node).__name__}")

    def _statements(self, stmts: List[ASTNode], fn: Optional[FunctionSymbol]) -> None:
        for st in stmts:
            self.visit(st, fn)

    def _mark_control(self, fn: Optional[FunctionSymbol], kind: str, line: int) -> None:
        if fn is not None:
            fn.control_structures.append(f"{kind}, line {line}")

    # -------------------------------------------------------------- declarations
    def _var_decl(self, node: VarDecl, fn: Optional[FunctionSymbol]) -> MiniType:
        name = node.name
        declared = parse_type(node.type_name)

        if self.table.resolve_current_scope_only(name) is not None:
            if fn is None:
                self._error(node.line, f"Global variable '{name}' is already defined.")
            else:
                self._error(node.line, f"Local variable '{name}' is already defined in function '{fn.name}'.")

        if fn is not None:
            for param in fn.parameters:
                if param.name == name:
                    self._error(node.line, f"Local variable '{name}' conflicts with a parameter name.")

        init_text = None
        if node.init is not None:
            init_t = self.visit(node.init, fn)
            init_text = node.init_text if node.init_text is not None else expr_text(node.init)
            if not are_compatible(declared, init_t):
                self._error(
                    node.line,
                    f"Incompatible type in initialization of variable '{name}'. "
                    f"Expected {declared}, got {init_t}.",
                )
        elif node.is_const:
            self._error(node.line, f"Constant variable '{name}' must be initialized.")

        var = VariableSymbol(
            name=name, type=declared, line=node.line,
            is_const=node.is_const, init_text=init_text,
        )
        self.table.define(var)
        if fn is not None:
            fn.local_variables.append(var)
        return MiniType.VOID

    def _func_decl(self, node: FuncDecl) -> MiniType:
        name = node.name
        ret = parse_type(node.ret_type) if node.ret_type else MiniType.VOID

        if name in self.table.functions:
            self._error(node.line, f"Function '{name}' is already defined.")
            return MiniType.ERROR

        fn = FunctionSymbol(name=name, type=ret, line=node.line)
        if not self.table.define(fn):
            # the variable keeps the global name; calls still reach the function
            self._error(node.line, f"'{name}' is already defined as a global variable.")
            self.table.register_function(fn)

        log.debug("entering function %s at line %d", name, node.line)
        self.table.enter_scope()

        for p in node.params:
            p_sym = VariableSymbol(name=p.name, type=parse_type(p.type_name), line=p.line)
            if not self.table.define(p_sym):
                self._error(p.line, f"Parameter '{p.name}' is duplicated in the declaration of function '{name}'.")
            fn.parameters.append(p_sym)

        # params and the body's top-level statements share the function scope
        if node.body is not None:
            self._statements(node.body.statements, fn)

        if ret != MiniType.VOID and not fn.has_return:
            self._error(node.line, f"Function '{name}' of type {ret} does not have a 'return' statement on all branches.")

        if fn.is_main and fn.is_recursive:
            self._error(node.line, f"Function '{MAIN}' cannot be recursive.")

        self.table.exit_scope()
        return MiniType.VOID

    # ---------------------------------------------------------------- statements
    def _assign(self, node: Assign, fn: Optional[FunctionSymbol]) -> MiniType:
        name = node.name
        sym = self.table.resolve(name)

        if sym is None:
            self._error(node.line, f"Variable '{name}' was not declared before use.")
            return MiniType.ERROR

        if not isinstance(sym, VariableSymbol):
            self._error(node.line, f"'{name}' is not a variable.")
            return MiniType.ERROR

        if sym.is_const:
            self._error(node.line, f"Cannot assign a new value to constant variable '{name}'.")

        if node.value is not None:
            value_t = self.visit(node.value, fn)
            if not are_compatible(sym.type, value_t):
                self._error(
                    node.line,
                    f"Incompatible type in assignment to '{name}'. Expected {sym.type}, got {value_t}.",
                )
        return MiniType.VOID

    def _return(self, node: ReturnStmt, fn: Optional[FunctionSymbol]) -> MiniType:
        if fn is None:
            self._error(node.line, "Return outside of a function.")
            return MiniType.ERROR

        fn.has_return = True
        ret_t = MiniType.VOID
        if node.expr is not None:
            ret_t = self.visit(node.expr, fn)

        if not are_compatible(fn.type, ret_t):
            self._error(
                node.line,
                f"Incompatible return type in function '{fn.name}'. Expected {fn.type}, got {ret_t}.",
            )
        return MiniType.VOID

    # --------------------------------------------------------------- expressions
    def _call(self, node: Call, fn: Optional[FunctionSymbol]) -> MiniType:
        name = node.name
        target = self.table.functions.get(name)

        if target is None:
            self._error(node.line, f"Function '{name}' is not defined.")
            for arg in node.args:
                self.visit(arg, fn)
            return MiniType.UNKNOWN

        if name == MAIN:
            if fn is not None and fn.name == MAIN:
                fn.is_recursive = True
            else:
                self._error(node.line, f"Function '{MAIN}' cannot be called explicitly.")

        if fn is not None and fn.name == name:
            fn.is_recursive = True

        arg_types = [self.visit(arg, fn) for arg in node.args]
        params = target.parameters

        if len(arg_types) != len(params):
            self._error(
                node.line,
                f"Incorrect number of arguments for '{name}'. Expected {len(params)}, got {len(arg_types)}.",
            )
        else:
            for i, (arg_t, param) in enumerate(zip(arg_types, params), start=1):
                if not are_compatible(param.type, arg_t):
                    self._error(
                        node.line,
                        f"Argument {i} for '{name}' is incompatible. Expected {param.type}, got {arg_t}.",
                    )

        return target.type

    def _identifier(self, node: Identifier) -> MiniType:
        sym = self.table.resolve(node.name)
        if sym is None:
            self._error(node.line, f"Variable '{node.name}' is not declared.")
            return MiniType.UNKNOWN
        if isinstance(sym, VariableSymbol):
            return sym.type
        # a function name used as a value
        return MiniType.UNKNOWN


def analyze(program: Program, table: Optional[SymbolTable] = None) -> AnalysisResult:
    """Run the semantic pass over `program`; returns the filled table and diagnostics."""
    v = SemanticVisitor(table)
    v.visit(program)
    log.debug("semantic pass finished with %d diagnostics", len(v.diagnostics))
    return AnalysisResult(table=v.table, diagnostics=v.diagnostics)
