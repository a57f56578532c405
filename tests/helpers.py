# tests/helpers.py
# Constructores cortos de ast_nodes para escribir programas de prueba sin el parser generado.
from ast_nodes import (
    Program, Block, VarDecl, Param, FuncDecl, Assign, IfStmt, ForStmt,
    WhileStmt, ReturnStmt, ExprStmt, CallStmt, Call, Literal, Identifier,
    Paren, NotOp, BinaryOp,
)
from semantic.semantic_visitor import analyze


def lit(value, line=1):
    if isinstance(value, bool):
        return Literal(line=line, kind="bool", text="true" if value else "false")
    if isinstance(value, int):
        return Literal(line=line, kind="int", text=str(value))
    if isinstance(value, float):
        return Literal(line=line, kind="float", text=str(value))
    return Literal(line=line, kind="string", text=f'"{value}"')

def ident(name, line=1):
    return Identifier(line=line, name=name)

def binop(op, left, right, line=1):
    return BinaryOp(line=line, op=op, left=left, right=right)

def paren(expr, line=1):
    return Paren(line=line, expr=expr)

def not_(expr, line=1):
    return NotOp(line=line, expr=expr)

def call(name, *args, line=1):
    return Call(line=line, name=name, args=list(args))

def call_stmt(name, *args, line=1):
    return CallStmt(line=line, call=call(name, *args, line=line))

def var(type_name, name, init=None, const=False, line=1):
    return VarDecl(line=line, name=name, type_name=type_name, is_const=const, init=init)

def assign(name, value=None, op="=", line=1):
    return Assign(line=line, name=name, op=op, value=value)

def block(*stmts, line=1):
    return Block(line=line, statements=list(stmts))

def func(ret, name, params=(), body=(), line=1):
    """params: [(type, name), ...]; body: list of statements."""
    ps = [Param(line=line, type_name=t, name=n) for t, n in params]
    return FuncDecl(line=line, name=name, ret_type=ret, params=ps, body=block(*body, line=line))

def ret(expr=None, line=1):
    return ReturnStmt(line=line, expr=expr)

def if_(cond, then, else_=None, line=1):
    return IfStmt(line=line, cond=cond, then_block=block(*then, line=line),
                  else_block=block(*else_, line=line) if else_ is not None else None)

def while_(cond, body, line=1):
    return WhileStmt(line=line, cond=cond, body=block(*body, line=line))

def for_(init, cond, update, body, line=1):
    return ForStmt(line=line, init=init, cond=cond, update=update, body=block(*body, line=line))

def expr_stmt(expr, line=1):
    return ExprStmt(line=line, expr=expr)

def main_fn(*body, line=1):
    """int main() { <body> return 0; }"""
    return func("int", "main", body=list(body) + [ret(lit(0, line=line), line=line)], line=line)

def program(*decls):
    return Program(line=1, decls=list(decls))


def run_semantic(*decls):
    """
    Ejecuta el análisis semántico sobre un programa armado con los helpers y
    regresa (errors, result).
    """
    result = analyze(program(*decls))
    return result.errors, result
