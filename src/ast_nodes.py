from dataclasses import dataclass, field, fields, is_dataclass
from typing import List, Optional, Any, Iterable

ARITHMETIC_OPS = {"+", "-", "*", "/", "%"}
RELATIONAL_OPS = {"<", "<=", ">", ">="}
EQUALITY_OPS = {"==", "!="}
LOGICAL_OPS = {"&&", "||"}

LITERAL_KINDS = {"int", "float", "string", "bool"}


@dataclass
class ASTNode:
    line: int = 0

@dataclass
class Program(ASTNode):
    decls: List['ASTNode'] = field(default_factory=list)

@dataclass
class Block(ASTNode):
    statements: List['ASTNode'] = field(default_factory=list)

@dataclass
class VarDecl(ASTNode):
    name: str = ""
    type_name: Optional[str] = None
    is_const: bool = False
    init: Optional['ASTNode'] = None
    # texto fuente del inicializador, si el parser lo capturó
    init_text: Optional[str] = None

@dataclass
class Param(ASTNode):
    name: str = ""
    type_name: Optional[str] = None

@dataclass
class FuncDecl(ASTNode):
    name: str = ""
    ret_type: Optional[str] = None
    params: List[Param] = field(default_factory=list)
    body: Block = None  # type: ignore

@dataclass
class Assign(ASTNode):
    name: str = ""
    op: str = "="
    # None for '++' / '--'
    value: Optional['ASTNode'] = None

@dataclass
class IfStmt(ASTNode):
    cond: 'ASTNode' = None  # type: ignore
    then_block: Block = None  # type: ignore
    else_block: Optional[Block] = None

@dataclass
class ForStmt(ASTNode):
    init: Optional['ASTNode'] = None
    cond: Optional['ASTNode'] = None
    update: Optional['ASTNode'] = None
    body: Block = None  # type: ignore

@dataclass
class WhileStmt(ASTNode):
    cond: 'ASTNode' = None  # type: ignore
    body: Block = None  # type: ignore

@dataclass
class ReturnStmt(ASTNode):
    expr: Optional['ASTNode'] = None

@dataclass
class ExprStmt(ASTNode):
    expr: 'ASTNode' = None  # type: ignore

@dataclass
class Call(ASTNode):
    name: str = ""
    args: List['ASTNode'] = field(default_factory=list)

@dataclass
class CallStmt(ASTNode):
    call: Call = None  # type: ignore

@dataclass
class Literal(ASTNode):
    kind: str = "int"
    text: str = ""

@dataclass
class Identifier(ASTNode):
    name: str = ""

@dataclass
class Paren(ASTNode):
    expr: 'ASTNode' = None  # type: ignore

@dataclass
class NotOp(ASTNode):
    expr: 'ASTNode' = None  # type: ignore

@dataclass
class BinaryOp(ASTNode):
    op: str = ""
    left: 'ASTNode' = None  # type: ignore
    right: 'ASTNode' = None  # type: ignore


def expr_text(n: Optional[ASTNode]) -> str:
    """
    Compact source text of an expression, without whitespace, matching what
    getText() returns on the corresponding parse tree.
    """
    if n is None:
        return ""
    if isinstance(n, Literal):    return n.text
    if isinstance(n, Identifier): return n.name
    if isinstance(n, Paren):      return f"({expr_text(n.expr)})"
    if isinstance(n, NotOp):      return f"!{expr_text(n.expr)}"
    if isinstance(n, BinaryOp):   return f"{expr_text(n.left)}{n.op}{expr_text(n.right)}"
    if isinstance(n, Call):       return f"{n.name}({','.join(expr_text(a) for a in n.args)})"
    raise TypeError(f"not an expression node: {type(n).__name__}")


def _iter_children(n: Any) -> Iterable[ASTNode]:
    if not is_dataclass(n): return
    for f in fields(n):
        v = getattr(n, f.name)
        if isinstance(v, ASTNode):
            yield f.name, v
        elif isinstance(v, list):
            for i, c in enumerate(v):
                if isinstance(c, ASTNode):
                    yield f"{f.name}[{i}]", c

def _label(n: ASTNode) -> str:
    if isinstance(n, Program):    return "Program"
    if isinstance(n, Block):      return "Block"
    if isinstance(n, VarDecl):
        const = "const " if n.is_const else ""
        return f"VarDecl {const}{n.type_name or '?'} {n.name}"
    if isinstance(n, Param):      return f"Param {n.type_name} {n.name}"
    if isinstance(n, FuncDecl):
        ps = ", ".join(f"{p.type_name} {p.name}" for p in n.params)
        return f"FuncDecl {n.ret_type or 'void'} {n.name}({ps})"
    if isinstance(n, Assign):     return f"Assign {n.name} '{n.op}'"
    if isinstance(n, IfStmt):     return "IfStmt"
    if isinstance(n, ForStmt):    return "ForStmt"
    if isinstance(n, WhileStmt):  return "WhileStmt"
    if isinstance(n, ReturnStmt): return "ReturnStmt"
    if isinstance(n, ExprStmt):   return "ExprStmt"
    if isinstance(n, CallStmt):   return "CallStmt"
    if isinstance(n, Call):       return f"Call {n.name}()"
    if isinstance(n, Literal):    return f"Literal {n.kind} {n.text}"
    if isinstance(n, Identifier): return f"Identifier {n.name}"
    if isinstance(n, Paren):      return "Paren"
    if isinstance(n, NotOp):      return "NotOp '!'"
    if isinstance(n, BinaryOp):   return f"BinaryOp '{n.op}'"
    return type(n).__name__

def render_ascii(root: ASTNode) -> str:
    lines = []
    def dfs(node: ASTNode, prefix: str="", is_last: bool=True):
        connector = "└─ " if is_last else "├─ "
        lines.append(prefix + connector + _label(node))
        children = list(_iter_children(node))
        for idx, (_, ch) in enumerate(children):
            last = (idx == len(children) - 1)
            dfs(ch, prefix + ("   " if is_last else "│  "), last)
    dfs(root)
    return "\n".join(lines)
