from typing import Optional

from antlr4 import ParserRuleContext
from antlr4.tree.Tree import ParseTreeVisitor

from ast_nodes import (
    ASTNode, Program, Block, VarDecl, Param, FuncDecl, Assign, IfStmt, ForStmt,
    WhileStmt, ReturnStmt, ExprStmt, CallStmt, Call, Literal, Identifier,
    Paren, NotOp, BinaryOp,
)


def _line(ctx) -> int:
    return getattr(ctx.start, "line", 0) if ctx is not None else 0


def _text(node) -> Optional[str]:
    return node.getText() if node is not None else None


class AstBuilder(ParseTreeVisitor):
    """
    Turns a MiniLang parse tree into ast_nodes.

    The generated contexts dispatch through accept() by method name, so only
    the antlr4 runtime is needed here. Children dropped by the parser's error
    recovery come back as None.
    """

    def _opt(self, ctx) -> Optional[ASTNode]:
        return self.visit(ctx) if ctx is not None else None

    # ------------------------------------------------------------ declarations
    def visitProgram(self, ctx: ParserRuleContext):
        decls = [self.visit(d) for d in ctx.globalDecl()]
        return Program(line=_line(ctx), decls=[d for d in decls if d is not None])

    def visitGlobalVarDeclaration(self, ctx):
        return self._opt(ctx.varDecl())

    def visitGlobalFuncDeclaration(self, ctx):
        return self._opt(ctx.funcDecl())

    def visitVarDecl(self, ctx):
        init = ctx.expression()
        return VarDecl(
            line=_line(ctx),
            name=_text(ctx.ID()) or "",
            type_name=_text(ctx.type_()),
            is_const=ctx.CONST() is not None,
            init=self._opt(init),
            init_text=_text(init),
        )

    def visitFuncDecl(self, ctx):
        params = []
        if ctx.paramList() is not None:
            for p in ctx.paramList().param():
                params.append(Param(line=_line(p), name=_text(p.ID()) or "", type_name=_text(p.type_())))
        body = self._opt(ctx.block())
        return FuncDecl(
            line=_line(ctx),
            name=_text(ctx.ID()) or "",
            ret_type=_text(ctx.type_()),
            params=params,
            body=body if body is not None else Block(line=_line(ctx)),
        )

    def visitBlock(self, ctx):
        stmts = [self.visit(s) for s in ctx.statement()]
        return Block(line=_line(ctx), statements=[s for s in stmts if s is not None])

    # -------------------------------------------------------------- statements
    def visitLocalVarStmt(self, ctx):
        return self._opt(ctx.varDecl())

    def visitAssignStmt(self, ctx):
        return self._opt(ctx.assignment())

    def visitAssignment(self, ctx):
        return Assign(
            line=_line(ctx),
            name=_text(ctx.ID()) or "",
            op=ctx.op.text if ctx.op is not None else "=",
            value=self._opt(ctx.expression()),
        )

    def visitIfStmt(self, ctx):
        blocks = ctx.block()
        return IfStmt(
            line=_line(ctx),
            cond=self._opt(ctx.expression()),
            then_block=self.visit(blocks[0]) if blocks else None,
            else_block=self.visit(blocks[1]) if len(blocks) > 1 else None,
        )

    def visitForStmt(self, ctx):
        return ForStmt(
            line=_line(ctx),
            init=self._opt(ctx.init),
            cond=self._opt(ctx.cond),
            update=self._opt(ctx.update),
            body=self._opt(ctx.block()),
        )

    def visitWhileStmt(self, ctx):
        return WhileStmt(line=_line(ctx), cond=self._opt(ctx.expression()), body=self._opt(ctx.block()))

    def visitReturnStmt(self, ctx):
        return ReturnStmt(line=_line(ctx), expr=self._opt(ctx.expression()))

    def visitFuncCallStmt(self, ctx):
        return CallStmt(line=_line(ctx), call=self._opt(ctx.funcCall()))

    def visitBlockStmt(self, ctx):
        return self._opt(ctx.block())

    def visitExprStmt(self, ctx):
        return ExprStmt(line=_line(ctx), expr=self._opt(ctx.expression()))

    # ------------------------------------------------------------- expressions
    def visitFuncCall(self, ctx):
        args = ctx.argsList().expression() if ctx.argsList() is not None else []
        return Call(line=_line(ctx), name=_text(ctx.ID()) or "", args=[self.visit(a) for a in args])

    def visitAtomExpr(self, ctx):
        return self._opt(ctx.atom())

    def visitAtom(self, ctx):
        line = _line(ctx)
        if ctx.funcCall() is not None:
            return self.visit(ctx.funcCall())
        if ctx.ID() is not None:
            return Identifier(line=line, name=ctx.ID().getText())
        if ctx.INT_LIT() is not None:
            return Literal(line=line, kind="int", text=ctx.INT_LIT().getText())
        if ctx.FLOAT_LIT() is not None:
            return Literal(line=line, kind="float", text=ctx.FLOAT_LIT().getText())
        if ctx.STRING_LIT() is not None:
            return Literal(line=line, kind="string", text=ctx.STRING_LIT().getText())
        if ctx.BOOL() is not None:
            return Literal(line=line, kind="bool", text=ctx.BOOL().getText())
        if ctx.expression() is not None:
            return Paren(line=line, expr=self.visit(ctx.expression()))
        return None

    def visitNotExpr(self, ctx):
        return NotOp(line=_line(ctx), expr=self._opt(ctx.expression()))

    def _binary(self, ctx):
        return BinaryOp(
            line=_line(ctx),
            op=ctx.op.text if ctx.op is not None else "",
            left=self._opt(ctx.left),
            right=self._opt(ctx.right),
        )

    visitMulDivExpr = _binary
    visitAddSubExpr = _binary
    visitRelExpr = _binary
    visitEqExpr = _binary
    visitAndExpr = _binary
    visitOrExpr = _binary
