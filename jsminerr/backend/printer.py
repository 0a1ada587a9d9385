"""JavaScript source printer.

Renders the AST back to JavaScript. Output is deterministic: two-space
indentation, single-quoted strings, one statement per line, and parentheses
only where operator precedence requires them. Two programs print the same
text exactly when they have the same structure.
"""
from __future__ import annotations
from typing import List, Optional

from jsminerr.internals import errors as er
from jsminerr.semantics.ast import (
    Node, Program, Stmt, Expr, Block, FuncDecl, Param, VarDecl, ExprStmt, EmptyStmt,
    Return, Throw, If, For, ForIn, While, DoWhile, Break, Continue, Try,
    Name, StringLit, NumberLit, BoolLit, NullLit, ThisExpr, RegExpLit, ArrayLit,
    ObjectLit, FuncExpr, Call, New, Member, Index, UnaryOp, Update, BinaryOp,
    Conditional, Assign, Sequence,
)
from jsminerr.semantics.visitors import NodeVisitor

INDENT = "  "

# Binding strength, loosest first
PREC_SEQUENCE = 1
PREC_ASSIGN = 2
PREC_CONDITIONAL = 3
PREC_UNARY = 14
PREC_POSTFIX = 15
PREC_NEW_BARE = 16
PREC_CALL = 17
PREC_PRIMARY = 18

BINARY_PREC = {
    "||": 4,
    "&&": 5,
    "|": 6,
    "^": 7,
    "&": 8,
    "==": 9, "!=": 9, "===": 9, "!==": 9,
    "<": 10, ">": 10, "<=": 10, ">=": 10, "in": 10, "instanceof": 10,
    "<<": 11, ">>": 11, ">>>": 11,
    "+": 12, "-": 12,
    "*": 13, "/": 13, "%": 13,
}

_STRING_ESCAPES = {
    "\\": "\\\\",
    "'": "\\'",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\b": "\\b",
    "\f": "\\f",
    "\v": "\\v",
    "\0": "\\0",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def quote_js_string(value: str) -> str:
    """Single-quoted JavaScript literal for `value`."""
    out = ["'"]
    for ch in value:
        if ch in _STRING_ESCAPES:
            out.append(_STRING_ESCAPES[ch])
        elif ord(ch) < 0x20 or ord(ch) == 0x7f:
            out.append(f"\\x{ord(ch):02x}")
        elif 0xD800 <= ord(ch) <= 0xDFFF:
            # unpaired surrogate, not encodable as UTF-8
            out.append(f"\\u{ord(ch):04x}")
        else:
            out.append(ch)
    out.append("'")
    return "".join(out)


def precedence(expr: Expr) -> int:
    if isinstance(expr, Sequence):
        return PREC_SEQUENCE
    if isinstance(expr, Assign):
        return PREC_ASSIGN
    if isinstance(expr, Conditional):
        return PREC_CONDITIONAL
    if isinstance(expr, BinaryOp):
        return BINARY_PREC[expr.op]
    if isinstance(expr, UnaryOp):
        return PREC_UNARY
    if isinstance(expr, Update):
        return PREC_UNARY if expr.prefix else PREC_POSTFIX
    if isinstance(expr, New):
        return PREC_NEW_BARE if expr.args is None else PREC_CALL
    if isinstance(expr, (Call, Member, Index)):
        return PREC_CALL
    return PREC_PRIMARY


class JsPrinter(NodeVisitor[str]):
    """Statement visitors return lines at the current indent, expression visitors return text."""

    def __init__(self) -> None:
        self.depth = 0

    def generic_visit(self, node: Node) -> str:
        er.raise_internal_error("CE0001", node=type(node).__name__)

    # === Helpers ===

    def _pad(self) -> str:
        return INDENT * self.depth

    def expr(self, node: Expr, min_prec: int = PREC_ASSIGN) -> str:
        text = self.visit(node)
        if precedence(node) < min_prec:
            return f"({text})"
        return text

    def _args(self, args: List[Expr]) -> str:
        return ", ".join(self.expr(a) for a in args)

    def _params(self, params: List[Param]) -> str:
        return ", ".join(p.name for p in params)

    def _body(self, stmt: Stmt) -> str:
        """Body of a control statement: inline block, or an indented statement on its own line."""
        if isinstance(stmt, Block):
            return " " + self.block_text(stmt)
        self.depth += 1
        try:
            return "\n" + self.visit(stmt)
        finally:
            self.depth -= 1

    def block_text(self, block: Block) -> str:
        """`{ ... }` with the closing brace at the current indent (no leading pad)."""
        if not block.stmts:
            return "{}"
        self.depth += 1
        try:
            inner = [self.visit(s) for s in block.stmts]
        finally:
            self.depth -= 1
        return "{\n" + "\n".join(inner) + "\n" + self._pad() + "}"

    # === Program / statements ===

    def visit_program(self, node: Program) -> str:
        return "\n".join(self.visit(s) for s in node.body)

    def visit_block(self, node: Block) -> str:
        return self._pad() + self.block_text(node)

    def visit_funcdecl(self, node: FuncDecl) -> str:
        return f"{self._pad()}function {node.name}({self._params(node.params)}) {self.block_text(node.body)}"

    def _vardecl_text(self, node: VarDecl) -> str:
        parts = []
        for d in node.declarations:
            if d.init is None:
                parts.append(d.name)
            else:
                parts.append(f"{d.name} = {self.expr(d.init)}")
        return f"{node.kind} {', '.join(parts)}"

    def visit_vardecl(self, node: VarDecl) -> str:
        return f"{self._pad()}{self._vardecl_text(node)};"

    def visit_exprstmt(self, node: ExprStmt) -> str:
        text = self.expr(node.expr, PREC_SEQUENCE)
        # A statement may not begin with `function` or `{`
        if text.startswith("function") or text.startswith("{"):
            text = f"({text})"
        return f"{self._pad()}{text};"

    def visit_emptystmt(self, node: EmptyStmt) -> str:
        return f"{self._pad()};"

    def visit_return(self, node: Return) -> str:
        if node.value is None:
            return f"{self._pad()}return;"
        return f"{self._pad()}return {self.expr(node.value, PREC_SEQUENCE)};"

    def visit_throw(self, node: Throw) -> str:
        return f"{self._pad()}throw {self.expr(node.value, PREC_SEQUENCE)};"

    def visit_break(self, node: Break) -> str:
        return f"{self._pad()}break;"

    def visit_continue(self, node: Continue) -> str:
        return f"{self._pad()}continue;"

    def visit_if(self, node: If) -> str:
        then = node.then
        if node.else_ is not None and isinstance(then, If) and then.else_ is None:
            # keep the else attached to this if
            then = Block(stmts=[then], loc=then.loc)
        text = f"{self._pad()}if ({self.expr(node.cond, PREC_SEQUENCE)}){self._body(then)}"
        if node.else_ is None:
            return text
        sep = " " if isinstance(then, Block) else "\n" + self._pad()
        if isinstance(node.else_, If):
            return f"{text}{sep}else {self.visit(node.else_).lstrip()}"
        return f"{text}{sep}else{self._body(node.else_)}"

    def visit_for(self, node: For) -> str:
        if node.init is None:
            init = ""
        elif isinstance(node.init, VarDecl):
            init = self._vardecl_text(node.init)
        else:
            init = self.expr(node.init, PREC_SEQUENCE)
            if isinstance(node.init, BinaryOp) and node.init.op == "in":
                init = f"({init})"
        test = self.expr(node.test, PREC_SEQUENCE) if node.test is not None else ""
        update = self.expr(node.update, PREC_SEQUENCE) if node.update is not None else ""
        header = f"{init}; {test}; {update}".rstrip()
        return f"{self._pad()}for ({header}){self._body(node.body)}"

    def visit_forin(self, node: ForIn) -> str:
        if isinstance(node.target, VarDecl):
            target = self._vardecl_text(node.target)
        else:
            target = self.expr(node.target, PREC_POSTFIX)
        return f"{self._pad()}for ({target} in {self.expr(node.iterable, PREC_SEQUENCE)}){self._body(node.body)}"

    def visit_while(self, node: While) -> str:
        return f"{self._pad()}while ({self.expr(node.cond, PREC_SEQUENCE)}){self._body(node.body)}"

    def visit_dowhile(self, node: DoWhile) -> str:
        sep = " " if isinstance(node.body, Block) else "\n" + self._pad()
        return f"{self._pad()}do{self._body(node.body)}{sep}while ({self.expr(node.cond, PREC_SEQUENCE)});"

    def visit_try(self, node: Try) -> str:
        text = f"{self._pad()}try {self.block_text(node.block)}"
        if node.handler is not None:
            text += f" catch ({node.param}) {self.block_text(node.handler)}"
        if node.finalizer is not None:
            text += f" finally {self.block_text(node.finalizer)}"
        return text

    # === Expressions ===

    def visit_name(self, node: Name) -> str:
        return node.id

    def visit_stringlit(self, node: StringLit) -> str:
        return quote_js_string(node.value)

    def visit_numberlit(self, node: NumberLit) -> str:
        return node.raw

    def visit_boollit(self, node: BoolLit) -> str:
        return "true" if node.value else "false"

    def visit_nulllit(self, node: NullLit) -> str:
        return "null"

    def visit_thisexpr(self, node: ThisExpr) -> str:
        return "this"

    def visit_regexplit(self, node: RegExpLit) -> str:
        return f"/{node.pattern}/{node.flags}"

    def visit_arraylit(self, node: ArrayLit) -> str:
        return f"[{self._args(node.elements)}]"

    def visit_objectlit(self, node: ObjectLit) -> str:
        if not node.props:
            return "{}"
        parts = []
        for p in node.props:
            key = quote_js_string(p.key) if p.key_kind == "string" else p.key
            parts.append(f"{key}: {self.expr(p.value)}")
        return "{" + ", ".join(parts) + "}"

    def visit_funcexpr(self, node: FuncExpr) -> str:
        name = f" {node.name}" if node.name else ""
        return f"function{name} ({self._params(node.params)}) {self.block_text(node.body)}"

    def _callee(self, callee: Expr) -> str:
        if isinstance(callee, (FuncExpr, ObjectLit)):
            return f"({self.visit(callee)})"
        return self.expr(callee, PREC_CALL)

    def visit_call(self, node: Call) -> str:
        return f"{self._callee(node.callee)}({self._args(node.args)})"

    def visit_new(self, node: New) -> str:
        callee = self._callee(node.callee)
        if _contains_call(node.callee):
            callee = f"({self.visit(node.callee)})"
        if node.args is None:
            return f"new {callee}"
        return f"new {callee}({self._args(node.args)})"

    def visit_member(self, node: Member) -> str:
        obj = self._callee(node.obj)
        if isinstance(node.obj, NumberLit) and obj.isdigit():
            obj = f"({obj})"
        return f"{obj}.{node.prop}"

    def visit_index(self, node: Index) -> str:
        return f"{self._callee(node.obj)}[{self.expr(node.index, PREC_SEQUENCE)}]"

    def visit_unaryop(self, node: UnaryOp) -> str:
        operand = self.expr(node.expr, PREC_UNARY)
        if node.op.isalpha():
            return f"{node.op} {operand}"
        if node.op in "+-" and operand[:1] == node.op:
            return f"{node.op} {operand}"
        return f"{node.op}{operand}"

    def visit_update(self, node: Update) -> str:
        if node.prefix:
            return f"{node.op}{self.expr(node.target, PREC_UNARY)}"
        return f"{self.expr(node.target, PREC_NEW_BARE)}{node.op}"

    def visit_binaryop(self, node: BinaryOp) -> str:
        prec = BINARY_PREC[node.op]
        return f"{self.expr(node.left, prec)} {node.op} {self.expr(node.right, prec + 1)}"

    def visit_conditional(self, node: Conditional) -> str:
        return (f"{self.expr(node.test, PREC_CONDITIONAL + 1)} ? "
                f"{self.expr(node.then)} : {self.expr(node.else_)}")

    def visit_assign(self, node: Assign) -> str:
        return f"{self.expr(node.target, PREC_POSTFIX)} {node.op} {self.expr(node.value, PREC_ASSIGN)}"

    def visit_sequence(self, node: Sequence) -> str:
        return ", ".join(self.expr(e, PREC_ASSIGN) for e in node.exprs)


def _contains_call(expr: Expr) -> bool:
    """True when a `new` callee would capture a call's argument list."""
    while isinstance(expr, (Member, Index)):
        expr = expr.obj
    return isinstance(expr, Call)


def print_program(program: Program) -> str:
    return JsPrinter().visit(program)


def print_node(node: Node) -> str:
    """Print a single statement or expression (used in diagnostics and tests)."""
    return JsPrinter().visit(node)
