# semantics/ast.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Literal

from jsminerr.internals.report import Span

# === Core node base ===

@dataclass
class Node:
    loc: Optional[Span]

@dataclass
class Stmt(Node):
    pass

@dataclass
class Expr(Node):
    pass

# === Program structure ===

@dataclass
class Program(Node):
    body: List[Stmt]

@dataclass
class Param(Node):
    name: str

@dataclass
class FuncDecl(Stmt):
    name: str
    params: List[Param]
    body: "Block"
    name_span: Optional[Span] = None

# === Statements ===

VarKind = Literal["var", "let", "const"]

@dataclass
class VarDeclarator(Node):
    name: str
    init: Optional[Expr] = None

@dataclass
class VarDecl(Stmt):
    kind: VarKind
    declarations: List[VarDeclarator]

@dataclass
class Block(Stmt):
    stmts: List[Stmt]

@dataclass
class ExprStmt(Stmt):
    expr: Expr

@dataclass
class EmptyStmt(Stmt):
    pass

@dataclass
class Return(Stmt):
    value: Optional[Expr] = None

@dataclass
class Throw(Stmt):
    value: Expr

@dataclass
class If(Stmt):
    cond: Expr
    then: Stmt
    else_: Optional[Stmt] = None

@dataclass
class For(Stmt):
    init: Optional[Node]            # VarDecl or Expr
    test: Optional[Expr]
    update: Optional[Expr]
    body: Stmt

@dataclass
class ForIn(Stmt):
    target: Node                    # VarDecl with a single declarator, or an Expr
    iterable: Expr
    body: Stmt

@dataclass
class While(Stmt):
    cond: Expr
    body: Stmt

@dataclass
class DoWhile(Stmt):
    body: Stmt
    cond: Expr

@dataclass
class Break(Stmt):
    pass

@dataclass
class Continue(Stmt):
    pass

@dataclass
class Try(Stmt):
    block: Block
    param: Optional[str] = None
    handler: Optional[Block] = None
    finalizer: Optional[Block] = None

# === Expressions ===

@dataclass
class Name(Expr):
    id: str

@dataclass
class StringLit(Expr):
    value: str

@dataclass
class NumberLit(Expr):
    raw: str                        # source text, printed back verbatim

    @property
    def value(self) -> float:
        if self.raw[:2] in ("0x", "0X"):
            return float(int(self.raw, 16))
        return float(self.raw)

@dataclass
class BoolLit(Expr):
    value: bool

@dataclass
class NullLit(Expr):
    pass

@dataclass
class ThisExpr(Expr):
    pass

@dataclass
class RegExpLit(Expr):
    pattern: str
    flags: str = ""

@dataclass
class ArrayLit(Expr):
    elements: List[Expr]

@dataclass
class Property(Node):
    key: str
    value: Expr
    key_kind: Literal["name", "string", "number"] = "name"

@dataclass
class ObjectLit(Expr):
    props: List[Property]

@dataclass
class FuncExpr(Expr):
    name: Optional[str]
    params: List[Param]
    body: Block

@dataclass
class Call(Expr):
    callee: Expr
    args: List[Expr]

@dataclass
class New(Expr):
    callee: Expr
    args: Optional[List[Expr]] = None  # None: `new Foo` without an argument list

@dataclass
class Member(Expr):
    obj: Expr
    prop: str

@dataclass
class Index(Expr):
    obj: Expr
    index: Expr

UnOp = Literal["!", "-", "+", "~", "typeof", "void", "delete"]

@dataclass
class UnaryOp(Expr):
    op: UnOp
    expr: Expr

@dataclass
class Update(Expr):
    op: Literal["++", "--"]
    target: Expr
    prefix: bool

@dataclass
class BinaryOp(Expr):
    op: str                         # arithmetic, comparison, bitwise, `&&`, `||`, `in`, `instanceof`
    left: Expr
    right: Expr

@dataclass
class Conditional(Expr):
    test: Expr
    then: Expr
    else_: Expr

@dataclass
class Assign(Expr):
    op: str
    target: Expr
    value: Expr

@dataclass
class Sequence(Expr):
    exprs: List[Expr] = field(default_factory=list)


ASSIGNABLE = (Name, Member, Index)
