"""Main ASTBuilder orchestrator for jsminerr.

This module contains the ASTBuilder class that turns Lark parse trees into
typed AST nodes. Parsing of each construct is delegated to specialized
modules, each of which exports a HANDLERS table keyed by tree tag:

- Literals: semantics.ast_builder.expressions.literals
- Operators: semantics.ast_builder.expressions.operators
- Calls, new, member access: semantics.ast_builder.expressions.calls
- Statements: semantics.ast_builder.statements.flow
- Declarations: semantics.ast_builder.declarations
"""
from __future__ import annotations
from typing import Callable, Dict

from lark import Tree

from jsminerr.semantics.ast import Program, Block, Stmt, Expr
from jsminerr.semantics.ast_builder.utils.tree_navigation import tree_children
from jsminerr.internals.report import span_of


class ASTBuilder:
    def __init__(self):
        from jsminerr.semantics.ast_builder.expressions import literals, operators, calls
        from jsminerr.semantics.ast_builder.statements import flow

        self._expr_handlers: Dict[str, Callable[[Tree, ASTBuilder], Expr]] = {}
        for module in (literals, operators, calls):
            self._expr_handlers.update(module.HANDLERS)
        self._stmt_handlers: Dict[str, Callable[[Tree, ASTBuilder], Stmt]] = dict(flow.HANDLERS)

    def build(self, tree: Tree) -> Program:
        """Build Program AST from parse tree."""
        assert isinstance(tree, Tree) and tree.data == "program"
        body = [self._stmt(ch) for ch in tree_children(tree)]
        return Program(body=body, loc=span_of(tree))

    def _stmt(self, t: Tree) -> Stmt:
        handler = self._stmt_handlers.get(t.data)
        if handler is None:
            raise NotImplementedError(f"unknown statement node '{t.data}'")
        return handler(t, self)

    def _expr(self, t: Tree) -> Expr:
        handler = self._expr_handlers.get(t.data)
        if handler is None:
            raise NotImplementedError(f"unknown expression node '{t.data}'")
        return handler(t, self)

    def _block(self, t: Tree) -> Block:
        assert t.data == "block", t.data
        return Block(stmts=[self._stmt(ch) for ch in tree_children(t)], loc=span_of(t))
