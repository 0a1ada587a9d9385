"""Operator expression parsing (unary, binary, update, conditional, assignment)."""
from __future__ import annotations
from typing import TYPE_CHECKING, cast
from lark import Tree, Token
from jsminerr.semantics.ast import (
    ASSIGNABLE, Expr, UnaryOp, UnOp, BinaryOp, Update, Conditional, Assign, Sequence,
)
from jsminerr.semantics.ast_builder.exceptions import InvalidAssignmentTarget
from jsminerr.semantics.ast_builder.utils.tree_navigation import first_token, tree_children
from jsminerr.internals.report import span_of

if TYPE_CHECKING:
    from jsminerr.semantics.ast_builder.builder import ASTBuilder


def _check_target(expr: Expr, t: Tree) -> Expr:
    if not isinstance(expr, ASSIGNABLE):
        raise InvalidAssignmentTarget(type(expr).__name__, span=span_of(t))
    return expr


def expr_binop(t: Tree, ast_builder: 'ASTBuilder') -> Expr:
    """left OP right, OP kept as a token between the operands."""
    left_t, op_tok, right_t = t.children
    assert isinstance(op_tok, Token)
    return BinaryOp(
        op=str(op_tok.value),
        left=ast_builder._expr(left_t),
        right=ast_builder._expr(right_t),
        loc=span_of(t),
    )


def expr_in(t: Tree, ast_builder: 'ASTBuilder') -> Expr:
    left_t, right_t = tree_children(t)
    return BinaryOp(op="in", left=ast_builder._expr(left_t), right=ast_builder._expr(right_t), loc=span_of(t))


def expr_unary(t: Tree, ast_builder: 'ASTBuilder') -> Expr:
    op_tok = first_token(t.children)
    operand = tree_children(t)[0]
    return UnaryOp(op=cast(UnOp, str(op_tok.value)), expr=ast_builder._expr(operand), loc=span_of(t))


def expr_prefix_update(t: Tree, ast_builder: 'ASTBuilder') -> Expr:
    op_tok = first_token(t.children)
    target = _check_target(ast_builder._expr(tree_children(t)[0]), t)
    return Update(op=str(op_tok.value), target=target, prefix=True, loc=span_of(t))


def expr_postfix_update(t: Tree, ast_builder: 'ASTBuilder') -> Expr:
    op_tok = first_token(t.children)
    target = _check_target(ast_builder._expr(tree_children(t)[0]), t)
    return Update(op=str(op_tok.value), target=target, prefix=False, loc=span_of(t))


def expr_ternary(t: Tree, ast_builder: 'ASTBuilder') -> Expr:
    test, then, else_ = (ast_builder._expr(c) for c in tree_children(t))
    return Conditional(test=test, then=then, else_=else_, loc=span_of(t))


def expr_assign(t: Tree, ast_builder: 'ASTBuilder') -> Expr:
    target_t, op_tok, value_t = t.children
    target = _check_target(ast_builder._expr(target_t), t)
    return Assign(op=str(op_tok.value), target=target, value=ast_builder._expr(value_t), loc=span_of(t))


def expr_sequence(t: Tree, ast_builder: 'ASTBuilder') -> Expr:
    """Flatten the left-nested comma chain into one Sequence."""
    exprs = []
    node = t
    while isinstance(node, Tree) and node.data == "sequence":
        head, tail = tree_children(node)
        exprs.append(tail)
        node = head
    exprs.append(node)
    return Sequence(exprs=[ast_builder._expr(e) for e in reversed(exprs)], loc=span_of(t))


HANDLERS = {
    "binop": expr_binop,
    "in_op": expr_in,
    "unary": expr_unary,
    "prefix_update": expr_prefix_update,
    "postfix_update": expr_postfix_update,
    "ternary": expr_ternary,
    "assign": expr_assign,
    "sequence": expr_sequence,
}
