"""Call-like expression parsing (calls, new, member/index access, function expressions)."""
from __future__ import annotations
from typing import List, TYPE_CHECKING
from lark import Tree
from jsminerr.semantics.ast import Expr, Call, New, Member, Index, FuncExpr
from jsminerr.semantics.ast_builder.utils.tree_navigation import first_name, first_tree, tree_children
from jsminerr.internals.report import span_of

if TYPE_CHECKING:
    from jsminerr.semantics.ast_builder.builder import ASTBuilder


def extract_call_args(args_node: Tree, ast_builder: 'ASTBuilder') -> List[Expr]:
    """Positional argument expressions of an `arguments` node."""
    assert args_node.data == "arguments"
    return [ast_builder._expr(c) for c in tree_children(args_node)]


def expr_call(t: Tree, ast_builder: 'ASTBuilder') -> Expr:
    callee_t, args_t = tree_children(t)
    return Call(callee=ast_builder._expr(callee_t), args=extract_call_args(args_t, ast_builder), loc=span_of(t))


def expr_new(t: Tree, ast_builder: 'ASTBuilder') -> Expr:
    callee_t, args_t = tree_children(t)
    return New(callee=ast_builder._expr(callee_t), args=extract_call_args(args_t, ast_builder), loc=span_of(t))


def expr_new_bare(t: Tree, ast_builder: 'ASTBuilder') -> Expr:
    """`new Foo` without an argument list."""
    return New(callee=ast_builder._expr(tree_children(t)[0]), args=None, loc=span_of(t))


def expr_member(t: Tree, ast_builder: 'ASTBuilder') -> Expr:
    obj_t, prop_t = tree_children(t)
    prop = first_name(prop_t.children)
    return Member(obj=ast_builder._expr(obj_t), prop=str(prop), loc=span_of(t))


def expr_index(t: Tree, ast_builder: 'ASTBuilder') -> Expr:
    obj_t, index_t = tree_children(t)
    return Index(obj=ast_builder._expr(obj_t), index=ast_builder._expr(index_t), loc=span_of(t))


def expr_function(t: Tree, ast_builder: 'ASTBuilder') -> Expr:
    from jsminerr.semantics.ast_builder.declarations.functions import parse_params

    name_tok = first_name(t.children)
    params = parse_params(first_tree(t.children, "params"))
    body = ast_builder._block(first_tree(t.children, "block"))
    return FuncExpr(name=str(name_tok) if name_tok else None, params=params, body=body, loc=span_of(t))


HANDLERS = {
    "call": expr_call,
    "new": expr_new,
    "new_bare": expr_new_bare,
    "member": expr_member,
    "index": expr_index,
    "function_expr": expr_function,
}
