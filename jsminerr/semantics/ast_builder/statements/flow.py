"""Statement parsing (expression statements, control flow, exceptions)."""
from __future__ import annotations
from typing import TYPE_CHECKING
from lark import Tree
from jsminerr.semantics.ast import (
    Stmt, ExprStmt, EmptyStmt, Return, Throw, If, For, ForIn, While, DoWhile,
    Break, Continue, Try, VarDecl, VarDeclarator, BinaryOp, ASSIGNABLE,
)
from jsminerr.semantics.ast_builder.exceptions import JsSyntaxError, InvalidAssignmentTarget
from jsminerr.semantics.ast_builder.utils.tree_navigation import first_name, first_token, first_tree, tree_children
from jsminerr.internals.report import span_of

if TYPE_CHECKING:
    from jsminerr.semantics.ast_builder.builder import ASTBuilder


def stmt_expr(t: Tree, ast_builder: 'ASTBuilder') -> Stmt:
    return ExprStmt(expr=ast_builder._expr(t.children[0]), loc=span_of(t))


def stmt_empty(t: Tree, ast_builder: 'ASTBuilder') -> Stmt:
    return EmptyStmt(loc=span_of(t))


def stmt_var(t: Tree, ast_builder: 'ASTBuilder') -> Stmt:
    from jsminerr.semantics.ast_builder.declarations.variables import parse_vardecl
    decl = parse_vardecl(t.children[0], ast_builder)
    decl.loc = span_of(t)
    return decl


def stmt_function(t: Tree, ast_builder: 'ASTBuilder') -> Stmt:
    from jsminerr.semantics.ast_builder.declarations.functions import parse_funcdecl
    return parse_funcdecl(t, ast_builder)


def stmt_block(t: Tree, ast_builder: 'ASTBuilder') -> Stmt:
    return ast_builder._block(t)


def stmt_return(t: Tree, ast_builder: 'ASTBuilder') -> Stmt:
    value = ast_builder._expr(t.children[0]) if t.children else None
    return Return(value=value, loc=span_of(t))


def stmt_throw(t: Tree, ast_builder: 'ASTBuilder') -> Stmt:
    return Throw(value=ast_builder._expr(t.children[0]), loc=span_of(t))


def stmt_break(t: Tree, ast_builder: 'ASTBuilder') -> Stmt:
    return Break(loc=span_of(t))


def stmt_continue(t: Tree, ast_builder: 'ASTBuilder') -> Stmt:
    return Continue(loc=span_of(t))


def stmt_if(t: Tree, ast_builder: 'ASTBuilder') -> Stmt:
    parts = tree_children(t)
    cond = ast_builder._expr(parts[0])
    then = ast_builder._stmt(parts[1])
    else_ = ast_builder._stmt(parts[2]) if len(parts) > 2 else None
    return If(cond=cond, then=then, else_=else_, loc=span_of(t))


def stmt_while(t: Tree, ast_builder: 'ASTBuilder') -> Stmt:
    cond_t, body_t = tree_children(t)
    return While(cond=ast_builder._expr(cond_t), body=ast_builder._stmt(body_t), loc=span_of(t))


def stmt_do_while(t: Tree, ast_builder: 'ASTBuilder') -> Stmt:
    body_t, cond_t = tree_children(t)
    return DoWhile(body=ast_builder._stmt(body_t), cond=ast_builder._expr(cond_t), loc=span_of(t))


def stmt_for(t: Tree, ast_builder: 'ASTBuilder') -> Stmt:
    """for (init; test; update) body -- each header slot is its own (possibly empty) tree."""
    init_t, test_t, update_t, body_t = tree_children(t)

    init = None
    if init_t.children:
        head = init_t.children[0]
        if head.data == "var_decl":
            from jsminerr.semantics.ast_builder.declarations.variables import parse_vardecl
            init = parse_vardecl(head, ast_builder)
        else:
            init = ast_builder._expr(head)

    test = ast_builder._expr(test_t.children[0]) if test_t.children else None
    update = ast_builder._expr(update_t.children[0]) if update_t.children else None
    return For(init=init, test=test, update=update, body=ast_builder._stmt(body_t), loc=span_of(t))


def stmt_for_in_var(t: Tree, ast_builder: 'ASTBuilder') -> Stmt:
    """for (var NAME in expr) body"""
    kind_tok = first_token(t.children)
    name_tok = first_name(t.children)
    iterable_t, body_t = tree_children(t)
    target = VarDecl(
        kind=str(kind_tok.value),
        declarations=[VarDeclarator(name=str(name_tok), loc=span_of(name_tok))],
        loc=span_of(kind_tok),
    )
    return ForIn(target=target, iterable=ast_builder._expr(iterable_t), body=ast_builder._stmt(body_t), loc=span_of(t))


def stmt_for_in_expr(t: Tree, ast_builder: 'ASTBuilder') -> Stmt:
    """for (target in expr) body -- the header arrives as one `in` expression."""
    head_t, body_t = tree_children(t)
    head = ast_builder._expr(head_t)
    if not (isinstance(head, BinaryOp) and head.op == "in"):
        raise JsSyntaxError("expected ';' in for statement header", span_of(head_t))
    if not isinstance(head.left, ASSIGNABLE):
        raise InvalidAssignmentTarget(type(head.left).__name__, span_of(head_t))
    return ForIn(target=head.left, iterable=head.right, body=ast_builder._stmt(body_t), loc=span_of(t))


def stmt_try(t: Tree, ast_builder: 'ASTBuilder') -> Stmt:
    block = ast_builder._block(t.children[0])
    param = handler = finalizer = None

    catch = first_tree(t.children, "catch_clause")
    if catch is not None:
        param = str(first_name(catch.children))
        handler = ast_builder._block(first_tree(catch.children, "block"))

    fin = first_tree(t.children, "finally_clause")
    if fin is not None:
        finalizer = ast_builder._block(first_tree(fin.children, "block"))

    return Try(block=block, param=param, handler=handler, finalizer=finalizer, loc=span_of(t))


HANDLERS = {
    "expr_stmt": stmt_expr,
    "empty_stmt": stmt_empty,
    "var_stmt": stmt_var,
    "function_decl": stmt_function,
    "block": stmt_block,
    "return_stmt": stmt_return,
    "throw_stmt": stmt_throw,
    "break_stmt": stmt_break,
    "continue_stmt": stmt_continue,
    "if_stmt": stmt_if,
    "while_stmt": stmt_while,
    "do_while_stmt": stmt_do_while,
    "for_stmt": stmt_for,
    "for_in_var": stmt_for_in_var,
    "for_in_expr": stmt_for_in_expr,
    "try_stmt": stmt_try,
}
