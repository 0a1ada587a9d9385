"""Literal expression parsing (names, numbers, strings, regexes, arrays, objects)."""
from __future__ import annotations
from typing import TYPE_CHECKING
from lark import Tree, Token
from jsminerr.semantics.ast import (
    Expr, Name, NumberLit, StringLit, BoolLit, NullLit, ThisExpr, RegExpLit,
    ArrayLit, ObjectLit, Property,
)
from jsminerr.semantics.ast_builder.utils.string_processing import parse_string_token, split_regex_token
from jsminerr.semantics.ast_builder.utils.tree_navigation import first_token, tree_children
from jsminerr.internals.report import span_of

if TYPE_CHECKING:
    from jsminerr.semantics.ast_builder.builder import ASTBuilder


def expr_from_token(tok: Token) -> Expr:
    """Map a single literal token to an Expr.

    Handles: NAME, NUMBER, STRING, REGEX, TRUE, FALSE, NULL, THIS
    """
    t = tok.type
    loc = span_of(tok)

    if t == "NAME":
        return Name(id=str(tok.value), loc=loc)
    if t == "NUMBER":
        return NumberLit(raw=str(tok.value), loc=loc)
    if t == "STRING":
        return StringLit(value=parse_string_token(tok.value), loc=loc)
    if t == "REGEX":
        pattern, flags = split_regex_token(tok.value)
        return RegExpLit(pattern=pattern, flags=flags, loc=loc)
    if t == "TRUE":
        return BoolLit(value=True, loc=loc)
    if t == "FALSE":
        return BoolLit(value=False, loc=loc)
    if t == "NULL":
        return NullLit(loc=loc)
    if t == "THIS":
        return ThisExpr(loc=loc)

    raise NotImplementedError(f"unexpected token in atom: {t}")


def expr_atom(t: Tree, ast_builder: 'ASTBuilder') -> Expr:
    """name / number / string / regex / true / false / null / this."""
    tok = first_token(t.children)
    if tok is None:
        raise NotImplementedError(f"literal node '{t.data}' without a token")
    return expr_from_token(tok)


def expr_array(t: Tree, ast_builder: 'ASTBuilder') -> Expr:
    elements = [ast_builder._expr(c) for c in tree_children(t)]
    return ArrayLit(elements=elements, loc=span_of(t))


def expr_object(t: Tree, ast_builder: 'ASTBuilder') -> Expr:
    props = []
    for prop in tree_children(t):
        key_tok = first_token(prop.children)
        value = ast_builder._expr(tree_children(prop)[0])
        if key_tok.type == "STRING":
            key, kind = parse_string_token(key_tok.value), "string"
        elif key_tok.type == "NUMBER":
            key, kind = str(key_tok.value), "number"
        else:
            key, kind = str(key_tok.value), "name"
        props.append(Property(key=key, value=value, key_kind=kind, loc=span_of(prop)))
    return ObjectLit(props=props, loc=span_of(t))


HANDLERS = {
    "name": expr_atom,
    "number": expr_atom,
    "string": expr_atom,
    "regex": expr_atom,
    "true": expr_atom,
    "false": expr_atom,
    "null": expr_atom,
    "this": expr_atom,
    "array": expr_array,
    "object": expr_object,
}
