"""Function declaration parsing."""
from __future__ import annotations
from typing import List, Optional, TYPE_CHECKING
from lark import Tree, Token
from jsminerr.semantics.ast import FuncDecl, Param
from jsminerr.semantics.ast_builder.utils.tree_navigation import first_name, first_tree
from jsminerr.internals.report import span_of

if TYPE_CHECKING:
    from jsminerr.semantics.ast_builder.builder import ASTBuilder


def parse_params(params: Optional[Tree]) -> List[Param]:
    if params is None:
        return []
    return [
        Param(name=str(tok), loc=span_of(tok))
        for tok in params.children
        if isinstance(tok, Token) and tok.type == "NAME"
    ]


def parse_funcdecl(t: Tree, ast_builder: 'ASTBuilder') -> FuncDecl:
    """function NAME(params) { body }"""
    name_tok = first_name(t.children)
    return FuncDecl(
        name=str(name_tok),
        params=parse_params(first_tree(t.children, "params")),
        body=ast_builder._block(first_tree(t.children, "block")),
        name_span=span_of(name_tok),
        loc=span_of(t),
    )
