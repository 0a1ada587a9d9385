"""Variable declaration parsing (var / let / const)."""
from __future__ import annotations
from typing import TYPE_CHECKING, cast
from lark import Tree, Token
from jsminerr.semantics.ast import VarDecl, VarDeclarator, VarKind
from jsminerr.semantics.ast_builder.exceptions import JsSyntaxError
from jsminerr.semantics.ast_builder.utils.tree_navigation import first_name, first_token, tree_children
from jsminerr.internals.report import span_of

if TYPE_CHECKING:
    from jsminerr.semantics.ast_builder.builder import ASTBuilder


def parse_vardecl(t: Tree, ast_builder: 'ASTBuilder') -> VarDecl:
    """var_decl: (VAR | LET | CONST) declarator ("," declarator)*"""
    kind_tok = first_token(t.children)
    declarations = []
    for d in tree_children(t):
        name_tok = first_name(d.children)
        init = None
        if len(d.children) > 1:
            op_tok = d.children[1]
            if isinstance(op_tok, Token) and op_tok.value != "=":
                raise JsSyntaxError(f"unexpected '{op_tok.value}' in declaration of '{name_tok}'", span_of(op_tok))
            init = ast_builder._expr(d.children[2])
        declarations.append(VarDeclarator(name=str(name_tok), init=init, loc=span_of(d)))
    return VarDecl(kind=cast(VarKind, str(kind_tok.value)), declarations=declarations, loc=span_of(t))
