"""Lark parser setup and AST construction."""
from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path

from lark import Lark, UnexpectedInput

from jsminerr.semantics.ast import Program
from jsminerr.semantics.ast_builder import ASTBuilder
from jsminerr.internals.brace_lexer import BraceLexer

GRAMMAR_PATH = Path(__file__).parent.parent / "grammar.lark"


@lru_cache(maxsize=1)
def get_parser() -> Lark:
    """Build the LALR parser once; the grammar is static."""
    return Lark.open(
        str(GRAMMAR_PATH),
        start="program",
        parser="lalr",
        lexer="contextual",
        propagate_positions=True,
        maybe_placeholders=False,
        postlex=BraceLexer(),
    )


_TOKEN_NAMES = {
    "_SEMI": "';'",
    "_RPAR": "')'",
    "_LPAR": "'('",
    "_RBRACE": "'}'",
    "_LBRACE": "'{'",
    "_OBJ_RBRACE": "'}'",
    "_RSQB": "']'",
    "_COMMA": "','",
    "_COLON": "':'",
}


def improve_parse_error(e: UnexpectedInput) -> str:
    """Condense a Lark error into a one-line message."""
    error_text = str(e).strip()
    first_line = error_text.splitlines()[0] if error_text else "unexpected input"

    expected = getattr(e, "expected", None) or getattr(e, "allowed", None)
    if expected and "_SEMI" in expected:
        return f"{first_line} (missing ';'? statements must be terminated explicitly)"
    if expected:
        names = sorted(_TOKEN_NAMES.get(name, name) for name in expected)
        if len(names) <= 4:
            return f"{first_line}; expected one of: {', '.join(names)}"
    return re.sub(r"\s+", " ", first_line)


def parse_to_ast(src: str, dump_parse: bool = False) -> Program:
    """Parse JavaScript source code into an AST.

    Raises:
        lark.UnexpectedInput: the source does not match the grammar.
        JsSyntaxError: the tree matched but is not valid JavaScript
            (for example an assignment to a call).
    """
    tree = get_parser().parse(src)
    if dump_parse:
        print(tree.pretty())
    return ASTBuilder().build(tree)
