# internals/brace_lexer.py
"""
Postlexer that tells blocks from object literals, and declarations from
function expressions.

Problem:
--------
JavaScript reuses `{` for blocks and object literals, and `function` for both
declarations and expressions. At the start of a statement both readings are
possible to an LALR parser:

    {}                 block or empty object?
    function f() {}    declaration or expression statement?

The language resolves this by position: a statement never starts with an
object literal or a function expression. The parser cannot see that rule, so
this postlexer applies it from the previous significant token.

Solution:
---------
- `{` following `;`, `{`/`}` of a block, `)`, `else`, `do`, `try`, `finally`
  or the start of input opens a block. Anywhere else it opens an object
  literal and is retyped to _OBJ_LBRACE.
- A stack remembers which kind each `{` opened so the matching `}` can be
  retyped to _OBJ_RBRACE.
- `function` in statement position is retyped to _FUNCTION_DECL.

Examples:
---------
- if (x) { a(); }            → block
- var o = { a: 1 };           → object literal
- return {};                  → object literal
- (function () {})();         → function expression, block body
- function f() { return; }    → declaration
"""
from __future__ import annotations
from typing import Iterator, List

from lark import Token


_STATEMENT_START = frozenset({
    None, "_SEMI", "_LBRACE", "_RBRACE", "_RPAR", "_ELSE", "_DO", "_TRY", "_FINALLY",
})


class BraceLexer:
    """Postlexer retyping `{`, `}` and `function` by context."""

    always_accept = ("_LBRACE", "_RBRACE", "_FUNCTION")

    def __init__(self) -> None:
        self._reset()

    def _reset(self) -> None:
        self.prev_type = None
        self.braces: List[str] = []

    def process(self, stream: Iterator[Token]) -> Iterator[Token]:
        self._reset()
        for token in stream:
            ttype = token.type
            if ttype == "_LBRACE":
                if self.prev_type not in _STATEMENT_START:
                    token = Token.new_borrow_pos("_OBJ_LBRACE", token.value, token)
                self.braces.append(token.type)
            elif ttype == "_RBRACE":
                opener = self.braces.pop() if self.braces else "_LBRACE"
                if opener == "_OBJ_LBRACE":
                    token = Token.new_borrow_pos("_OBJ_RBRACE", token.value, token)
            elif ttype == "_FUNCTION" and self.prev_type in _STATEMENT_START:
                token = Token.new_borrow_pos("_FUNCTION_DECL", token.value, token)
            self.prev_type = token.type
            yield token
