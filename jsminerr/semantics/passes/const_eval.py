# semantics/passes/const_eval.py
"""Compile-time string folding.

minErr codes and message templates have to be known while compiling so they
can be moved out of the output. This module decides whether an argument
expression is such a constant.

Allowed:
- String literals
- `+` between two foldable operands, at any nesting depth (a surrogate pair
  split across two literals is joined into one code point)

Everything else (names, calls, numbers, other operators) does not fold.
"""
from __future__ import annotations
from typing import Optional

from jsminerr.semantics.ast import Expr, StringLit, BinaryOp
from jsminerr.semantics.ast_builder.utils.string_processing import join_surrogates


def fold_string(expr: Expr) -> Optional[str]:
    """Return the constant string value of `expr`, or None if it is not constant.

    Concatenation is evaluated left to right, so `'a' + 'b' + 'c'`,
    `'ab' + 'c'` and `'abc'` all fold to the same value.
    """
    if isinstance(expr, StringLit):
        return expr.value
    if isinstance(expr, BinaryOp) and expr.op == "+":
        left = fold_string(expr.left)
        if left is None:
            return None
        right = fold_string(expr.right)
        if right is None:
            return None
        return join_surrogates(left + right)
    return None
