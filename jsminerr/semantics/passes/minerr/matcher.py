"""Recognition of minErr call sites.

Two call shapes create a minErr error:

    fooMinErr(code, message, ...)           direct form, namespace "foo"
    minErr('foo')(code, message, ...)       curried form, namespace "foo"

Both shapes are represented as plain dataclasses sharing the same fields,
so callers can treat a match uniformly and still tell the forms apart.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Union

from jsminerr.semantics.ast import Call, Expr, Name
from jsminerr.semantics.passes.const_eval import fold_string


@dataclass
class DirectForm:
    """`<namespace><suffix>(code, message, ...)`"""
    call: Call
    namespace: str
    code: Expr
    message: Expr
    trailing: List[Expr]


@dataclass
class CurriedForm:
    """`<factory>(namespace)(code, message, ...)`"""
    call: Call
    namespace: str
    code: Expr
    message: Expr
    trailing: List[Expr]


MinerrCall = Union[DirectForm, CurriedForm]


def direct_namespace(callee: Expr, suffix: str) -> Optional[str]:
    """Namespace named by a direct-form callee, casing kept as written."""
    if not isinstance(callee, Name):
        return None
    if len(callee.id) <= len(suffix) or not callee.id.endswith(suffix):
        return None
    return callee.id[:-len(suffix)]


def curried_namespace(callee: Expr, factory_name: str) -> Optional[str]:
    """Namespace passed to the factory in a curried-form callee.

    The factory call must take exactly one argument and that argument must be
    a constant string; otherwise the call is not treated as a minErr call.
    """
    if not isinstance(callee, Call):
        return None
    if not (isinstance(callee.callee, Name) and callee.callee.id == factory_name):
        return None
    if len(callee.args) != 1:
        return None
    return fold_string(callee.args[0])


def match_call(call: Call, factory_name: str, suffix: str) -> Optional[MinerrCall]:
    """Classify `call` as a minErr invocation, or return None.

    A call with fewer than two arguments never matches: without a message
    there is nothing to extract (this also covers `var e = minErr('ng');`).
    """
    if len(call.args) < 2:
        return None
    code, message, *trailing = call.args

    namespace = direct_namespace(call.callee, suffix)
    if namespace is not None:
        return DirectForm(call, namespace, code, message, list(trailing))

    namespace = curried_namespace(call.callee, factory_name)
    if namespace is not None:
        return CurriedForm(call, namespace, code, message, list(trailing))

    return None
