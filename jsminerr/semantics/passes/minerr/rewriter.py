"""Call-site rewriting for matched minErr calls."""
from __future__ import annotations
from typing import Sequence

from jsminerr.semantics.ast import Node, Call, New, Name, Throw
from jsminerr.semantics.passes.minerr.matcher import MinerrCall

ERROR_CONSTRUCTOR = "Error"


def strip_message(match: MinerrCall) -> Call:
    """Same call without its message argument.

    The callee and the remaining argument nodes are reused as they are.
    """
    call = match.call
    return Call(callee=call.callee, args=[match.code, *match.trailing], loc=call.loc)


def is_thrown_error_argument(call: Call, parents: Sequence[Node]) -> bool:
    """True for `throw new Error(call)` and `throw Error(call)`.

    `parents` is the chain of enclosing nodes of `call`, innermost last.
    """
    if len(parents) < 2:
        return False
    wrapper, stmt = parents[-1], parents[-2]
    if not isinstance(wrapper, (New, Call)):
        return False
    if not (isinstance(wrapper.callee, Name) and wrapper.callee.id == ERROR_CONSTRUCTOR):
        return False
    if wrapper.args is None or len(wrapper.args) != 1 or wrapper.args[0] is not call:
        return False
    return isinstance(stmt, Throw) and stmt.value is wrapper
