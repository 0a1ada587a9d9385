"""Shared parse exception handling."""
from __future__ import annotations

from lark import UnexpectedInput

from jsminerr.internals.report import Reporter, Span
from jsminerr.semantics.ast_builder import JsSyntaxError, InvalidAssignmentTarget


def handle_parse_exception(exc: Exception, reporter: Reporter) -> bool:
    """Handle a parse exception by emitting diagnostics through the reporter.

    Args:
        exc: The exception to handle.
        reporter: Reporter for error/warning collection.

    Returns:
        True if the exception was handled, False otherwise.
    """
    from jsminerr.internals import errors as er
    from jsminerr.internals.parser import improve_parse_error

    if isinstance(exc, InvalidAssignmentTarget):
        er.emit(reporter, er.ERR.CE2002, exc.span, target=exc.target)
        return True

    if isinstance(exc, JsSyntaxError):
        er.emit(reporter, er.ERR.CE2001, exc.span, detail=str(exc))
        return True

    if isinstance(exc, UnexpectedInput):
        line = getattr(exc, "line", None)
        col = getattr(exc, "column", None)
        span = None
        if isinstance(line, int) and isinstance(col, int) and line > 0:
            span = Span(line, col, line, col + 1)
        er.emit(reporter, er.ERR.CE2001, span, detail=improve_parse_error(exc))
        return True

    return False
